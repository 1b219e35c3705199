"""
Optimistic task board.

Keeps a local copy of the task list for immediate re-rendering. Every
mutation is applied locally first and recorded as a PendingMutation; when
the server call fails, the list is restored from the last server-confirmed
snapshot and the mutation is marked rolled back.
"""
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import logging
import uuid

from getitdone.client.api import ApiError, GetItDoneClient
from getitdone.services.task_query import TaskQuery, apply_query
from getitdone.services.task_views import DEFAULT_UPCOMING_WEEKS, DEFAULT_WEEK_START, classify

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "tmp-"


class MutationState(str, Enum):
    APPLIED_LOCALLY = "applied_locally"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass
class PendingMutation:
    """One local change awaiting (or having received) the server's verdict."""

    kind: str  # create, update or delete
    task_id: str
    payload: Dict[str, Any] = field(default_factory=dict)
    state: MutationState = MutationState.APPLIED_LOCALLY
    error: Optional[str] = None
    result: Optional[dict] = None

    def confirm(self, result: Optional[dict] = None) -> None:
        self.state = MutationState.CONFIRMED
        self.result = result

    def roll_back(self, error: str) -> None:
        self.state = MutationState.ROLLED_BACK
        self.error = error


def _iso_now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


class TaskBoard:
    """
    Local task list kept in sync with the server through optimistic updates.

    ``week_start`` and ``upcoming_weeks`` must match the server's WEEK_START
    and UPCOMING_WEEKS for local views to agree with the API.
    """

    def __init__(
        self,
        client: GetItDoneClient,
        tasks: Optional[List[dict]] = None,
        week_start: int = DEFAULT_WEEK_START,
        upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
    ):
        self.client = client
        self.week_start = week_start
        self.upcoming_weeks = upcoming_weeks
        self.tasks: List[dict] = list(tasks or [])
        self.error: str = ""
        self.mutations: List[PendingMutation] = []
        self._confirmed: List[dict] = deepcopy(self.tasks)

    @property
    def confirmed(self) -> List[dict]:
        """Last task list the server agreed with."""
        return deepcopy(self._confirmed)

    def load(self, **filters) -> List[dict]:
        """Replace local state with the server's task list."""
        self.error = ""
        try:
            tasks = self.client.list_tasks(**filters)
        except ApiError as e:
            self.error = e.message
            raise
        self.tasks = list(tasks)
        self._confirmed = deepcopy(self.tasks)
        return self.tasks

    def _index(self, task_id: str) -> int:
        for i, task in enumerate(self.tasks):
            if task.get("id") == task_id:
                return i
        return -1

    def _begin(self, kind: str, task_id: str, payload: Dict[str, Any]) -> PendingMutation:
        self.error = ""
        mutation = PendingMutation(kind=kind, task_id=task_id, payload=dict(payload))
        self.mutations.append(mutation)
        return mutation

    def _confirm(self, mutation: PendingMutation, result: Optional[dict] = None) -> PendingMutation:
        mutation.confirm(result)
        self._confirmed = deepcopy(self.tasks)
        return mutation

    def _roll_back(self, mutation: PendingMutation, error: ApiError) -> PendingMutation:
        logger.info(f"Rolling back {mutation.kind} of task {mutation.task_id}: {error.message}")
        self.tasks = deepcopy(self._confirmed)
        self.error = error.message
        mutation.roll_back(error.message)
        return mutation

    def create(self, payload: Dict[str, Any]) -> PendingMutation:
        """Show the new task at the top immediately, then swap in the server's copy."""
        temp_id = f"{TEMP_ID_PREFIX}{uuid.uuid4()}"
        now = _iso_now()
        optimistic = {**payload, "id": temp_id, "createdAt": now, "updatedAt": now}
        optimistic.setdefault("status", "todo")
        self.tasks = [optimistic] + self.tasks
        mutation = self._begin("create", temp_id, payload)

        try:
            created = self.client.create_task(payload)
        except ApiError as e:
            return self._roll_back(mutation, e)

        index = self._index(temp_id)
        if created is not None and index >= 0:
            self.tasks[index] = created
        return self._confirm(mutation, created)

    def update(self, task_id: str, patch: Dict[str, Any]) -> PendingMutation:
        """Merge ``patch`` into the local task, then replace it with the server's copy."""
        mutation = self._begin("update", task_id, patch)
        index = self._index(task_id)
        if index >= 0:
            self.tasks[index] = {**self.tasks[index], **patch}

        try:
            updated = self.client.update_task(task_id, patch)
        except ApiError as e:
            return self._roll_back(mutation, e)

        index = self._index(task_id)
        if updated is not None and index >= 0:
            self.tasks[index] = updated
        return self._confirm(mutation, updated)

    def delete(self, task_id: str) -> PendingMutation:
        """Remove the task locally, restoring it if the server refuses."""
        mutation = self._begin("delete", task_id, {})
        self.tasks = [t for t in self.tasks if t.get("id") != task_id]

        try:
            self.client.delete_task(task_id)
        except ApiError as e:
            return self._roll_back(mutation, e)
        return self._confirm(mutation)

    def views_of(self, task_id: str, now: datetime) -> set:
        """Views a local task belongs to, for re-rendering before the server answers."""
        index = self._index(task_id)
        if index < 0:
            return set()
        return classify(self.tasks[index], now, self.week_start, self.upcoming_weeks)

    def visible(self, query: TaskQuery, now: datetime) -> List[dict]:
        """Local tasks filtered and sorted the same way the server would."""
        return apply_query(self.tasks, query, now, self.week_start, self.upcoming_weeks)
