"""
Task list filtering and sorting.

Filters are independent predicates combined with AND; an unset criterion
adds no predicate. Sorting is stable, so tasks that compare equal keep the
order they were given in (creation order when loaded by TaskService).
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from getitdone.services.task_views import (
    DEFAULT_UPCOMING_WEEKS,
    DEFAULT_WEEK_START,
    ViewWindows,
    in_view,
    task_due_date,
    task_status,
    task_field,
)

Predicate = Callable[[Any], bool]

SORT_FIELDS = ("createdAt", "dueDate", "priority", "status")
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"

# Workflow order used when sorting by status; unknown statuses go after done
STATUS_ORDER = {"todo": 1, "in_progress": 2, "done": 3}
UNKNOWN_STATUS_RANK = 99


@dataclass
class TaskQuery:
    """Criteria accepted by the task list endpoint."""

    view: Optional[str] = None
    project_id: Optional[str] = None
    category_id: Optional[str] = None
    goal_id: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[int] = None
    tag: Optional[str] = None
    search: Optional[str] = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER


def task_tag_ids(task: Any) -> List[str]:
    if isinstance(task, Mapping):
        return [str(t) for t in (task.get("tags") or [])]
    if hasattr(task, "tag_ids"):
        return list(task.tag_ids)
    return [getattr(t, "id", t) for t in (getattr(task, "tags", None) or [])]


def _equals(names: Tuple[str, ...], expected: Any) -> Predicate:
    return lambda task: task_field(task, *names) == expected


def _matches_search(term: str) -> Predicate:
    needle = term.casefold()

    def predicate(task: Any) -> bool:
        title = task_field(task, "title") or ""
        description = task_field(task, "description") or ""
        return needle in str(title).casefold() or needle in str(description).casefold()

    return predicate


def _has_priority(priority: int) -> Predicate:
    def predicate(task: Any) -> bool:
        try:
            return int(task_field(task, "priority")) == priority
        except (TypeError, ValueError):
            return False

    return predicate


def build_predicates(
    query: TaskQuery,
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
    upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
) -> List[Predicate]:
    """One predicate per criterion that is set on ``query``."""
    predicates: List[Predicate] = []

    if query.view:
        windows = ViewWindows(now, week_start, upcoming_weeks)
        view = query.view
        predicates.append(lambda task: in_view(task, view, now, windows=windows))
    if query.project_id:
        predicates.append(_equals(("project_id", "projectId"), query.project_id))
    if query.category_id:
        predicates.append(_equals(("category_id", "categoryId"), query.category_id))
    if query.goal_id:
        predicates.append(_equals(("goal_id", "goalId"), query.goal_id))
    if query.status:
        status = getattr(query.status, "value", query.status)
        predicates.append(lambda task: task_status(task) == status)
    if query.priority is not None:
        predicates.append(_has_priority(int(query.priority)))
    if query.tag:
        tag = query.tag
        predicates.append(lambda task: tag in task_tag_ids(task))
    if query.search and query.search.strip():
        predicates.append(_matches_search(query.search.strip()))

    return predicates


def filter_tasks(
    tasks: Iterable[Any],
    query: TaskQuery,
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
    upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
) -> List[Any]:
    """Tasks satisfying every criterion in ``query``, in their original order."""
    predicates = build_predicates(query, now, week_start, upcoming_weeks)
    return [task for task in tasks if all(p(task) for p in predicates)]


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str]) -> Tuple[str, bool]:
    """
    Normalize sort parameters to ``(field, descending)``.

    An unknown field falls back to newest-first creation order. Any order
    other than ``asc`` sorts descending.
    """
    if sort_by not in SORT_FIELDS:
        return DEFAULT_SORT_BY, True
    return sort_by, (sort_order or "").strip().lower() != "asc"


def _as_naive_utc(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _priority_key(task: Any) -> Optional[int]:
    try:
        return int(task_field(task, "priority"))
    except (TypeError, ValueError):
        return None


SORT_KEYS = {
    "createdAt": lambda task: _as_naive_utc(task_field(task, "created_at", "createdAt")),
    "dueDate": task_due_date,
    "priority": _priority_key,
    "status": lambda task: STATUS_ORDER.get(task_status(task), UNKNOWN_STATUS_RANK),
}


def sort_tasks(
    tasks: Iterable[Any],
    sort_by: Optional[str] = DEFAULT_SORT_BY,
    sort_order: Optional[str] = DEFAULT_SORT_ORDER,
) -> List[Any]:
    """
    Stable sort by one field.

    Tasks with no value for the field (e.g. no due date) are placed last
    regardless of direction, keeping their relative order.
    """
    field, descending = resolve_sort(sort_by, sort_order)
    key = SORT_KEYS[field]

    keyed = [(key(task), task) for task in tasks]
    present = [pair for pair in keyed if pair[0] is not None]
    missing = [task for value, task in keyed if value is None]

    # list.sort keeps equal elements in order even with reverse=True
    present.sort(key=lambda pair: pair[0], reverse=descending)
    return [task for _, task in present] + missing


def apply_query(
    tasks: Iterable[Any],
    query: TaskQuery,
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
    upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
) -> List[Any]:
    """Filter then sort."""
    matching = filter_tasks(tasks, query, now, week_start, upcoming_weeks)
    return sort_tasks(matching, query.sort_by, query.sort_order)
