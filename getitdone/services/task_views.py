"""
Task view classification.

A view is a named predicate over a task used for dashboard counts and list
filtering. Classification is a pure function of the task's ``status`` and
due date and a reference instant; it never raises, so bad data in a single
task cannot break an aggregate.

Tasks may be model instances (``status`` / ``due_date`` attributes) or JSON
mappings as returned by the API (``status`` / ``dueDate`` keys).
"""
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Set

OVERDUE = "overdue"
TODAY = "today"
THIS_WEEK = "thisWeek"
UPCOMING = "upcoming"
ACTIVE = "active"
COMPLETED = "completed"

VIEWS = (OVERDUE, TODAY, THIS_WEEK, UPCOMING, ACTIVE, COMPLETED)
DATE_VIEWS = frozenset({OVERDUE, TODAY, THIS_WEEK, UPCOMING})

DONE = "done"
ACTIVE_STATUSES = frozenset({"todo", "in_progress"})

DEFAULT_WEEK_START = 0  # Monday
DEFAULT_UPCOMING_WEEKS = 4


def task_field(task: Any, *names: str) -> Any:
    if isinstance(task, Mapping):
        for name in names:
            if name in task:
                return task[name]
        return None
    for name in names:
        if hasattr(task, name):
            return getattr(task, name)
    return None


def task_status(task: Any) -> Optional[str]:
    """Status of a task as a plain string (enum members are unwrapped)."""
    raw = task_field(task, "status")
    raw = getattr(raw, "value", raw)
    return raw if isinstance(raw, str) else None


def coerce_due_date(value: Any) -> Optional[date]:
    """
    Reduce a due date to its calendar day.

    Accepts ``date``, ``datetime`` (aware values are converted to UTC first)
    and ISO-8601 strings with an optional trailing ``Z``. Anything else,
    including unparseable strings, is treated as "no due date".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            return coerce_due_date(datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    return None


def task_due_date(task: Any) -> Optional[date]:
    return coerce_due_date(task_field(task, "due_date", "dueDate"))


def start_of_day(now: datetime) -> date:
    """Normalize the reference instant to the current day."""
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()
    return now


def start_of_week(day: date, week_start: int = DEFAULT_WEEK_START) -> date:
    """First day of the calendar week containing ``day``."""
    offset = (day.weekday() - week_start) % 7
    return day - timedelta(days=offset)


class ViewWindows:
    """Date boundaries of the date-based views for one reference day."""

    def __init__(
        self,
        now: datetime,
        week_start: int = DEFAULT_WEEK_START,
        upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
    ):
        self.today = start_of_day(now)
        self.tomorrow = self.today + timedelta(days=1)
        self.next_week = start_of_week(self.today, week_start) + timedelta(weeks=1)
        self.horizon = self.next_week + timedelta(weeks=upcoming_weeks)

    def date_views(self, due: date) -> Set[str]:
        views: Set[str] = set()
        if due < self.today:
            views.add(OVERDUE)
        if self.today <= due < self.tomorrow:
            views.add(TODAY)
        if self.today <= due < self.next_week:
            views.add(THIS_WEEK)
        if self.next_week <= due < self.horizon:
            views.add(UPCOMING)
        return views


def classify(
    task: Any,
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
    upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
    windows: Optional[ViewWindows] = None,
) -> Set[str]:
    """Return the set of views ``task`` belongs to at ``now``."""
    status = task_status(task)
    if status == DONE:
        return {COMPLETED}

    views: Set[str] = set()
    if status in ACTIVE_STATUSES:
        views.add(ACTIVE)

    due = task_due_date(task)
    if due is None:
        return views

    windows = windows or ViewWindows(now, week_start, upcoming_weeks)
    return views | windows.date_views(due)


def in_view(
    task: Any,
    view: Optional[str],
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
    upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
    windows: Optional[ViewWindows] = None,
) -> bool:
    """Whether ``task`` belongs to ``view``; an empty or unknown view matches everything."""
    if not view or view not in VIEWS:
        return True
    return view in classify(task, now, week_start, upcoming_weeks, windows)


def count_views(
    tasks: Iterable[Any],
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
    upcoming_weeks: int = DEFAULT_UPCOMING_WEEKS,
) -> Dict[str, int]:
    """Number of tasks in each view; every view is present."""
    counts = {view: 0 for view in VIEWS}
    windows = ViewWindows(now, week_start, upcoming_weeks)
    for task in tasks:
        for view in classify(task, now, windows=windows):
            counts[view] += 1
    return counts
