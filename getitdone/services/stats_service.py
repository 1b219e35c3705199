"""Dashboard statistics computed over all tasks."""
from sqlmodel import Session, select
from typing import Any, Dict, Iterable, List
from datetime import date, datetime, timedelta
import logging

from getitdone.config import Settings
from getitdone.models import Category, Project, Task, PRIORITY_LABELS
from getitdone.services.task_views import (
    OVERDUE,
    TODAY,
    count_views,
    start_of_day,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
NO_PROJECT = "No Project"
UNKNOWN_NAME = "Unknown"
TREND_DAYS = 7


def _completed_on_or_after(tasks: Iterable[Task], since: date) -> int:
    return sum(
        1 for t in tasks
        if t.status == "done" and t.updated_at and t.updated_at.date() >= since
    )


def _count_by_name(tasks: Iterable[Task], attr: str, names: Dict[str, str], missing: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for task in tasks:
        ref = getattr(task, attr)
        key = names.get(ref, UNKNOWN_NAME) if ref else missing
        counts[key] = counts.get(key, 0) + 1
    return counts


def build_stats(
    tasks: List[Task],
    now: datetime,
    project_names: Dict[str, str],
    category_names: Dict[str, str],
    week_start: int = 0,
    upcoming_weeks: int = 4,
) -> Dict[str, Any]:
    """Pure aggregation behind GET /api/stats."""
    today = start_of_day(now)
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == "done")
    in_progress = sum(1 for t in tasks if t.status == "in_progress")
    todo = sum(1 for t in tasks if t.status == "todo")
    views = count_views(tasks, now, week_start, upcoming_weeks)

    completed_last_7 = _completed_on_or_after(tasks, today - timedelta(days=7))
    completed_last_30 = _completed_on_or_after(tasks, today - timedelta(days=30))

    by_priority = {label: 0 for label in PRIORITY_LABELS.values()}
    for task in tasks:
        label = PRIORITY_LABELS.get(task.priority)
        if label:
            by_priority[label] += 1

    trend = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        count = sum(
            1 for t in tasks
            if t.status == "done" and t.updated_at and t.updated_at.date() == day
        )
        trend.append({"date": day.isoformat(), "count": count})

    return {
        "overview": {
            "total": total,
            "completed": completed,
            "in_progress": in_progress,
            "todo": todo,
            "completion_rate": round(completed / total * 100) if total else 0,
            "overdue": views[OVERDUE],
            "due_today": views[TODAY],
        },
        "productivity": {
            "completed_last7_days": completed_last_7,
            "completed_last30_days": completed_last_30,
            "avg_tasks_per_day": round(completed_last_7 / 7, 1),
        },
        "distribution": {
            "by_priority": by_priority,
            "by_category": _count_by_name(tasks, "category_id", category_names, UNCATEGORIZED),
            "by_project": _count_by_name(tasks, "project_id", project_names, NO_PROJECT),
        },
        "trend": trend,
        "views": views,
    }


class StatsService:
    """Loads tasks and catalog names and aggregates them."""

    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings

    def get_stats(self, now: datetime) -> Dict[str, Any]:
        tasks = list(self.session.exec(select(Task)).all())
        projects = {p.id: p.name for p in self.session.exec(select(Project)).all()}
        categories = {c.id: c.name for c in self.session.exec(select(Category)).all()}
        logger.debug(f"Computing stats over {len(tasks)} task(s)")
        return build_stats(
            tasks,
            now,
            projects,
            categories,
            week_start=self.settings.week_start,
            upcoming_weeks=self.settings.upcoming_weeks,
        )
