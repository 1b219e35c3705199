"""
Populate the database with a demo workspace.

Run with ``python -m getitdone.seed``. Existing rows are removed first.
Due dates are relative to the moment of seeding so every view has content.
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import logging

from sqlmodel import Session, select
from sqlalchemy import delete

from getitdone.config import Settings, get_now, get_settings
from getitdone.models import Category, Goal, Project, Tag, Task, TaskTagLink
from getitdone.services.task_views import OVERDUE, THIS_WEEK, count_views

logger = logging.getLogger(__name__)

CATEGORIES = [
    ("Work", "#3b82f6"),
    ("Personal", "#10b981"),
    ("Health & Fitness", "#ef4444"),
    ("Finance", "#f59e0b"),
    ("Learning", "#8b5cf6"),
    ("Home", "#ec4899"),
    ("Social", "#06b6d4"),
]

PROJECTS = [
    ("Website Redesign", "Complete overhaul of the company website with modern UI/UX"),
    ("Mobile App MVP", "Build the first version of the mobile app for iOS and Android"),
    ("Home Renovation", "Kitchen and bathroom renovation project"),
    ("Budget Tracker", "Personal finance tracking side project"),
    ("Fitness Challenge", "90-day fitness transformation challenge"),
    ("Book Club", "Organize and participate in monthly book club meetings"),
]

GOALS = [
    ("Get promoted to Senior Developer", "Lead key projects and pass review", "2026-06-30"),
    ("Run a half marathon", "Train consistently and complete a 21K race", "2026-05-15"),
    ("Save $10,000 emergency fund", "Build an emergency fund by saving monthly", "2026-12-31"),
    ("Read 24 books this year", "Two books per month across different genres", "2026-12-31"),
]

TAGS = [
    "urgent", "quick-win", "blocked", "follow-up", "deep-work", "meeting",
    "review", "creative", "admin", "research", "automation", "documentation",
]

# (title, days from now, priority, status, project, category, goal, tags, recurrence)
TASKS = [
    ("Design new homepage wireframe", 3, 1, "in_progress", "Website Redesign", "Work",
     "Get promoted", ["deep-work", "creative"], None),
    ("Set up CI/CD pipeline for staging", 5, 1, "todo", "Website Redesign", "Work",
     "Get promoted", ["automation", "deep-work"], None),
    ("Review auth refactor PR", 1, 2, "todo", "Website Redesign", "Work",
     None, ["review", "urgent"], None),
    ("Migrate database to new cluster", 14, 2, "todo", "Website Redesign", "Work",
     None, ["deep-work", "blocked"], None),
    ("Create React Native project scaffold", 4, 1, "done", "Mobile App MVP", "Work",
     "Get promoted", ["deep-work"], None),
    ("User testing session, round 1", 21, 2, "todo", "Mobile App MVP", "Work",
     None, ["meeting", "follow-up"], None),
    ("Get quotes from 3 contractors", 5, 2, "in_progress", "Home Renovation", "Home",
     None, ["follow-up", "research"], None),
    ("Fix leaking kitchen faucet", 2, 1, "todo", None, "Home",
     None, ["urgent", "quick-win"], None),
    ("Declutter garage", 15, 4, "todo", None, "Home", None, ["quick-win"], None),
    ("Morning run, 10K", 0, 2, "todo", "Fitness Challenge", "Health & Fitness",
     "Run a half marathon", ["quick-win"], "FREQ=WEEKLY;BYDAY=MO,WE,FR"),
    ("Book annual health checkup", 3, 1, "todo", None, "Health & Fitness",
     None, ["urgent", "admin"], None),
    ("Review monthly expenses", 1, 2, "todo", "Budget Tracker", "Finance",
     "Save $10,000", ["admin"], "FREQ=MONTHLY;BYMONTHDAY=1"),
    ("File tax documents", 30, 2, "todo", None, "Finance",
     None, ["admin", "documentation"], None),
    ("Cancel unused subscriptions", 3, 2, "in_progress", None, "Finance",
     "Save $10,000", ["quick-win", "admin"], None),
    ("Book club meeting", 8, 3, "todo", "Book Club", "Social",
     "Read 24 books", ["meeting"], None),
    ("Call mom", 0, 2, "todo", None, "Social", None, ["quick-win"], "FREQ=WEEKLY;BYDAY=SU"),
    ("Renew passport", 20, 2, "todo", None, "Personal", None, ["admin"], None),
    ("Submit expense report", -5, 1, "todo", None, "Work", None, ["urgent", "admin"], None),
    ("Reply to client email", -2, 1, "todo", None, "Work", None, ["urgent", "follow-up"], None),
    ("Pay electricity bill", -3, 1, "todo", None, "Finance", None, ["urgent", "quick-win"], None),
    ("Set up development environment", -14, 2, "done", "Website Redesign", "Work",
     None, ["automation"], None),
    ("Set up budget spreadsheet", -25, 2, "done", "Budget Tracker", "Finance",
     "Save $10,000", ["admin", "automation"], None),
    ("Clean out email inbox", -8, 4, "done", None, "Personal", None, ["quick-win", "admin"], None),
]


def clear(session: Session) -> None:
    """Delete every row, link rows first."""
    for model in (TaskTagLink, Task, Tag, Goal, Category, Project):
        session.exec(delete(model))
    session.commit()


def _goal_id(goals: List[Goal], prefix: Optional[str]) -> Optional[str]:
    if prefix is None:
        return None
    return next(g.id for g in goals if g.title.startswith(prefix))


def seed(
    session: Session,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, int]:
    """Replace the database contents with the demo workspace; returns row counts."""
    now = now or get_now()
    settings = settings or get_settings()
    clear(session)

    categories = {name: Category(name=name, color=color) for name, color in CATEGORIES}
    projects = {name: Project(name=name, description=description) for name, description in PROJECTS}
    goals = [
        Goal(title=title, description=description, target_date=datetime.fromisoformat(target))
        for title, description, target in GOALS
    ]
    tags = {name: Tag(name=name) for name in TAGS}
    session.add_all([*categories.values(), *projects.values(), *goals, *tags.values()])
    session.flush()

    for title, days, priority, status, project, category, goal, tag_names, rule in TASKS:
        task = Task(
            title=title,
            due_date=now + timedelta(days=days),
            priority=priority,
            status=status,
            project_id=projects[project].id if project else None,
            category_id=categories[category].id if category else None,
            goal_id=_goal_id(goals, goal),
            is_recurring=rule is not None,
            recurrence_rule=rule or "",
        )
        task.tags = [tags[name] for name in tag_names]
        session.add(task)
    session.commit()

    tasks = list(session.exec(select(Task)).all())
    views = count_views(tasks, now, settings.week_start, settings.upcoming_weeks)
    summary = {
        "categories": len(categories),
        "projects": len(projects),
        "goals": len(goals),
        "tags": len(tags),
        "tasks": len(tasks),
        "overdue": views[OVERDUE],
        "this_week": views[THIS_WEEK],
        "recurring": sum(1 for t in tasks if t.is_recurring),
    }
    logger.info(f"Seed complete: {summary}")
    return summary


if __name__ == "__main__":
    from getitdone.db.config import engine
    from getitdone.db.init import init_db
    from getitdone.utils.logger import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)
    init_db(engine)
    with Session(engine) as session:
        seed(session, settings=settings)
