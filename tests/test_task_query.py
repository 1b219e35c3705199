# tests/test_task_query.py

from datetime import datetime
from itertools import permutations

from getitdone.services.task_query import (
    TaskQuery,
    apply_query,
    build_predicates,
    filter_tasks,
    resolve_sort,
    sort_tasks,
)

NOW = datetime(2026, 10, 21, 12, 0)


def task(id, **fields):
    base = {
        "id": id,
        "title": f"Task {id}",
        "description": "",
        "status": "todo",
        "priority": 2,
        "dueDate": None,
        "projectId": None,
        "categoryId": None,
        "goalId": None,
        "tags": [],
        "createdAt": f"2026-10-{10 + int(id):02d}T08:00:00Z",
    }
    base.update(fields)
    return base


TASKS = [
    task("1", title="Buy milk", priority=3, projectId="home", tags=["errand"]),
    task("2", title="Write report", description="Quarterly NUMBERS", priority=1,
         dueDate="2026-10-20", projectId="work", categoryId="office"),
    task("3", title="Call plumber", status="in_progress", dueDate="2026-10-21",
         projectId="home", tags=["errand", "urgent"]),
    task("4", title="Plan trip", status="done", dueDate="2026-10-19", goalId="travel"),
    task("5", title="Renew passport", priority=1, dueDate="2026-10-30",
         goalId="travel", tags=["urgent"]),
    task("6", title="Read book", priority=4, categoryId="leisure"),
]


def ids(tasks):
    return [t["id"] for t in tasks]


# ============================================================
# FILTERS
# ============================================================

def test_no_criteria_returns_everything_in_order():
    assert ids(filter_tasks(TASKS, TaskQuery(), NOW)) == ["1", "2", "3", "4", "5", "6"]


def test_view_filter():
    assert ids(filter_tasks(TASKS, TaskQuery(view="overdue"), NOW)) == ["2"]
    assert ids(filter_tasks(TASKS, TaskQuery(view="completed"), NOW)) == ["4"]
    assert ids(filter_tasks(TASKS, TaskQuery(view="upcoming"), NOW)) == ["5"]


def test_unknown_view_is_ignored():
    assert len(filter_tasks(TASKS, TaskQuery(view="someday"), NOW)) == len(TASKS)


def test_reference_filters():
    assert ids(filter_tasks(TASKS, TaskQuery(project_id="home"), NOW)) == ["1", "3"]
    assert ids(filter_tasks(TASKS, TaskQuery(category_id="office"), NOW)) == ["2"]
    assert ids(filter_tasks(TASKS, TaskQuery(goal_id="travel"), NOW)) == ["4", "5"]


def test_priority_and_tag_filters():
    assert ids(filter_tasks(TASKS, TaskQuery(priority=1), NOW)) == ["2", "5"]
    assert ids(filter_tasks(TASKS, TaskQuery(tag="urgent"), NOW)) == ["3", "5"]


def test_search_is_case_insensitive_over_title_and_description():
    assert ids(filter_tasks(TASKS, TaskQuery(search="MILK"), NOW)) == ["1"]
    assert ids(filter_tasks(TASKS, TaskQuery(search="numbers"), NOW)) == ["2"]


def test_search_is_literal_not_a_pattern():
    assert filter_tasks(TASKS, TaskQuery(search=".*"), NOW) == []


def test_blank_search_is_ignored():
    assert len(filter_tasks(TASKS, TaskQuery(search="   "), NOW)) == len(TASKS)


def test_status_and_view_are_combined():
    query = TaskQuery(view="active", status="in_progress")
    assert ids(filter_tasks(TASKS, query, NOW)) == ["3"]
    assert filter_tasks(TASKS, TaskQuery(view="completed", status="todo"), NOW) == []


def test_filters_compose_in_any_order():
    query = TaskQuery(view="active", project_id="home", tag="errand", search="c")
    predicates = build_predicates(query, NOW)
    assert len(predicates) == 4

    expected = ids(filter_tasks(TASKS, query, NOW))
    for order in permutations(predicates):
        remaining = TASKS
        for predicate in order:
            remaining = [t for t in remaining if predicate(t)]
        assert ids(remaining) == expected
    assert expected == ["3"]


def test_unset_criteria_add_no_predicates():
    assert build_predicates(TaskQuery(), NOW) == []


# ============================================================
# SORTING
# ============================================================

def test_default_sort_is_newest_first():
    assert ids(sort_tasks(TASKS)) == ["6", "5", "4", "3", "2", "1"]


def test_due_date_sort_puts_missing_last_in_both_directions():
    assert ids(sort_tasks(TASKS, "dueDate", "asc")) == ["4", "2", "3", "5", "1", "6"]
    assert ids(sort_tasks(TASKS, "dueDate", "desc")) == ["5", "3", "2", "4", "1", "6"]


def test_priority_sort_is_stable():
    assert ids(sort_tasks(TASKS, "priority", "asc")) == ["2", "5", "3", "4", "1", "6"]
    assert ids(sort_tasks(TASKS, "priority", "desc")) == ["6", "1", "3", "4", "2", "5"]


def test_status_sort_follows_workflow_order():
    assert ids(sort_tasks(TASKS, "status", "asc")) == ["1", "2", "5", "6", "3", "4"]
    assert ids(sort_tasks(TASKS, "status", "desc")) == ["4", "3", "1", "2", "5", "6"]


def test_unknown_status_sorts_after_done():
    tasks = [task("1", status="blocked"), task("2", status="done")]
    assert ids(sort_tasks(tasks, "status", "asc")) == ["2", "1"]


def test_sort_is_idempotent():
    for field in ("createdAt", "dueDate", "priority", "status"):
        for order in ("asc", "desc"):
            once = sort_tasks(TASKS, field, order)
            assert sort_tasks(once, field, order) == once


def test_unknown_sort_field_falls_back_to_created_desc():
    assert resolve_sort("title", "asc") == ("createdAt", True)
    assert resolve_sort(None, None) == ("createdAt", True)
    assert ids(sort_tasks(TASKS, "title", "asc")) == ids(sort_tasks(TASKS))


def test_anything_but_asc_is_descending():
    assert resolve_sort("priority", "asc") == ("priority", False)
    assert resolve_sort("priority", "ASC") == ("priority", False)
    assert resolve_sort("priority", "sideways") == ("priority", True)
    assert resolve_sort("priority", None) == ("priority", True)


def test_malformed_due_dates_sort_as_missing():
    tasks = [task("1", dueDate="garbage"), task("2", dueDate="2026-10-22")]
    assert ids(sort_tasks(tasks, "dueDate", "asc")) == ["2", "1"]


def test_sort_does_not_mutate_input():
    before = list(TASKS)
    sort_tasks(TASKS, "priority", "asc")
    assert TASKS == before


# ============================================================
# FILTER + SORT
# ============================================================

def test_apply_query_filters_then_sorts():
    query = TaskQuery(view="active", sort_by="dueDate", sort_order="asc")
    assert ids(apply_query(TASKS, query, NOW)) == ["2", "3", "5", "1", "6"]
