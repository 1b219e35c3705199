"""Dashboard statistics schemas."""
from typing import Dict, List

from getitdone.schemas.base import ApiModel


class StatsOverview(ApiModel):
    total: int
    completed: int
    in_progress: int
    todo: int
    completion_rate: int
    overdue: int
    due_today: int


class StatsProductivity(ApiModel):
    completed_last7_days: int
    completed_last30_days: int
    avg_tasks_per_day: float


class StatsDistribution(ApiModel):
    by_priority: Dict[str, int]
    by_category: Dict[str, int]
    by_project: Dict[str, int]


class TrendPoint(ApiModel):
    date: str
    count: int


class Stats(ApiModel):
    overview: StatsOverview
    productivity: StatsProductivity
    distribution: StatsDistribution
    trend: List[TrendPoint]
    views: Dict[str, int]


class StatsEnvelope(ApiModel):
    stats: Stats


class HealthResponse(ApiModel):
    ok: bool
    name: str
    time: str
