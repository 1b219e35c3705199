"""Statistics router for the dashboard."""
from fastapi import APIRouter, Depends
from datetime import datetime
from sqlmodel import Session

from getitdone.config import Settings, get_now, get_settings
from getitdone.db.config import get_session
from getitdone.schemas.stats import StatsEnvelope
from getitdone.services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("", response_model=StatsEnvelope)
def get_stats(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
):
    """Counts, completion trend and per-view totals across all tasks."""
    stats = StatsService(session, settings).get_stats(now)
    return StatsEnvelope.model_validate({"stats": stats})
