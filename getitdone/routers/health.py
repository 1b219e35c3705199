"""Health check router."""
from fastapi import APIRouter, Depends
from datetime import datetime

from getitdone.config import get_now
from getitdone.schemas.stats import HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])

APP_NAME = "get IT done"


@router.get("", response_model=HealthResponse)
def health_check(now: datetime = Depends(get_now)):
    """Health check endpoint."""
    return HealthResponse(ok=True, name=APP_NAME, time=now.isoformat() + "Z")
