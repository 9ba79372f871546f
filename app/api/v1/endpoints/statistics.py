"""Aggregate learning statistics endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas import StatisticsRead
from app.services.progress import ProgressService

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("", response_model=StatisticsRead)
def get_statistics(
    service: ProgressService = Depends(deps.get_progress_service),
) -> StatisticsRead:
    """Return totals, averages and the completion rate over all cards."""

    return StatisticsRead(**service.statistics().as_dict())
