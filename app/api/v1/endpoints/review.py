"""Review queue and answer submission endpoints."""
from __future__ import annotations

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.config import settings
from app.core.srs.sm2 import round_half_up
from app.schemas import DueCard, ProgressRead, ReviewAnswerRequest, ReviewAnswerResponse
from app.services.progress import CardProgress, ProgressService
from app.utils.exceptions import ProgressNotFoundError, handle_not_found_error

router = APIRouter(prefix="/review", tags=["review"])


def _calendar_date(value: datetime | None) -> date | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc).date()


def _to_due_card(item: CardProgress) -> DueCard:
    card, state = item.card, item.state
    return DueCard(
        id=card.id,
        finnish_word=card.finnish_word,
        definition=card.definition,
        turkish_meaning=card.turkish_meaning,
        english_meaning=card.english_meaning,
        progress=ProgressRead(
            interval=state.interval,
            repetitions=state.repetitions,
            ease_factor=state.ease_factor,
            next_review_date=_calendar_date(state.next_review_date),
        ),
    )


@router.get("/due", response_model=list[DueCard])
def list_due_cards(
    service: ProgressService = Depends(deps.get_progress_service),
) -> list[DueCard]:
    """Return the cards whose next review date has arrived."""

    return [_to_due_card(item) for item in service.due_cards()]


@router.get("/difficult", response_model=list[DueCard])
def list_difficult_cards(
    limit: int = Query(default=settings.DIFFICULT_CARDS_LIMIT, ge=1, le=500),
    service: ProgressService = Depends(deps.get_progress_service),
) -> list[DueCard]:
    """Return cards ordered by ease factor, hardest first."""

    return [_to_due_card(item) for item in service.difficult_cards(limit)]


@router.post("/answer", response_model=ReviewAnswerResponse)
def submit_answer(
    payload: ReviewAnswerRequest,
    service: ProgressService = Depends(deps.get_progress_service),
) -> ReviewAnswerResponse:
    """Grade an answer and return when the card is due next."""

    try:
        state = service.submit_review(payload.card_id, payload.quality)
    except ProgressNotFoundError as exc:
        raise handle_not_found_error(exc) from exc

    return ReviewAnswerResponse(
        card_id=state.card_id,
        next_review_date=_calendar_date(state.next_review_date),
        new_interval=state.interval,
        new_ease_factor=round_half_up(state.ease_factor),
        repetitions=state.repetitions,
    )
