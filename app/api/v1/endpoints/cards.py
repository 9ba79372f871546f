"""Flash card catalog endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas import CardCreate, CardCreateResponse, CardRead, CardSummary
from app.services.cards import CardService
from app.utils.exceptions import CardNotFoundError, handle_not_found_error

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=list[CardSummary])
def list_cards(service: CardService = Depends(deps.get_card_service)) -> list[CardSummary]:
    """Return every card with its word and definition."""

    return [CardSummary.model_validate(card) for card in service.list_cards()]


@router.post("", response_model=CardCreateResponse, status_code=status.HTTP_201_CREATED)
def create_card(
    payload: CardCreate,
    service: CardService = Depends(deps.get_card_service),
) -> CardCreateResponse:
    """Store a new card; it is due for review immediately."""

    card = service.create_card(**payload.model_dump())
    return CardCreateResponse(card_id=card.id)


@router.get("/{card_id}", response_model=CardRead)
def get_card(card_id: int, service: CardService = Depends(deps.get_card_service)) -> CardRead:
    """Retrieve a card by identifier."""

    try:
        card = service.get_card(card_id)
    except CardNotFoundError as exc:
        raise handle_not_found_error(exc) from exc
    return CardRead.model_validate(card)
