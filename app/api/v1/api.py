"""API router for version 1."""
from fastapi import APIRouter

from app.api.v1.endpoints import cards, review, statistics


api_router = APIRouter()
api_router.include_router(cards.router)
api_router.include_router(review.router)
api_router.include_router(statistics.router)
