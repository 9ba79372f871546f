"""Service layer package."""

from app.services.cards import CardService
from app.services.legacy import LegacyJsonService, TransferStats
from app.services.progress import CardProgress, ProgressService
from app.services.repository import (
    JsonCardCatalog,
    JsonProgressRepository,
    ProgressRepository,
    SqlProgressRepository,
)
from app.services.srs import ReviewStatistics, SM2Scheduler

__all__ = [
    "CardProgress",
    "CardService",
    "JsonCardCatalog",
    "JsonProgressRepository",
    "LegacyJsonService",
    "ProgressRepository",
    "ProgressService",
    "ReviewStatistics",
    "SM2Scheduler",
    "SqlProgressRepository",
    "TransferStats",
]
