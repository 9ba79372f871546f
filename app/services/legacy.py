"""Import and export of the legacy JSON flash card files.

The legacy export is a pair of files in one directory: ``flash_cards.json``
(the catalog) and ``progress.json`` (one scheduling record per card).
Imports keep the card ids from the export so progress records stay linked.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger
from sqlalchemy.orm import Session

from app.core.srs.state import ProgressState
from app.db.models.card import FlashCard
from app.services.cards import CardService
from app.services.repository import (
    JsonCardCatalog,
    JsonProgressRepository,
    LegacyCardRecord,
    SqlProgressRepository,
)

CARDS_FILE = "flash_cards.json"
PROGRESS_FILE = "progress.json"


@dataclass(slots=True)
class TransferStats:
    cards: int = 0
    progress: int = 0
    skipped: int = 0


class LegacyJsonService:
    """Move cards and progress between the database and a legacy export."""

    def __init__(self, db: Session, data_dir: Path | str) -> None:
        self.db = db
        self.data_dir = Path(data_dir)
        self.catalog = JsonCardCatalog(self.data_dir / CARDS_FILE)
        self.progress_file = JsonProgressRepository(self.data_dir / PROGRESS_FILE)
        self.repository = SqlProgressRepository(db)

    def import_all(self, *, now: datetime | None = None) -> TransferStats:
        """Copy the export into the database.

        Cards without an id or whose id already exists are skipped. A card
        with no progress record starts from a fresh state. Nothing is
        committed if a record is malformed.
        """

        now = now or datetime.now(timezone.utc)
        cards = self.catalog.load_all()
        states = {state.card_id: state for state in self.progress_file.load_all(now=now)}

        stats = TransferStats()
        for record in cards:
            if record.id is None or self.db.get(FlashCard, record.id) is not None:
                stats.skipped += 1
                continue
            self.db.add(
                FlashCard(
                    id=record.id,
                    finnish_word=record.finnish_word,
                    definition=record.definition,
                    turkish_meaning=record.turkish_meaning,
                    english_meaning=record.english_meaning,
                    created_at=record.created_at or now,
                    updated_at=record.updated_at or now,
                )
            )
            self.db.flush()
            stats.cards += 1

            state = states.get(record.id) or ProgressState.new(record.id, record.created_at or now)
            self.repository.save(state)
            stats.progress += 1

        orphans = set(states) - {record.id for record in cards}
        if orphans:
            logger.warning(f"Ignoring progress for unknown cards: {sorted(orphans)}")

        self.db.commit()
        logger.info(f"Imported {stats.cards} cards from {self.data_dir} ({stats.skipped} skipped)")
        return stats

    def export_all(self) -> TransferStats:
        """Write every card and progress record to the export directory."""

        cards = [
            LegacyCardRecord(
                id=card.id,
                finnish_word=card.finnish_word,
                definition=card.definition,
                turkish_meaning=card.turkish_meaning,
                english_meaning=card.english_meaning,
                created_at=card.created_at,
                updated_at=card.updated_at,
            )
            for card in CardService(self.db).list_cards()
        ]
        states = self.repository.load_all()

        self.catalog.save_all(cards)
        self.progress_file.save_all(states)
        logger.info(f"Exported {len(cards)} cards to {self.data_dir}")
        return TransferStats(cards=len(cards), progress=len(states))
