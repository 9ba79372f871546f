"""Storage backends for learning progress.

The scheduler never touches storage. Callers load states through a
:class:`ProgressRepository`, hand them to :class:`app.services.srs.SM2Scheduler`
and write the results back. Two backends exist: the SQLAlchemy one used by the
API and a JSON file store that reads and writes the legacy
``progress.json`` / ``flash_cards.json`` export format.
"""
from __future__ import annotations

import json
import os
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Protocol

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.srs.sm2 import DEFAULT_EASE_FACTOR, MIN_INTERVAL_DAYS
from app.core.srs.state import ProgressState, ensure_utc, utcnow
from app.db.models.progress import LearningProgress
from app.utils.exceptions import InvalidRecordError

LEGACY_DATE_FORMAT = "%Y-%m-%d"
LEGACY_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class ProgressRepository(Protocol):
    """Load-all / save-by-key access to progress states."""

    def load_all(self) -> list[ProgressState]:
        ...

    def get(self, card_id: int) -> ProgressState | None:
        ...

    def save(self, state: ProgressState) -> None:
        ...

    def save_all(self, states: Iterable[ProgressState]) -> None:
        ...


class SqlProgressRepository:
    """Progress states stored in the ``learning_progress`` table.

    Writes are flushed, not committed; the owning service decides where the
    transaction ends.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _row(self, card_id: int) -> LearningProgress | None:
        stmt = select(LearningProgress).where(LearningProgress.card_id == card_id)
        return self.db.scalars(stmt).first()

    def load_all(self) -> list[ProgressState]:
        stmt = select(LearningProgress).order_by(LearningProgress.card_id)
        return [row.to_state() for row in self.db.scalars(stmt)]

    def get(self, card_id: int) -> ProgressState | None:
        row = self._row(card_id)
        return row.to_state() if row is not None else None

    def save(self, state: ProgressState) -> None:
        row = self._row(state.card_id)
        if row is None:
            self.db.add(LearningProgress.from_state(state))
        else:
            row.apply_state(state)
        self.db.flush()

    def save_all(self, states: Iterable[ProgressState]) -> None:
        for state in states:
            self.save(state)


# ----------------------------------------------------------------------
# Legacy JSON format
# ----------------------------------------------------------------------
def _parse_legacy_datetime(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        for fmt in (LEGACY_DATETIME_FORMAT, LEGACY_DATE_FORMAT):
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return datetime.fromisoformat(value)
    return value


def _format_legacy_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return ensure_utc(value).astimezone(timezone.utc).strftime(LEGACY_DATETIME_FORMAT)


def _format_legacy_date(value: datetime | None) -> str | None:
    if value is None:
        return None
    return ensure_utc(value).astimezone(timezone.utc).strftime(LEGACY_DATE_FORMAT)


class LegacyProgressRecord(BaseModel):
    """One entry of ``progress.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    card_id: int = Field(0, alias="cardId")
    interval: int = MIN_INTERVAL_DAYS
    repetitions: int = 0
    ease_factor: float = Field(DEFAULT_EASE_FACTOR, alias="easeFactor")
    quality: int = 0
    next_review_date: datetime | None = Field(None, alias="nextReviewDate")
    last_review_date: datetime | None = Field(None, alias="lastReviewDate")
    created_at: datetime | None = Field(None, alias="createdAt")

    @field_validator("card_id", "interval", "repetitions", "ease_factor", "quality", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("next_review_date", "last_review_date", "created_at", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _parse_legacy_datetime(value)

    def to_state(self, *, now: datetime) -> ProgressState:
        return ProgressState(
            card_id=self.card_id,
            interval=self.interval,
            repetitions=self.repetitions,
            ease_factor=self.ease_factor,
            quality=self.quality,
            last_review_date=self.last_review_date or now,
            next_review_date=self.next_review_date,
            created_at=self.created_at or now,
        )

    @classmethod
    def from_state(cls, state: ProgressState) -> "LegacyProgressRecord":
        return cls(
            card_id=state.card_id,
            interval=state.interval,
            repetitions=state.repetitions,
            ease_factor=state.ease_factor,
            quality=state.quality,
            next_review_date=state.next_review_date,
            last_review_date=state.last_review_date,
            created_at=state.created_at,
        )

    def dump(self) -> dict[str, Any]:
        return {
            "cardId": self.card_id,
            "interval": self.interval,
            "repetitions": self.repetitions,
            "easeFactor": self.ease_factor,
            "quality": self.quality,
            "nextReviewDate": _format_legacy_date(self.next_review_date),
            "lastReviewDate": _format_legacy_datetime(self.last_review_date),
            "createdAt": _format_legacy_datetime(self.created_at),
        }


class LegacyCardRecord(BaseModel):
    """One entry of ``flash_cards.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    finnish_word: str = Field("", alias="finnishWord")
    definition: str = ""
    turkish_meaning: str = Field("", alias="turkishMeaning")
    english_meaning: str = Field("", alias="englishMeaning")
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    @field_validator("finnish_word", "definition", "turkish_meaning", "english_meaning", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _parse_legacy_datetime(value)

    def dump(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "finnishWord": self.finnish_word,
            "definition": self.definition,
            "turkishMeaning": self.turkish_meaning,
            "englishMeaning": self.english_meaning,
            "createdAt": _format_legacy_datetime(self.created_at),
            "updatedAt": _format_legacy_datetime(self.updated_at),
        }


def _read_json_array(path: Path) -> list[Any]:
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "[]")
    except json.JSONDecodeError as exc:
        raise InvalidRecordError(f"{path.name} is not valid JSON", {"path": str(path)}) from exc
    if not isinstance(data, list):
        raise InvalidRecordError(f"{path.name} must contain a JSON array", {"path": str(path)})
    return data


def _write_json_array(path: Path, payload: list[dict[str, Any]]) -> None:
    """Replace ``path`` in one step so readers never see a partial file."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=4, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonProgressRepository:
    """Progress states kept in a legacy ``progress.json`` file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load_all(self, *, now: datetime | None = None) -> list[ProgressState]:
        now = ensure_utc(now) or utcnow()
        states = []
        for index, item in enumerate(_read_json_array(self.path)):
            try:
                record = LegacyProgressRecord.model_validate(item)
            except ValidationError as exc:
                raise InvalidRecordError(
                    "Malformed progress record",
                    {"index": index, "errors": exc.errors(include_url=False, include_context=False)},
                ) from exc
            states.append(record.to_state(now=now))
        logger.debug(f"Loaded {len(states)} progress records from {self.path}")
        return states

    def get(self, card_id: int) -> ProgressState | None:
        return next((state for state in self.load_all() if state.card_id == card_id), None)

    def save(self, state: ProgressState) -> None:
        states = self.load_all()
        for index, existing in enumerate(states):
            if existing.card_id == state.card_id:
                states[index] = state
                break
        else:
            states.append(state)
        self.save_all(states)

    def save_all(self, states: Iterable[ProgressState]) -> None:
        payload = [LegacyProgressRecord.from_state(state).dump() for state in states]
        _write_json_array(self.path, payload)
        logger.debug(f"Wrote {len(payload)} progress records to {self.path}")


class JsonCardCatalog:
    """Flash cards kept in a legacy ``flash_cards.json`` file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load_all(self) -> list[LegacyCardRecord]:
        cards = []
        for index, item in enumerate(_read_json_array(self.path)):
            try:
                cards.append(LegacyCardRecord.model_validate(item))
            except ValidationError as exc:
                raise InvalidRecordError(
                    "Malformed card record",
                    {"index": index, "errors": exc.errors(include_url=False, include_context=False)},
                ) from exc
        return cards

    def save_all(self, cards: Iterable[LegacyCardRecord]) -> None:
        _write_json_array(self.path, [card.dump() for card in cards])
