"""Pytest fixtures for API and service tests."""

import os
from collections.abc import AsyncGenerator, Generator
from datetime import datetime, timezone

os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db import models  # noqa: F401  # Imported for side effects
from app.db.base import Base
from app.db.models import FlashCard, LearningProgress
from app.core.srs.state import ProgressState
from app.main import create_app

NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.query(LearningProgress).delete()
        db.query(FlashCard).delete()
        db.commit()
        db.close()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def async_client(db_session: Session) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app()

    async def override_get_db() -> AsyncGenerator[Session, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def finnish_cards(db_session):
    """Three cards; the first two are due at NOW, the third a week later."""

    cards = [
        FlashCard(
            finnish_word="kissa",
            definition="kotieläin, joka naukuu",
            turkish_meaning="kedi",
            english_meaning="cat",
        ),
        FlashCard(
            finnish_word="talo",
            definition="rakennus, jossa asutaan",
            turkish_meaning="ev",
            english_meaning="house",
        ),
        FlashCard(
            finnish_word="kirja",
            definition="sidottu teos",
            turkish_meaning="kitap",
            english_meaning="book",
        ),
    ]
    db_session.add_all(cards)
    db_session.flush()

    states = [
        ProgressState.new(cards[0].id, NOW),
        ProgressState(
            card_id=cards[1].id,
            interval=3,
            repetitions=2,
            ease_factor=1.9,
            quality=4,
            last_review_date=datetime(2024, 2, 27, 9, 30, tzinfo=timezone.utc),
            next_review_date=datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
            created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        ),
        ProgressState(
            card_id=cards[2].id,
            interval=7,
            repetitions=3,
            ease_factor=2.7,
            quality=5,
            last_review_date=datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc),
            next_review_date=datetime(2024, 3, 8, 8, 0, tzinfo=timezone.utc),
            created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        ),
    ]
    db_session.add_all(LearningProgress.from_state(state) for state in states)
    db_session.commit()
    return cards
