"""Application configuration management."""
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    PROJECT_NAME: str = "Finnish Flash Cards"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str = Field(
        "sqlite:///./data/flashcards.db",
        description="SQLAlchemy database URL",
    )
    DEBUG: bool = Field(False, description="Echo SQL statements")

    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost", "http://localhost:8000"],
        description="Allowed CORS origins",
    )

    LEGACY_DATA_DIR: Path = Field(
        Path("data"),
        description="Directory holding flash_cards.json and progress.json exports",
    )
    DIFFICULT_CARDS_LIMIT: int = Field(
        20, ge=1, description="Default number of cards returned by the difficulty listing"
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


settings = get_settings()
