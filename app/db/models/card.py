"""Flash card catalog models."""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class FlashCard(Base):
    """A Finnish word with its definition and translations."""

    __tablename__ = "flash_cards"

    id = Column(Integer, primary_key=True)
    finnish_word = Column(String(255), nullable=False, index=True)
    definition = Column(Text, nullable=False, default="")
    turkish_meaning = Column(Text, nullable=False, default="")
    english_meaning = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    progress = relationship(
        "LearningProgress", back_populates="card", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<FlashCard id={self.id!r} finnish_word={self.finnish_word!r}>"
