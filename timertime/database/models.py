"""SQLAlchemy ORM models for Timer Time."""

from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class SavedSession(Base):
    """Single-row table holding the session to restore on next launch."""

    __tablename__ = "saved_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    repeat_count = Column(Integer, nullable=False, default=0)
    total_seconds = Column(Integer, nullable=False, default=0)
    remaining_seconds = Column(Integer, nullable=False, default=0)
    animation_visible = Column(Boolean, nullable=False, default=False)
    countdown_visible = Column(Boolean, nullable=False, default=False)
    restart_visible = Column(Boolean, nullable=False, default=False)
    saved_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<SavedSession total={self.total_seconds} "
            f"remaining={self.remaining_seconds} "
            f"restart={self.restart_visible}>"
        )
