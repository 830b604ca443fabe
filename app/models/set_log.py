"""SetLog model - append-only log of completed sets."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class SetLog(Base):
    """One completed set. Only the magnitudes relevant to the exercise type are non-zero
    (reps+weight, duration, or distance); the rest are stored as 0, not NULL.
    Magnitudes may be corrected in place; identity and set_no never change."""

    __tablename__ = "set_logs"
    __table_args__ = (
        Index("ix_set_logs_session_logged_at", "session_id", "logged_at"),
        Index("ix_set_logs_user_id", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    program_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    exercise_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    session_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_sessions.id", ondelete="SET NULL"), nullable=True
    )
    logged_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    set_no: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-based per exercise
    reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    weight: Mapped[float] = mapped_column(Float, default=0, nullable=False)  # kg
    duration: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # seconds
    distance: Mapped[float] = mapped_column(Float, default=0, nullable=False)  # meters
    comment: Mapped[str | None] = mapped_column(String(500), nullable=True)

    session: Mapped["WorkoutSession | None"] = relationship("WorkoutSession", back_populates="set_logs")
