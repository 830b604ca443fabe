"""WorkoutSession model - one attempt at executing a program."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import SessionStatus
from app.db.base import Base


class WorkoutSession(Base):
    """A workout session: in_progress until completed or cancelled (terminal, set once).

    At most one in_progress session per (user, program) is expected; the session
    service reuses an existing one instead of creating a second.
    """

    __tablename__ = "workout_sessions"
    __table_args__ = (
        Index("ix_workout_sessions_user_program_status", "user_id", "program_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    program_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    program_name: Mapped[str] = mapped_column(String(255), nullable=False)  # Denormalized
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # Seconds
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus), default=SessionStatus.IN_PROGRESS, nullable=False
    )

    set_logs: Mapped[list["SetLog"]] = relationship("SetLog", back_populates="session")
