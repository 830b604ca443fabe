"""PersonalRecord model - append-only record history per exercise key."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.enums import ExerciseType
from app.db.base import Base


class PersonalRecord(Base):
    """Best known performance for a normalized exercise name (and rep count for reps type).

    Rows are never deleted. A superseded record only has is_current flipped to False;
    the record replacing it points back via previous_record_id.
    """

    __tablename__ = "personal_records"
    __table_args__ = (
        Index("ix_personal_records_user_current", "user_id", "is_current"),
        Index("ix_personal_records_key", "user_id", "exercise_name", "exercise_type", "record_reps"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)  # Normalized
    exercise_type: Mapped[ExerciseType] = mapped_column(Enum(ExerciseType), nullable=False)
    achieved_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    session_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    log_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    previous_record_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("personal_records.id", ondelete="SET NULL"), nullable=True
    )

    # reps type
    record_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    record_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    estimated_1rm: Mapped[float | None] = mapped_column(Float, nullable=True)
    # time type
    record_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # distance type
    record_distance: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
