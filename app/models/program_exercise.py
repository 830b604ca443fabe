"""ProgramExercise model - per-program exercise targets (owned by program editing)."""

from __future__ import annotations

import uuid

from sqlalchemy import Enum, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.enums import ExerciseType
from app.db.base import Base


class ProgramExercise(Base):
    """Target sets/reps/weight/duration/distance for one exercise of a program. Read-only here."""

    __tablename__ = "program_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    exercise_type: Mapped[ExerciseType] = mapped_column(
        Enum(ExerciseType), default=ExerciseType.REPS, nullable=False
    )
    target_sets: Mapped[int] = mapped_column(Integer, default=3, nullable=False)
    target_reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    target_weight: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    target_duration: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    target_distance: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
