"""Exercise target schemas (program configuration, read-only input)."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import ExerciseType


class ExerciseTarget(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    program_id: UUID | None = None
    exercise_name: str = Field(..., min_length=1, max_length=255)
    exercise_type: ExerciseType = ExerciseType.REPS
    target_sets: int = Field(default=3, ge=0)
    target_reps: int = Field(default=0, ge=0)
    target_weight: float = Field(default=0, ge=0)
    target_duration: int = Field(default=0, ge=0)
    target_distance: float = Field(default=0, ge=0)
    order_index: int = 0
    notes: str | None = None
