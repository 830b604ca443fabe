"""Set log schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SetMagnitudes(BaseModel):
    """Magnitude fields of a set; the ones irrelevant to the exercise type stay 0."""

    reps: int = Field(default=0, ge=0)
    weight: float = Field(default=0, ge=0)  # kg
    duration: int = Field(default=0, ge=0)  # seconds
    distance: float = Field(default=0, ge=0)  # meters


class SetMagnitudesUpdate(BaseModel):
    """Partial in-place correction of a logged set."""

    reps: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, ge=0)
    distance: float | None = Field(default=None, ge=0)


class SetLogCreate(SetMagnitudes):
    user_id: UUID
    program_id: UUID | None = None
    exercise_id: UUID | None = None
    session_id: UUID | None = None
    logged_at: datetime
    exercise_name: str = Field(..., min_length=1, max_length=255)
    set_no: int = Field(..., ge=1)
    comment: str | None = Field(default=None, max_length=500)


class SetLogRead(SetLogCreate):
    """One recorded performance as persisted."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
