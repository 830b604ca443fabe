"""Workout session schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import SessionStatus
from app.schemas.exercise import ExerciseTarget
from app.schemas.record import NewRecordSummary
from app.schemas.set_log import SetLogRead, SetMagnitudes


class WorkoutSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    program_id: UUID
    program_name: str
    started_at: datetime
    completed_at: datetime | None = None
    total_duration: int | None = None
    status: SessionStatus


class ResumePosition(BaseModel):
    """Where logging continues: index into the program's exercises and the next set number."""

    exercise_index: int = 0
    set_number: int = 1


class SessionStartRequest(BaseModel):
    user_id: UUID
    program_id: UUID
    program_name: str = Field(..., min_length=1, max_length=255)
    started_at: datetime | None = None
    extra_sets: dict[UUID, int] = {}
    exercises: list[ExerciseTarget] | None = None  # Defaults to the stored program exercises


class ResumedSession(BaseModel):
    session: WorkoutSessionRead
    logs: list[SetLogRead] = []
    position: ResumePosition
    created: bool = False


class SetLogPayload(SetMagnitudes):
    exercise_id: UUID
    set_no: int = Field(..., ge=1)
    logged_at: datetime | None = None
    comment: str | None = Field(default=None, max_length=500)


class SessionFinish(BaseModel):
    finished_at: datetime | None = None


class SessionCompleted(BaseModel):
    session_id: UUID
    status: SessionStatus
    total_duration: int
    new_records: list[NewRecordSummary] = []
