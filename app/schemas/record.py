"""Personal record schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.core.enums import ExerciseType


class PersonalRecordCreate(BaseModel):
    user_id: UUID
    exercise_name: str  # Normalized
    exercise_type: ExerciseType
    achieved_at: datetime
    session_id: UUID | None = None
    log_id: UUID | None = None
    is_current: bool = True
    previous_record_id: UUID | None = None
    record_weight: float | None = None
    record_reps: int | None = None
    estimated_1rm: float | None = None
    record_duration: int | None = None
    record_distance: float | None = None


class PersonalRecordRead(PersonalRecordCreate):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime | None = None


class NewRecordSummary(BaseModel):
    """What changed for one exercise key after a session (for the summary screen)."""

    exercise_name: str  # Display name as logged
    exercise_type: ExerciseType
    new_value: str
    old_value: str | None = None
    improvement_percent: int | None = None
    record: PersonalRecordRead


class ProcessRecordsRequest(BaseModel):
    session_id: UUID
    user_id: UUID
