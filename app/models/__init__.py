"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.personal_record import PersonalRecord
from app.models.program_exercise import ProgramExercise
from app.models.set_log import SetLog
from app.models.workout_session import WorkoutSession

__all__ = [
    "PersonalRecord",
    "ProgramExercise",
    "SetLog",
    "WorkoutSession",
]
