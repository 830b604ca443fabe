"""Shared enums for models and API."""

from enum import Enum


class ExerciseType(str, Enum):
    """How a set's performance is measured."""

    REPS = "reps"  # Weight x repetitions
    TIME = "time"  # Hold / duration in seconds (e.g. Planks)
    DISTANCE = "distance"  # Meters covered


class SessionStatus(str, Enum):
    """Workout session lifecycle. Completed and cancelled are terminal."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
