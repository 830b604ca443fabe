"""Workout session lifecycle: start or resume, log and correct sets, complete or cancel."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from app.core.enums import ExerciseType, SessionStatus
from app.core.exceptions import SessionStateError, SetValidationError
from app.schemas.exercise import ExerciseTarget
from app.schemas.session import ResumedSession, SessionCompleted, WorkoutSessionRead
from app.schemas.set_log import SetLogCreate, SetLogRead, SetMagnitudes, SetMagnitudesUpdate
from app.services.record_comparator import RecordComparator
from app.services.session_reconciler import SessionState
from app.services.store import RecordStore

logger = logging.getLogger(__name__)

_POSITIVE_FIELD = {
    ExerciseType.REPS: ("reps", "Введите количество повторений больше 0"),
    ExerciseType.TIME: ("duration", "Введите время больше 0 секунд"),
    ExerciseType.DISTANCE: ("distance", "Введите расстояние больше 0 метров"),
}
_NEGATIVE_WEIGHT = "Вес не может быть отрицательным"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_set(
    exercise_type: ExerciseType,
    reps: int = 0,
    weight: float = 0,
    duration: int = 0,
    distance: float = 0,
) -> SetMagnitudes:
    """
    Check the magnitude that matters for the exercise type and zero out the others.
    Raises SetValidationError with a user-facing message; nothing is written.
    """
    field_name, message = _POSITIVE_FIELD[exercise_type]
    values = {"reps": reps, "weight": weight, "duration": duration, "distance": distance}
    if values[field_name] <= 0:
        raise SetValidationError(message, field=field_name)
    if exercise_type == ExerciseType.REPS:
        if weight < 0:
            raise SetValidationError(_NEGATIVE_WEIGHT, field="weight")
        return SetMagnitudes(reps=reps, weight=weight)
    if exercise_type == ExerciseType.TIME:
        return SetMagnitudes(duration=duration)
    return SetMagnitudes(distance=distance)


def validate_set_update(exercise_type: ExerciseType, update: SetMagnitudesUpdate) -> SetMagnitudesUpdate:
    """Same rules for an in-place correction; only fields of the exercise type are kept."""
    field_name, message = _POSITIVE_FIELD[exercise_type]
    allowed = {field_name, "weight"} if exercise_type == ExerciseType.REPS else {field_name}
    data = {k: v for k, v in update.model_dump(exclude_none=True).items() if k in allowed}
    if field_name in data and data[field_name] <= 0:
        raise SetValidationError(message, field=field_name)
    if data.get("weight", 0) < 0:
        raise SetValidationError(_NEGATIVE_WEIGHT, field="weight")
    return SetMagnitudesUpdate(**data)


class WorkoutSessionService:
    """Session operations over an injected store. Store errors propagate unchanged."""

    def __init__(self, store: RecordStore, comparator: RecordComparator | None = None):
        self.store = store
        self.comparator = comparator or RecordComparator(store)

    async def start_or_resume(
        self,
        user_id: UUID,
        program_id: UUID,
        program_name: str,
        exercises: Sequence[ExerciseTarget],
        started_at: datetime | None = None,
        state: SessionState | None = None,
    ) -> ResumedSession:
        """Reuse the in-progress session for this program if there is one, else create it."""
        state = state or SessionState()
        existing = await self.store.get_in_progress_session(user_id, program_id)
        if existing is not None:
            logs = await self.store.get_session_logs(existing.id)
            position = state.resume(exercises, logs)
            logger.info(
                "Resuming session %s at exercise %d set %d (%d logs)",
                existing.id,
                position.exercise_index,
                position.set_number,
                len(logs),
            )
            return ResumedSession(session=existing, logs=logs, position=position, created=False)

        session = await self.store.create_session(
            user_id,
            program_id,
            program_name,
            started_at or datetime.now(timezone.utc),
        )
        logger.info("Started session %s for program %s", session.id, program_id)
        return ResumedSession(session=session, logs=[], position=state.resume(exercises, []), created=True)

    async def log_set(
        self,
        session: WorkoutSessionRead,
        exercise: ExerciseTarget,
        set_no: int,
        reps: int = 0,
        weight: float = 0,
        duration: int = 0,
        distance: float = 0,
        logged_at: datetime | None = None,
        comment: str | None = None,
    ) -> SetLogRead:
        if session.status != SessionStatus.IN_PROGRESS:
            raise SessionStateError(f"Session {session.id} is {session.status.value}")
        magnitudes = validate_set(exercise.exercise_type, reps, weight, duration, distance)
        entry = SetLogCreate(
            user_id=session.user_id,
            program_id=session.program_id,
            exercise_id=exercise.id,
            session_id=session.id,
            logged_at=logged_at or datetime.now(timezone.utc),
            exercise_name=exercise.exercise_name,
            set_no=set_no,
            comment=comment,
            **magnitudes.model_dump(),
        )
        return await self.store.save_set_log(entry)

    async def update_set(
        self,
        log_id: UUID,
        exercise_type: ExerciseType,
        update: SetMagnitudesUpdate,
    ) -> SetMagnitudesUpdate:
        checked = validate_set_update(exercise_type, update)
        await self.store.update_set_log(log_id, checked)
        return checked

    async def _finish(
        self,
        session: WorkoutSessionRead,
        status: SessionStatus,
        finished_at: datetime | None,
    ) -> int:
        if session.status != SessionStatus.IN_PROGRESS:
            raise SessionStateError(f"Session {session.id} is already {session.status.value}")
        finished_at = _as_utc(finished_at or datetime.now(timezone.utc))
        total_duration = max(0, int((finished_at - _as_utc(session.started_at)).total_seconds()))
        await self.store.update_session_status(session.id, status, finished_at, total_duration)
        logger.info("Session %s %s after %ds", session.id, status.value, total_duration)
        return total_duration

    async def complete(
        self,
        session: WorkoutSessionRead,
        finished_at: datetime | None = None,
        exercises: Sequence[ExerciseTarget] | None = None,
    ) -> SessionCompleted:
        """Mark the session completed, then detect personal records from its logs."""
        total_duration = await self._finish(session, SessionStatus.COMPLETED, finished_at)
        new_records = await self.comparator.process_session(session.id, session.user_id, exercises)
        return SessionCompleted(
            session_id=session.id,
            status=SessionStatus.COMPLETED,
            total_duration=total_duration,
            new_records=new_records,
        )

    async def cancel(self, session: WorkoutSessionRead, finished_at: datetime | None = None) -> int:
        return await self._finish(session, SessionStatus.CANCELLED, finished_at)
