"""Persistence port used by the record and session services, and its SQLAlchemy implementation.

Services receive a RecordStore at construction instead of reaching for a global
client, so tests can pass an in-memory fake. Errors from the store are never
caught here; they propagate to the caller unchanged.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import SessionStatus
from app.models.personal_record import PersonalRecord
from app.models.program_exercise import ProgramExercise
from app.models.set_log import SetLog
from app.models.workout_session import WorkoutSession
from app.schemas.exercise import ExerciseTarget
from app.schemas.record import PersonalRecordCreate, PersonalRecordRead
from app.schemas.session import WorkoutSessionRead
from app.schemas.set_log import SetLogCreate, SetLogRead, SetMagnitudesUpdate


class RecordStore(Protocol):
    """Async persistence contract consumed by the core."""

    async def get_session_logs(self, session_id: uuid.UUID) -> list[SetLogRead]:
        """Logs of a session ordered by timestamp ascending."""
        ...

    async def get_personal_records(
        self, user_id: uuid.UUID, current_only: bool = True
    ) -> list[PersonalRecordRead]: ...

    async def get_record_history(self, record_id: uuid.UUID) -> list[PersonalRecordRead]:
        """The record and every record it superseded, newest first."""
        ...

    async def save_new_record(self, record: PersonalRecordCreate) -> PersonalRecordRead: ...

    async def demote_record(self, record_id: uuid.UUID) -> None: ...

    async def get_in_progress_session(
        self, user_id: uuid.UUID, program_id: uuid.UUID
    ) -> WorkoutSessionRead | None: ...

    async def get_session(self, session_id: uuid.UUID) -> WorkoutSessionRead | None: ...

    async def get_user_sessions(
        self, user_id: uuid.UUID, status: SessionStatus | None = None
    ) -> list[WorkoutSessionRead]:
        """A user's sessions, newest first, optionally filtered by status."""
        ...

    async def create_session(
        self,
        user_id: uuid.UUID,
        program_id: uuid.UUID,
        program_name: str,
        started_at: datetime,
    ) -> WorkoutSessionRead: ...

    async def update_session_status(
        self,
        session_id: uuid.UUID,
        status: SessionStatus,
        completed_at: datetime | None = None,
        total_duration: int | None = None,
    ) -> None: ...

    async def save_set_log(self, entry: SetLogCreate) -> SetLogRead: ...

    async def update_set_log(self, log_id: uuid.UUID, magnitudes: SetMagnitudesUpdate) -> None: ...

    async def get_program_exercises(self, program_id: uuid.UUID) -> list[ExerciseTarget]: ...


class SqlAlchemyStore:
    """RecordStore over an AsyncSession. Flushes, never commits (get_db owns the transaction)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_session_logs(self, session_id: uuid.UUID) -> list[SetLogRead]:
        result = await self.db.execute(
            select(SetLog)
            .where(SetLog.session_id == session_id)
            .order_by(SetLog.logged_at, SetLog.set_no)
        )
        return [SetLogRead.model_validate(row) for row in result.scalars().all()]

    async def get_personal_records(
        self, user_id: uuid.UUID, current_only: bool = True
    ) -> list[PersonalRecordRead]:
        stmt = select(PersonalRecord).where(PersonalRecord.user_id == user_id)
        if current_only:
            stmt = stmt.where(PersonalRecord.is_current.is_(True))
        stmt = stmt.order_by(PersonalRecord.achieved_at.desc())
        result = await self.db.execute(stmt)
        return [PersonalRecordRead.model_validate(row) for row in result.scalars().all()]

    async def get_record_history(self, record_id: uuid.UUID) -> list[PersonalRecordRead]:
        history: list[PersonalRecordRead] = []
        seen: set[uuid.UUID] = set()
        next_id: uuid.UUID | None = record_id
        while next_id is not None and next_id not in seen:
            seen.add(next_id)
            result = await self.db.execute(select(PersonalRecord).where(PersonalRecord.id == next_id))
            row = result.scalar_one_or_none()
            if row is None:
                break
            history.append(PersonalRecordRead.model_validate(row))
            next_id = row.previous_record_id
        return history

    async def save_new_record(self, record: PersonalRecordCreate) -> PersonalRecordRead:
        row = PersonalRecord(**record.model_dump())
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return PersonalRecordRead.model_validate(row)

    async def demote_record(self, record_id: uuid.UUID) -> None:
        await self.db.execute(
            update(PersonalRecord).where(PersonalRecord.id == record_id).values(is_current=False)
        )
        await self.db.flush()

    async def get_in_progress_session(
        self, user_id: uuid.UUID, program_id: uuid.UUID
    ) -> WorkoutSessionRead | None:
        result = await self.db.execute(
            select(WorkoutSession)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.program_id == program_id,
                WorkoutSession.status == SessionStatus.IN_PROGRESS,
            )
            .order_by(WorkoutSession.started_at.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return WorkoutSessionRead.model_validate(row) if row else None

    async def get_session(self, session_id: uuid.UUID) -> WorkoutSessionRead | None:
        result = await self.db.execute(select(WorkoutSession).where(WorkoutSession.id == session_id))
        row = result.scalar_one_or_none()
        return WorkoutSessionRead.model_validate(row) if row else None

    async def get_user_sessions(
        self, user_id: uuid.UUID, status: SessionStatus | None = None
    ) -> list[WorkoutSessionRead]:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)
        if status is not None:
            stmt = stmt.where(WorkoutSession.status == status)
        result = await self.db.execute(stmt.order_by(WorkoutSession.started_at.desc()))
        return [WorkoutSessionRead.model_validate(row) for row in result.scalars().all()]

    async def create_session(
        self,
        user_id: uuid.UUID,
        program_id: uuid.UUID,
        program_name: str,
        started_at: datetime,
    ) -> WorkoutSessionRead:
        row = WorkoutSession(
            user_id=user_id,
            program_id=program_id,
            program_name=program_name,
            started_at=started_at,
            status=SessionStatus.IN_PROGRESS,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return WorkoutSessionRead.model_validate(row)

    async def update_session_status(
        self,
        session_id: uuid.UUID,
        status: SessionStatus,
        completed_at: datetime | None = None,
        total_duration: int | None = None,
    ) -> None:
        await self.db.execute(
            update(WorkoutSession)
            .where(WorkoutSession.id == session_id)
            .values(status=status, completed_at=completed_at, total_duration=total_duration)
        )
        await self.db.flush()

    async def save_set_log(self, entry: SetLogCreate) -> SetLogRead:
        row = SetLog(**entry.model_dump())
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return SetLogRead.model_validate(row)

    async def update_set_log(self, log_id: uuid.UUID, magnitudes: SetMagnitudesUpdate) -> None:
        data = magnitudes.model_dump(exclude_none=True)
        if not data:
            return
        await self.db.execute(update(SetLog).where(SetLog.id == log_id).values(**data))
        await self.db.flush()

    async def get_program_exercises(self, program_id: uuid.UUID) -> list[ExerciseTarget]:
        result = await self.db.execute(
            select(ProgramExercise)
            .where(ProgramExercise.program_id == program_id)
            .order_by(ProgramExercise.order_index)
        )
        return [ExerciseTarget.model_validate(row) for row in result.scalars().all()]
