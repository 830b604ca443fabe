"""Shared fixtures: an in-memory RecordStore fake, schema factories, and a SQLite-backed store."""

import os
import uuid
from datetime import datetime, timedelta, timezone

# Must be set before app.core.config is imported anywhere
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401 - register all models
from app.core.enums import ExerciseType, SessionStatus
from app.db.base import Base
from app.schemas.exercise import ExerciseTarget
from app.schemas.record import PersonalRecordCreate, PersonalRecordRead
from app.schemas.session import WorkoutSessionRead
from app.schemas.set_log import SetLogCreate, SetLogRead, SetMagnitudesUpdate
from app.services.store import SqlAlchemyStore

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
PROGRAM_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")
BASE_TIME = datetime(2026, 10, 1, 18, 0, tzinfo=timezone.utc)


class InMemoryStore:
    """RecordStore fake. `calls` records write operations in order."""

    def __init__(self):
        self.logs: dict[uuid.UUID, SetLogRead] = {}
        self.records: dict[uuid.UUID, PersonalRecordRead] = {}
        self.sessions: dict[uuid.UUID, WorkoutSessionRead] = {}
        self.program_exercises: dict[uuid.UUID, list[ExerciseTarget]] = {}
        self.calls: list[tuple] = []

    async def get_session_logs(self, session_id):
        logs = [log for log in self.logs.values() if log.session_id == session_id]
        return sorted(logs, key=lambda log: log.logged_at)

    async def get_personal_records(self, user_id, current_only=True):
        return [
            r for r in self.records.values() if r.user_id == user_id and (r.is_current or not current_only)
        ]

    async def get_record_history(self, record_id):
        history = []
        while record_id is not None and record_id in self.records:
            record = self.records[record_id]
            history.append(record)
            record_id = record.previous_record_id
        return history

    async def save_new_record(self, record: PersonalRecordCreate):
        saved = PersonalRecordRead(
            id=uuid.uuid4(), created_at=datetime.now(timezone.utc), **record.model_dump()
        )
        self.records[saved.id] = saved
        self.calls.append(("save_new_record", saved.id))
        return saved

    async def demote_record(self, record_id):
        self.records[record_id] = self.records[record_id].model_copy(update={"is_current": False})
        self.calls.append(("demote_record", record_id))

    async def get_in_progress_session(self, user_id, program_id):
        for session in self.sessions.values():
            if (
                session.user_id == user_id
                and session.program_id == program_id
                and session.status == SessionStatus.IN_PROGRESS
            ):
                return session
        return None

    async def get_session(self, session_id):
        return self.sessions.get(session_id)

    async def get_user_sessions(self, user_id, status=None):
        sessions = [
            s for s in self.sessions.values() if s.user_id == user_id and (status is None or s.status == status)
        ]
        return sorted(sessions, key=lambda s: s.started_at, reverse=True)

    async def create_session(self, user_id, program_id, program_name, started_at):
        session = WorkoutSessionRead(
            id=uuid.uuid4(),
            user_id=user_id,
            program_id=program_id,
            program_name=program_name,
            started_at=started_at,
            status=SessionStatus.IN_PROGRESS,
        )
        self.sessions[session.id] = session
        self.calls.append(("create_session", session.id))
        return session

    async def update_session_status(self, session_id, status, completed_at=None, total_duration=None):
        self.sessions[session_id] = self.sessions[session_id].model_copy(
            update={"status": status, "completed_at": completed_at, "total_duration": total_duration}
        )
        self.calls.append(("update_session_status", session_id, status))

    async def save_set_log(self, entry: SetLogCreate):
        saved = SetLogRead(id=uuid.uuid4(), **entry.model_dump())
        self.logs[saved.id] = saved
        self.calls.append(("save_set_log", saved.id))
        return saved

    async def update_set_log(self, log_id, magnitudes: SetMagnitudesUpdate):
        self.logs[log_id] = self.logs[log_id].model_copy(update=magnitudes.model_dump(exclude_none=True))
        self.calls.append(("update_set_log", log_id))

    async def get_program_exercises(self, program_id):
        return list(self.program_exercises.get(program_id, []))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def make_log():
    """Factory for SetLogRead; each call is one second after the previous one."""
    counter = {"n": 0}

    def _make(
        exercise_name="Bench Press",
        reps=0,
        weight=0,
        duration=0,
        distance=0,
        exercise_id=None,
        session_id=None,
        set_no=None,
        logged_at=None,
    ):
        counter["n"] += 1
        return SetLogRead(
            id=uuid.uuid4(),
            user_id=USER_ID,
            program_id=PROGRAM_ID,
            exercise_id=exercise_id,
            session_id=session_id,
            logged_at=logged_at or BASE_TIME + timedelta(seconds=counter["n"]),
            exercise_name=exercise_name,
            set_no=set_no or counter["n"],
            reps=reps,
            weight=weight,
            duration=duration,
            distance=distance,
        )

    return _make


@pytest.fixture
def make_exercise():
    def _make(name="Bench Press", exercise_type=ExerciseType.REPS, target_sets=3, order_index=0):
        return ExerciseTarget(
            id=uuid.uuid4(),
            program_id=PROGRAM_ID,
            exercise_name=name,
            exercise_type=exercise_type,
            target_sets=target_sets,
            order_index=order_index,
        )

    return _make


@pytest.fixture
def make_record():
    def _make(
        exercise_name="bench press",
        exercise_type=ExerciseType.REPS,
        weight=None,
        reps=None,
        duration=None,
        distance=None,
        is_current=True,
    ):
        return PersonalRecordRead(
            id=uuid.uuid4(),
            user_id=USER_ID,
            exercise_name=exercise_name,
            exercise_type=exercise_type,
            achieved_at=BASE_TIME - timedelta(days=7),
            is_current=is_current,
            record_weight=weight,
            record_reps=reps,
            record_duration=duration,
            record_distance=distance,
        )

    return _make


@pytest_asyncio.fixture
async def session_maker():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_store(session_maker):
    async with session_maker() as db:
        yield SqlAlchemyStore(db)
        await db.rollback()
