"""Workout session endpoints: history, start/resume, log and correct sets, complete, cancel."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store
from app.core.enums import SessionStatus
from app.core.exceptions import SessionStateError, SetValidationError
from app.schemas.exercise import ExerciseTarget
from app.schemas.session import (
    ResumedSession,
    SessionCompleted,
    SessionFinish,
    SessionStartRequest,
    SetLogPayload,
    WorkoutSessionRead,
)
from app.schemas.set_log import SetLogRead, SetMagnitudesUpdate
from app.services.pr_detection import resolve_exercise_type
from app.services.session_reconciler import SessionState
from app.services.store import SqlAlchemyStore
from app.services.workout_session import WorkoutSessionService

router = APIRouter()


async def _get_session_or_404(store: SqlAlchemyStore, session_id: uuid.UUID) -> WorkoutSessionRead:
    session = await store.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


async def _get_exercise_or_404(
    store: SqlAlchemyStore, program_id: uuid.UUID, exercise_id: uuid.UUID
) -> ExerciseTarget:
    exercises = await store.get_program_exercises(program_id)
    exercise = next((e for e in exercises if e.id == exercise_id), None)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found in program")
    return exercise


@router.get("", response_model=list[WorkoutSessionRead])
async def list_sessions(
    user_id: uuid.UUID,
    status: SessionStatus | None = None,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Workout history of a user, newest first. Pass status=completed for finished workouts only."""
    return await store.get_user_sessions(user_id, status)


@router.post("/start", response_model=ResumedSession)
async def start_session(
    payload: SessionStartRequest,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Resume the in-progress session for this program (with resume position) or start a new one."""
    exercises = payload.exercises
    if exercises is None:
        exercises = await store.get_program_exercises(payload.program_id)
    service = WorkoutSessionService(store)
    return await service.start_or_resume(
        payload.user_id,
        payload.program_id,
        payload.program_name,
        exercises,
        started_at=payload.started_at,
        state=SessionState(extra_sets=dict(payload.extra_sets)),
    )


@router.get("/{session_id}/sets", response_model=list[SetLogRead])
async def list_session_sets(
    session_id: uuid.UUID,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Logged sets of a session, oldest first."""
    await _get_session_or_404(store, session_id)
    return await store.get_session_logs(session_id)


@router.post("/{session_id}/sets", response_model=SetLogRead, status_code=201)
async def log_set(
    session_id: uuid.UUID,
    payload: SetLogPayload,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Log a completed set. Only the magnitude of the exercise's type is kept."""
    session = await _get_session_or_404(store, session_id)
    exercise = await _get_exercise_or_404(store, session.program_id, payload.exercise_id)
    service = WorkoutSessionService(store)
    try:
        return await service.log_set(
            session,
            exercise,
            payload.set_no,
            reps=payload.reps,
            weight=payload.weight,
            duration=payload.duration,
            distance=payload.distance,
            logged_at=payload.logged_at,
            comment=payload.comment,
        )
    except SetValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/{session_id}/sets/{log_id}", response_model=SetLogRead)
async def update_set(
    session_id: uuid.UUID,
    log_id: uuid.UUID,
    payload: SetMagnitudesUpdate,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Correct a logged set's magnitudes in place (identity and set number unchanged)."""
    session = await _get_session_or_404(store, session_id)
    logs = await store.get_session_logs(session_id)
    log = next((s for s in logs if s.id == log_id), None)
    if not log:
        raise HTTPException(status_code=404, detail="Set not found")
    exercises = await store.get_program_exercises(session.program_id)
    service = WorkoutSessionService(store)
    try:
        checked = await service.update_set(log_id, resolve_exercise_type(log, exercises), payload)
    except SetValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return log.model_copy(update=checked.model_dump(exclude_none=True))


@router.post("/{session_id}/complete", response_model=SessionCompleted)
async def complete_session(
    session_id: uuid.UUID,
    payload: SessionFinish | None = None,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Complete the session and return the personal records it set."""
    session = await _get_session_or_404(store, session_id)
    exercises = await store.get_program_exercises(session.program_id)
    service = WorkoutSessionService(store)
    try:
        return await service.complete(
            session,
            finished_at=payload.finished_at if payload else None,
            exercises=exercises,
        )
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{session_id}/cancel", response_model=WorkoutSessionRead)
async def cancel_session(
    session_id: uuid.UUID,
    payload: SessionFinish | None = None,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Cancel the session. Logged sets are kept."""
    session = await _get_session_or_404(store, session_id)
    service = WorkoutSessionService(store)
    try:
        await service.cancel(session, finished_at=payload.finished_at if payload else None)
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return await store.get_session(session_id)
