"""Personal records: current records, supersession history, trophy room, re-processing."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store
from app.core.enums import SessionStatus
from app.schemas.record import NewRecordSummary, PersonalRecordRead, ProcessRecordsRequest
from app.services.pr_detection import format_record_value
from app.services.record_comparator import RecordComparator
from app.services.store import SqlAlchemyStore

router = APIRouter()


@router.get("", response_model=list[PersonalRecordRead])
async def list_records(
    user_id: uuid.UUID,
    include_history: bool = False,
    store: SqlAlchemyStore = Depends(get_store),
):
    """Current records of a user (or every record ever set with include_history=true)."""
    return await store.get_personal_records(user_id, current_only=not include_history)


@router.get("/trophy-room")
async def pr_trophy_room(
    user_id: uuid.UUID,
    period: Literal["month", "year"] = "month",
    store: SqlAlchemyStore = Depends(get_store),
):
    """
    Records achieved in the given period.
    period=month: this calendar month; period=year: this calendar year.
    """
    now = datetime.now(timezone.utc)
    if period == "month":
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    else:
        start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)

    records = [
        r
        for r in await store.get_personal_records(user_id, current_only=False)
        if (r.achieved_at if r.achieved_at.tzinfo else r.achieved_at.replace(tzinfo=timezone.utc)) >= start
    ]
    return {
        "period": period,
        "from": start.isoformat(),
        "to": now.isoformat(),
        "count": len(records),
        "records": [
            {
                "record_id": r.id,
                "session_id": r.session_id,
                "achieved_at": r.achieved_at.isoformat(),
                "exercise_name": r.exercise_name,
                "exercise_type": r.exercise_type.value,
                "value": format_record_value(r),
                "is_current": r.is_current,
            }
            for r in records
        ],
    }


@router.get("/{record_id}/history", response_model=list[PersonalRecordRead])
async def record_history(
    record_id: uuid.UUID,
    store: SqlAlchemyStore = Depends(get_store),
):
    """The record followed by every record it superseded, newest first."""
    history = await store.get_record_history(record_id)
    if not history:
        raise HTTPException(status_code=404, detail="Record not found")
    return history


@router.post("/process", response_model=list[NewRecordSummary])
async def process_records(
    payload: ProcessRecordsRequest,
    store: SqlAlchemyStore = Depends(get_store),
):
    """
    Re-run record detection for a completed session of the given user. Current
    records are re-read first, so an unchanged session writes nothing new.
    """
    session = await store.get_session(payload.session_id)
    if not session or session.user_id != payload.user_id:
        raise HTTPException(status_code=404, detail="Session not found")
    if session.status != SessionStatus.COMPLETED:
        raise HTTPException(status_code=409, detail=f"Session {session.id} is {session.status.value}")
    exercises = await store.get_program_exercises(session.program_id)
    return await RecordComparator(store).process_session(session.id, session.user_id, exercises)
