"""Record comparison: turn a session's best performances into new personal records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from uuid import UUID

from app.core.enums import ExerciseType
from app.schemas.record import NewRecordSummary, PersonalRecordRead
from app.schemas.set_log import SetLogRead
from app.services.pr_detection import (
    ExerciseLookup,
    beats_record,
    build_record,
    calculate_improvement,
    find_current_record,
    format_record_value,
    group_logs_by_exercise,
    select_best_performances,
)
from app.services.store import RecordStore

logger = logging.getLogger(__name__)


class RecordComparator:
    """Compares session bests against current records and writes the winners.

    Writes are best-effort: store errors propagate, and records already written
    before the failure stay written. Running twice for the same session can
    write duplicate rows; nothing here marks a session as processed.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def reconcile(
        self,
        session_logs: Sequence[SetLogRead],
        user_id: UUID,
        session_id: UUID | None,
        current_records: Iterable[PersonalRecordRead],
        exercises: ExerciseLookup | None = None,
    ) -> list[NewRecordSummary]:
        current = [r for r in current_records if r.is_current]
        summaries: list[NewRecordSummary] = []

        for group in group_logs_by_exercise(session_logs, exercises):
            for best in select_best_performances(group):
                reps = best.reps if group.exercise_type == ExerciseType.REPS else None
                previous = find_current_record(current, group.normalized_name, group.exercise_type, reps)
                if not beats_record(best, group.exercise_type, previous):
                    continue

                # Demote before insert; two sequential writes, not a transaction
                if previous is not None:
                    await self.store.demote_record(previous.id)
                    current.remove(previous)

                saved = await self.store.save_new_record(
                    build_record(
                        best,
                        user_id,
                        session_id,
                        group.exercise_type,
                        previous.id if previous is not None else None,
                    )
                )
                current.append(saved)
                logger.info(
                    "New record for %s: %s",
                    group.exercise_name,
                    format_record_value(saved),
                    extra={"workout_session_id": str(session_id), "workout_record_id": str(saved.id)},
                )

                summaries.append(
                    NewRecordSummary(
                        exercise_name=group.exercise_name,
                        exercise_type=group.exercise_type,
                        new_value=format_record_value(saved),
                        old_value=format_record_value(previous) if previous is not None else None,
                        improvement_percent=(
                            calculate_improvement(saved, previous) if previous is not None else None
                        ),
                        record=saved,
                    )
                )

        return summaries

    async def process_session(
        self,
        session_id: UUID,
        user_id: UUID,
        exercises: ExerciseLookup | None = None,
    ) -> list[NewRecordSummary]:
        """Load a session's logs and the user's current records, then reconcile."""
        logs = await self.store.get_session_logs(session_id)
        if not logs:
            logger.info("No logs for session %s; nothing to compare", session_id)
            return []

        current_records = await self.store.get_personal_records(user_id)
        logger.info(
            "Processing %d logs against %d current records for session %s",
            len(logs),
            len(current_records),
            session_id,
        )
        summaries = await self.reconcile(logs, user_id, session_id, current_records, exercises)
        logger.info("Session %s produced %d new records", session_id, len(summaries))
        return summaries
