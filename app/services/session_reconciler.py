"""Rebuild in-progress workout position from the persisted set log.

The set log is append-only, so after a reload or crash the only way back to
"exercise 3, set 2" is to replay it against the program's exercise targets.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from uuid import UUID

from app.schemas.exercise import ExerciseTarget
from app.schemas.session import ResumePosition
from app.schemas.set_log import SetLogRead

logger = logging.getLogger(__name__)


def effective_target_sets(exercise: ExerciseTarget, extra_sets: Mapping[UUID, int]) -> int:
    """Planned sets plus sets added ad hoc during the session."""
    return exercise.target_sets + extra_sets.get(exercise.id, 0)


def resume_position(
    exercises: Sequence[ExerciseTarget],
    persisted_logs: Sequence[SetLogRead],
    extra_sets: Mapping[UUID, int] | None = None,
) -> ResumePosition:
    """
    Where to continue logging. Looks at the exercise of the latest log:
    if its sets reached the effective target and another exercise follows,
    resume at the next one (set 1); otherwise keep going on the same exercise.
    A log pointing at an exercise no longer in the program leaves the default.
    """
    extra_sets = extra_sets or {}
    if not persisted_logs:
        return ResumePosition()

    last_log = sorted(persisted_logs, key=lambda log: log.logged_at)[-1]
    index = next((i for i, e in enumerate(exercises) if e.id == last_log.exercise_id), None)
    if index is None:
        logger.warning(
            "Last logged exercise %s (%s) is not in the program; resuming at the start",
            last_log.exercise_id,
            last_log.exercise_name,
        )
        return ResumePosition()

    exercise = exercises[index]
    done = sum(1 for log in persisted_logs if log.exercise_id == exercise.id)
    if done >= effective_target_sets(exercise, extra_sets) and index < len(exercises) - 1:
        return ResumePosition(exercise_index=index + 1, set_number=1)
    return ResumePosition(exercise_index=index, set_number=done + 1)


@dataclass
class SessionState:
    """Ad-hoc per-session state that is not persisted: extra and skipped sets."""

    extra_sets: dict[UUID, int] = field(default_factory=dict)
    skipped_sets: set[tuple[UUID, int]] = field(default_factory=set)

    def add_extra_set(self, exercise_id: UUID) -> int:
        self.extra_sets[exercise_id] = self.extra_sets.get(exercise_id, 0) + 1
        return self.extra_sets[exercise_id]

    def skip_set(self, exercise_id: UUID, set_number: int) -> None:
        self.skipped_sets.add((exercise_id, set_number))

    def skipped_count(self, exercise_id: UUID) -> int:
        return sum(1 for ex_id, _ in self.skipped_sets if ex_id == exercise_id)

    def effective_target_sets(self, exercise: ExerciseTarget) -> int:
        return effective_target_sets(exercise, self.extra_sets)

    def current_set_number(self, exercise: ExerciseTarget, completed_logs: Sequence[SetLogRead]) -> int:
        """Completed + skipped sets for the exercise, plus one."""
        completed = sum(1 for log in completed_logs if log.exercise_id == exercise.id)
        return completed + self.skipped_count(exercise.id) + 1

    def skip_current_set(self, exercise: ExerciseTarget, completed_logs: Sequence[SetLogRead]) -> int:
        """Mark the current set as skipped; returns the set number that was skipped."""
        set_number = self.current_set_number(exercise, completed_logs)
        self.skip_set(exercise.id, set_number)
        return set_number

    def is_exercise_finished(self, exercise: ExerciseTarget, completed_logs: Sequence[SetLogRead]) -> bool:
        return self.current_set_number(exercise, completed_logs) > self.effective_target_sets(exercise)

    @staticmethod
    def is_last_exercise(exercises: Sequence[ExerciseTarget], index: int) -> bool:
        return index == len(exercises) - 1

    def advance(self, exercises: Sequence[ExerciseTarget], index: int) -> int:
        """Move to the next exercise if there is one. Skips are dropped on the way."""
        if index < len(exercises) - 1:
            self.skipped_sets.clear()
            return index + 1
        return index

    def resume(self, exercises: Sequence[ExerciseTarget], persisted_logs: Sequence[SetLogRead]) -> ResumePosition:
        return resume_position(exercises, persisted_logs, self.extra_sets)
