"""PR detection: group set logs by exercise, pick best performances, build record data.

Everything here is pure and works on in-memory schemas; persistence happens in
app.services.record_comparator through the injected store.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from uuid import UUID

from app.core.constants import (
    BRZYCKI_DENOMINATOR_BASE,
    BRZYCKI_NUMERATOR,
    NAME_LETTER_VARIANTS,
    ONE_RM_REP_CAP,
    UNIT_DISTANCE,
    UNIT_DURATION,
    UNIT_WEIGHT,
)
from app.core.enums import ExerciseType
from app.schemas.exercise import ExerciseTarget
from app.schemas.record import PersonalRecordCreate, PersonalRecordRead
from app.schemas.set_log import SetLogRead

_WHITESPACE_RUN = re.compile(r"\s+")

ExerciseLookup = Mapping[UUID, ExerciseTarget] | Iterable[ExerciseTarget]


@dataclass
class ExerciseGroup:
    """All logs of one exercise, keyed by normalized name."""

    normalized_name: str
    exercise_name: str  # Display name of the first log in the group
    exercise_type: ExerciseType
    logs: list[SetLogRead] = field(default_factory=list)


def normalize_exercise_name(name: str) -> str:
    """Canonical grouping key: trimmed, lowercased, single-spaced, ё folded to е."""
    normalized = _WHITESPACE_RUN.sub(" ", name.strip().lower())
    for variant, base in NAME_LETTER_VARIANTS.items():
        normalized = normalized.replace(variant, base)
    return normalized


def infer_exercise_type(log: SetLogRead) -> ExerciseType:
    """
    Fallback for legacy/orphaned logs without an explicitly typed exercise.
    Guesses the type from which magnitude is filled in.
    """
    if log.duration > 0 and log.reps == 0:
        return ExerciseType.TIME
    if log.distance > 0 and log.reps == 0:
        return ExerciseType.DISTANCE
    return ExerciseType.REPS


def _as_mapping(exercises: ExerciseLookup | None) -> Mapping[UUID, ExerciseTarget]:
    if exercises is None:
        return {}
    if isinstance(exercises, Mapping):
        return exercises
    return {e.id: e for e in exercises}


def resolve_exercise_type(log: SetLogRead, exercises: ExerciseLookup | None = None) -> ExerciseType:
    """Type from the exercise configuration when available, otherwise inferred from the log."""
    lookup = _as_mapping(exercises)
    if log.exercise_id is not None:
        exercise = lookup.get(log.exercise_id)
        if exercise is not None and exercise.exercise_type is not None:
            return ExerciseType(exercise.exercise_type)
    return infer_exercise_type(log)


def group_logs_by_exercise(
    logs: Iterable[SetLogRead],
    exercises: ExerciseLookup | None = None,
) -> list[ExerciseGroup]:
    """
    Partition logs by normalized exercise name (not by exercise id, so a renamed or
    re-created exercise keeps one record history). Groups come out in order of first
    occurrence and keep input order inside each group.
    """
    lookup = _as_mapping(exercises)
    groups: dict[str, ExerciseGroup] = {}
    for log in logs:
        key = normalize_exercise_name(log.exercise_name)
        group = groups.get(key)
        if group is None:
            group = ExerciseGroup(
                normalized_name=key,
                exercise_name=log.exercise_name,
                exercise_type=resolve_exercise_type(log, lookup),
            )
            groups[key] = group
        group.logs.append(log)
    return list(groups.values())


def log_magnitude(log: SetLogRead, exercise_type: ExerciseType) -> float:
    """The value compared for this type: weight, duration or distance."""
    if exercise_type == ExerciseType.TIME:
        return log.duration
    if exercise_type == ExerciseType.DISTANCE:
        return log.distance
    return log.weight


def _first_max(logs: Sequence[SetLogRead], exercise_type: ExerciseType) -> SetLogRead:
    best = logs[0]
    for log in logs[1:]:
        if log_magnitude(log, exercise_type) > log_magnitude(best, exercise_type):
            best = log
    return best


def select_best_performances(group: ExerciseGroup) -> list[SetLogRead]:
    """
    Best log(s) of a group.
    time / distance: one entry with the largest value (first one wins ties).
    reps: one entry per distinct rep count, the heaviest of that rep count; only
    sets with reps > 0 and weight > 0 count. 5 reps and 10 reps are separate records.
    """
    if not group.logs:
        return []

    if group.exercise_type != ExerciseType.REPS:
        return [_first_max(group.logs, group.exercise_type)]

    by_reps: dict[int, list[SetLogRead]] = {}
    for log in group.logs:
        if log.reps > 0 and log.weight > 0:
            by_reps.setdefault(log.reps, []).append(log)
    return [_first_max(bucket, ExerciseType.REPS) for bucket in by_reps.values()]


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """Brzycki 1RM, reps capped at 12, rounded to 0.1 kg. Display only."""
    if reps <= 0 or weight <= 0:
        return 0
    if reps == 1:
        return weight
    effective_reps = min(reps, ONE_RM_REP_CAP)
    one_rm = weight * BRZYCKI_NUMERATOR / (BRZYCKI_DENOMINATOR_BASE - effective_reps)
    return round(one_rm, 1)


def find_current_record(
    records: Iterable[PersonalRecordRead],
    normalized_name: str,
    exercise_type: ExerciseType,
    reps: int | None = None,
) -> PersonalRecordRead | None:
    """Current record for (name, type) and, for reps type only, the same rep count."""
    for record in records:
        if not record.is_current:
            continue
        if normalize_exercise_name(record.exercise_name) != normalized_name:
            continue
        if record.exercise_type != exercise_type:
            continue
        if exercise_type == ExerciseType.REPS and record.record_reps != reps:
            continue
        return record
    return None


def record_magnitude(record: PersonalRecordRead | PersonalRecordCreate) -> float:
    if record.exercise_type == ExerciseType.TIME:
        return record.record_duration or 0
    if record.exercise_type == ExerciseType.DISTANCE:
        return record.record_distance or 0
    return record.record_weight or 0


def beats_record(log: SetLogRead, exercise_type: ExerciseType, record: PersonalRecordRead | None) -> bool:
    """No record yet, or strictly greater than the stored one."""
    if record is None:
        return True
    return log_magnitude(log, exercise_type) > record_magnitude(record)


def build_record(
    log: SetLogRead,
    user_id: UUID,
    session_id: UUID | None,
    exercise_type: ExerciseType,
    previous_record_id: UUID | None = None,
) -> PersonalRecordCreate:
    """New current record from a best log, with the type's magnitudes (and 1RM for reps)."""
    data = PersonalRecordCreate(
        user_id=user_id,
        exercise_name=normalize_exercise_name(log.exercise_name),
        exercise_type=exercise_type,
        achieved_at=log.logged_at,
        session_id=session_id,
        log_id=log.id,
        is_current=True,
        previous_record_id=previous_record_id,
    )
    if exercise_type == ExerciseType.REPS:
        data.record_weight = log.weight
        data.record_reps = log.reps
        data.estimated_1rm = estimate_one_rep_max(log.weight, log.reps)
    elif exercise_type == ExerciseType.TIME:
        data.record_duration = log.duration
    else:
        data.record_distance = log.distance
    return data


def format_number(value: float | int | None) -> str:
    """100.0 -> "100", 102.5 -> "102.5"."""
    if value is None:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_record_value(record: PersonalRecordRead | PersonalRecordCreate) -> str:
    if record.exercise_type == ExerciseType.REPS:
        return f"{format_number(record.record_weight)}{UNIT_WEIGHT} × {format_number(record.record_reps)}"
    if record.exercise_type == ExerciseType.TIME:
        return f"{format_number(record.record_duration)}{UNIT_DURATION}"
    return f"{format_number(record.record_distance)}{UNIT_DISTANCE}"


def calculate_improvement(
    new_record: PersonalRecordRead | PersonalRecordCreate,
    old_record: PersonalRecordRead | PersonalRecordCreate,
) -> int:
    """Whole-percent improvement of new over old; 0 if the old value is 0."""
    old_value = record_magnitude(old_record)
    new_value = record_magnitude(new_record)
    if old_value == 0:
        return 0
    # Round half up
    return math.floor((new_value - old_value) / old_value * 100 + 0.5)


def record_key(record: PersonalRecordRead) -> tuple:
    """(user, normalized name, type, reps-if-reps): at most one current record per key."""
    reps = record.record_reps if record.exercise_type == ExerciseType.REPS else None
    return (record.user_id, normalize_exercise_name(record.exercise_name), record.exercise_type, reps)


def find_duplicate_current_records(records: Iterable[PersonalRecordRead]) -> dict[tuple, list[PersonalRecordRead]]:
    """
    Keys holding more than one current record. Two clients racing on the
    demote-then-insert pair, or a session processed twice, can leave these behind.
    """
    by_key: dict[tuple, list[PersonalRecordRead]] = {}
    for record in records:
        if record.is_current:
            by_key.setdefault(record_key(record), []).append(record)
    return {key: group for key, group in by_key.items() if len(group) > 1}
