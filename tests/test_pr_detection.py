"""Unit tests for name normalization, type resolution, grouping, best selection and 1RM."""

import pytest

from app.core.enums import ExerciseType
from app.services.pr_detection import (
    ExerciseGroup,
    build_record,
    calculate_improvement,
    estimate_one_rep_max,
    find_duplicate_current_records,
    find_current_record,
    format_record_value,
    group_logs_by_exercise,
    infer_exercise_type,
    normalize_exercise_name,
    resolve_exercise_type,
    select_best_performances,
)

from conftest import USER_ID


class TestNormalizeExerciseName:
    def test_spacing_and_case_collapse(self):
        assert normalize_exercise_name(" Bench  Press ") == normalize_exercise_name("bench press")
        assert normalize_exercise_name("\tBench\n Press") == "bench press"

    def test_yo_folded_to_ye(self):
        assert normalize_exercise_name("Жим лёжа") == "жим лежа"
        assert normalize_exercise_name("ЖИМ ЛЁЖА") == "жим лежа"

    @pytest.mark.parametrize("name", ["  Squat ", "Жим  Лёжа", "", "   ", "Pull-Up\t\tWide"])
    def test_idempotent(self, name):
        once = normalize_exercise_name(name)
        assert normalize_exercise_name(once) == once


class TestResolveExerciseType:
    def test_explicit_exercise_type_wins(self, make_log, make_exercise):
        plank = make_exercise("Plank", ExerciseType.TIME)
        # Magnitudes would infer reps, configuration says time
        log = make_log("Plank", reps=3, weight=10, exercise_id=plank.id)
        assert resolve_exercise_type(log, [plank]) == ExerciseType.TIME
        assert resolve_exercise_type(log, {plank.id: plank}) == ExerciseType.TIME

    def test_fallback_inference(self, make_log):
        assert infer_exercise_type(make_log(duration=60)) == ExerciseType.TIME
        assert infer_exercise_type(make_log(distance=400)) == ExerciseType.DISTANCE
        assert infer_exercise_type(make_log(reps=5, weight=100)) == ExerciseType.REPS
        # Duration alongside reps stays reps
        assert infer_exercise_type(make_log(reps=5, duration=30)) == ExerciseType.REPS

    def test_unknown_exercise_id_falls_back(self, make_log, make_exercise):
        other = make_exercise("Row")
        log = make_log("Run", distance=1000)
        assert resolve_exercise_type(log, [other]) == ExerciseType.DISTANCE


class TestGroupLogsByExercise:
    def test_groups_by_normalized_name_in_first_occurrence_order(self, make_log):
        logs = [
            make_log("Squat", reps=5, weight=100),
            make_log("Bench Press", reps=5, weight=80),
            make_log(" bench  press", reps=5, weight=85),
            make_log("SQUAT", reps=5, weight=105),
        ]
        groups = group_logs_by_exercise(logs)
        assert [g.normalized_name for g in groups] == ["squat", "bench press"]
        assert groups[0].logs == [logs[0], logs[3]]
        assert groups[1].logs == [logs[1], logs[2]]
        assert groups[1].exercise_name == "Bench Press"

    def test_empty_input(self):
        assert group_logs_by_exercise([]) == []


class TestSelectBestPerformances:
    def test_best_per_rep_count(self, make_log):
        logs = [
            make_log(reps=5, weight=100),
            make_log(reps=5, weight=110),
            make_log(reps=10, weight=80),
        ]
        group = ExerciseGroup("bench press", "Bench Press", ExerciseType.REPS, logs)
        best = select_best_performances(group)
        assert best == [logs[1], logs[2]]

    def test_reps_ignores_zero_weight_or_reps(self, make_log):
        logs = [make_log(reps=10, weight=0), make_log(reps=0, weight=50)]
        group = ExerciseGroup("push up", "Push Up", ExerciseType.REPS, logs)
        assert select_best_performances(group) == []

    def test_time_single_best_first_on_tie(self, make_log):
        logs = [make_log("Plank", duration=60), make_log("Plank", duration=90), make_log("Plank", duration=90)]
        group = ExerciseGroup("plank", "Plank", ExerciseType.TIME, logs)
        assert select_best_performances(group) == [logs[1]]

    def test_distance_single_best(self, make_log):
        logs = [make_log("Run", distance=1000), make_log("Run", distance=800)]
        group = ExerciseGroup("run", "Run", ExerciseType.DISTANCE, logs)
        assert select_best_performances(group) == [logs[0]]

    def test_empty_group(self):
        assert select_best_performances(ExerciseGroup("x", "x", ExerciseType.TIME, [])) == []


class TestEstimateOneRepMax:
    def test_reference_values(self):
        assert estimate_one_rep_max(100, 1) == 100
        assert estimate_one_rep_max(0, 5) == 0
        assert estimate_one_rep_max(100, 0) == 0
        assert estimate_one_rep_max(100, 5) == 112.5

    def test_reps_capped_at_twelve(self):
        assert estimate_one_rep_max(60, 20) == estimate_one_rep_max(60, 12) == 86.4

    def test_rounded_to_one_decimal(self):
        assert estimate_one_rep_max(80, 8) == 99.3


class TestRecordHelpers:
    def test_find_current_record_matches_reps_only_for_reps_type(self, make_record):
        five = make_record(weight=100, reps=5)
        ten = make_record(weight=80, reps=10)
        old = make_record(weight=90, reps=5, is_current=False)
        plank = make_record("plank", ExerciseType.TIME, duration=60)
        records = [old, five, ten, plank]
        assert find_current_record(records, "bench press", ExerciseType.REPS, 5) == five
        assert find_current_record(records, "bench press", ExerciseType.REPS, 3) is None
        assert find_current_record(records, "plank", ExerciseType.TIME) == plank
        assert find_current_record(records, "plank", ExerciseType.DISTANCE) is None

    def test_build_record_reps(self, make_log):
        log = make_log(" Bench  Press", reps=5, weight=100)
        record = build_record(log, USER_ID, None, ExerciseType.REPS)
        assert record.exercise_name == "bench press"
        assert (record.record_weight, record.record_reps, record.estimated_1rm) == (100, 5, 112.5)
        assert record.record_duration is None and record.is_current
        assert record.log_id == log.id

    def test_format_and_improvement(self, make_record):
        old = make_record(weight=100, reps=5)
        new = make_record(weight=110, reps=5)
        assert format_record_value(old) == "100кг × 5"
        assert format_record_value(make_record(weight=102.5, reps=3)) == "102.5кг × 3"
        assert format_record_value(make_record("plank", ExerciseType.TIME, duration=90)) == "90сек"
        assert format_record_value(make_record("run", ExerciseType.DISTANCE, distance=5000)) == "5000м"
        assert calculate_improvement(new, old) == 10

    def test_improvement_from_zero_is_zero(self, make_record):
        assert calculate_improvement(make_record(weight=50, reps=5), make_record(weight=0, reps=5)) == 0


def test_find_duplicate_current_records(make_record):
    a = make_record(weight=100, reps=5)
    b = make_record("Bench  Press", weight=100, reps=5)
    other_reps = make_record(weight=80, reps=10)
    demoted = make_record(weight=90, reps=5, is_current=False)
    plank = make_record("plank", ExerciseType.TIME, duration=60)

    duplicates = find_duplicate_current_records([a, b, other_reps, demoted, plank])

    assert list(duplicates.values()) == [[a, b]]
    assert find_duplicate_current_records([a, other_reps, plank]) == {}
