"""Resume position after an interrupted session, and extra/skipped set bookkeeping."""

from app.schemas.session import ResumePosition
from app.services.session_reconciler import SessionState, resume_position


def _program(make_exercise):
    return [
        make_exercise("Squat", target_sets=3, order_index=0),
        make_exercise("Bench Press", target_sets=3, order_index=1),
        make_exercise("Row", target_sets=3, order_index=2),
    ]


def test_empty_history_starts_at_first_exercise(make_exercise):
    assert resume_position(_program(make_exercise), []) == ResumePosition(exercise_index=0, set_number=1)


def test_finished_exercise_moves_to_next(make_exercise, make_log):
    squat, bench, row = _program(make_exercise)
    logs = [make_log("Bench Press", reps=5, weight=80, exercise_id=bench.id) for _ in range(3)]
    assert resume_position([squat, bench, row], logs) == ResumePosition(exercise_index=2, set_number=1)


def test_unfinished_exercise_continues(make_exercise, make_log):
    squat, bench, row = _program(make_exercise)
    logs = [
        make_log("Squat", reps=5, weight=100, exercise_id=squat.id),
        make_log("Squat", reps=5, weight=100, exercise_id=squat.id),
    ]
    assert resume_position([squat, bench, row], logs) == ResumePosition(exercise_index=0, set_number=3)


def test_last_exercise_stays_with_completion_set_number(make_exercise, make_log):
    squat, bench, row = _program(make_exercise)
    logs = [make_log("Row", reps=10, weight=50, exercise_id=row.id) for _ in range(3)]
    position = resume_position([squat, bench, row], logs)
    assert position == ResumePosition(exercise_index=2, set_number=4)
    assert position.set_number > row.target_sets


def test_extra_sets_extend_target(make_exercise, make_log):
    squat, bench, row = _program(make_exercise)
    logs = [make_log("Bench Press", reps=5, weight=80, exercise_id=bench.id) for _ in range(3)]
    position = resume_position([squat, bench, row], logs, {bench.id: 1})
    assert position == ResumePosition(exercise_index=1, set_number=4)


def test_uses_chronologically_last_log(make_exercise, make_log):
    squat, bench, row = _program(make_exercise)
    late = make_log("Squat", reps=5, weight=100, exercise_id=squat.id)
    early = make_log("Bench Press", reps=5, weight=80, exercise_id=bench.id, logged_at=late.logged_at.replace(hour=1))
    assert resume_position([squat, bench, row], [late, early]).exercise_index == 0


def test_exercise_removed_from_program_falls_back(make_exercise, make_log, caplog):
    program = _program(make_exercise)
    logs = [make_log("Deadlift", reps=5, weight=140, exercise_id=make_exercise("Deadlift").id)]
    assert resume_position(program, logs) == ResumePosition()
    assert "not in the program" in caplog.text


class TestSessionState:
    def test_skip_advances_set_number_without_log(self, make_exercise, make_log):
        squat = make_exercise("Squat", target_sets=3)
        state = SessionState()
        assert state.skip_current_set(squat, []) == 1
        logs = [make_log("Squat", reps=5, weight=100, exercise_id=squat.id)]
        assert state.current_set_number(squat, logs) == 3
        assert (squat.id, 1) in state.skipped_sets

    def test_finished_after_target_and_extra(self, make_exercise, make_log):
        squat = make_exercise("Squat", target_sets=2)
        state = SessionState()
        logs = [make_log("Squat", reps=5, weight=100, exercise_id=squat.id) for _ in range(2)]
        assert state.is_exercise_finished(squat, logs)
        assert state.add_extra_set(squat.id) == 1
        assert state.effective_target_sets(squat) == 3
        assert not state.is_exercise_finished(squat, logs)

    def test_skips_are_per_exercise(self, make_exercise):
        squat, bench = make_exercise("Squat"), make_exercise("Bench Press")
        state = SessionState()
        state.skip_set(squat.id, 1)
        assert state.current_set_number(bench, []) == 1

    def test_advance_clears_skips_and_stops_at_last(self, make_exercise):
        program = _program(make_exercise)
        state = SessionState()
        state.skip_set(program[0].id, 1)
        assert state.advance(program, 0) == 1
        assert state.skipped_sets == set()
        assert state.advance(program, 2) == 2
        assert state.is_last_exercise(program, 2)

    def test_resume_uses_own_extra_sets(self, make_exercise, make_log):
        squat, bench, row = _program(make_exercise)
        state = SessionState(extra_sets={squat.id: 2})
        logs = [make_log("Squat", reps=5, weight=100, exercise_id=squat.id) for _ in range(3)]
        assert state.resume([squat, bench, row], logs) == ResumePosition(exercise_index=0, set_number=4)
