"""Initial schema: workout_sessions, set_logs, personal_records, program_exercises.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

exercise_type = sa.Enum("REPS", "TIME", "DISTANCE", name="exercisetype")
session_status = sa.Enum("IN_PROGRESS", "COMPLETED", "CANCELLED", name="sessionstatus")


def upgrade() -> None:
    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("program_name", sa.String(length=255), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_duration", sa.Integer(), nullable=True),
        sa.Column("status", session_status, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_workout_sessions"),
    )
    op.create_index(
        "ix_workout_sessions_user_program_status",
        "workout_sessions",
        ["user_id", "program_id", "status"],
        unique=False,
    )

    op.create_table(
        "set_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("program_id", sa.Uuid(), nullable=True),
        sa.Column("exercise_id", sa.Uuid(), nullable=True),
        sa.Column("session_id", sa.Uuid(), nullable=True),
        sa.Column("logged_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("set_no", sa.Integer(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("weight", sa.Float(), nullable=False, server_default="0"),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("distance", sa.Float(), nullable=False, server_default="0"),
        sa.Column("comment", sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(
            ["session_id"], ["workout_sessions.id"], ondelete="SET NULL", name="fk_set_logs_session_id_workout_sessions"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_set_logs"),
    )
    op.create_index("ix_set_logs_session_logged_at", "set_logs", ["session_id", "logged_at"], unique=False)
    op.create_index("ix_set_logs_user_id", "set_logs", ["user_id"], unique=False)

    op.create_table(
        "personal_records",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("exercise_type", exercise_type, nullable=False),
        sa.Column("achieved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=True),
        sa.Column("log_id", sa.Uuid(), nullable=True),
        sa.Column("is_current", sa.Boolean(), nullable=False),
        sa.Column("previous_record_id", sa.Uuid(), nullable=True),
        sa.Column("record_weight", sa.Float(), nullable=True),
        sa.Column("record_reps", sa.Integer(), nullable=True),
        sa.Column("estimated_1rm", sa.Float(), nullable=True),
        sa.Column("record_duration", sa.Integer(), nullable=True),
        sa.Column("record_distance", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["previous_record_id"],
            ["personal_records.id"],
            ondelete="SET NULL",
            name="fk_personal_records_previous_record_id_personal_records",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_personal_records"),
    )
    op.create_index(
        "ix_personal_records_user_current", "personal_records", ["user_id", "is_current"], unique=False
    )
    op.create_index(
        "ix_personal_records_key",
        "personal_records",
        ["user_id", "exercise_name", "exercise_type", "record_reps"],
        unique=False,
    )

    op.create_table(
        "program_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("exercise_type", exercise_type, nullable=False),
        sa.Column("target_sets", sa.Integer(), nullable=False),
        sa.Column("target_reps", sa.Integer(), nullable=False),
        sa.Column("target_weight", sa.Float(), nullable=False),
        sa.Column("target_duration", sa.Integer(), nullable=False),
        sa.Column("target_distance", sa.Float(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_program_exercises"),
    )
    op.create_index(op.f("ix_program_exercises_program_id"), "program_exercises", ["program_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_program_exercises_program_id"), table_name="program_exercises")
    op.drop_table("program_exercises")
    op.drop_index("ix_personal_records_key", table_name="personal_records")
    op.drop_index("ix_personal_records_user_current", table_name="personal_records")
    op.drop_table("personal_records")
    op.drop_index("ix_set_logs_user_id", table_name="set_logs")
    op.drop_index("ix_set_logs_session_logged_at", table_name="set_logs")
    op.drop_table("set_logs")
    op.drop_index("ix_workout_sessions_user_program_status", table_name="workout_sessions")
    op.drop_table("workout_sessions")
    exercise_type.drop(op.get_bind(), checkfirst=True)
    session_status.drop(op.get_bind(), checkfirst=True)
