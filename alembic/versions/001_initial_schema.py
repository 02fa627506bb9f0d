"""Initial schema: exercises, routines, routine_exercises, workout_logs, workout_log_entries.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

exercise_type = postgresql.ENUM("WEIGHT", "CARDIO", name="exercise_type", create_type=False)


def upgrade() -> None:
    exercise_type.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "exercises",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", exercise_type, nullable=False, server_default="WEIGHT"),
        sa.PrimaryKeyConstraint("id", name="pk_exercises"),
    )
    op.create_index("ix_exercises_name", "exercises", ["name"], unique=False)

    op.create_table(
        "routines",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_routines"),
    )
    op.create_index("ix_routines_name", "routines", ["name"], unique=False)

    op.create_table(
        "routine_exercises",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("routine_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("exercise_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("target_sets", sa.String(length=20), nullable=True),
        sa.Column("target_reps", sa.String(length=50), nullable=True),
        sa.Column("increment_value", sa.Float(), nullable=True),
        sa.Column("note", sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(
            ["routine_id"], ["routines.id"],
            name="fk_routine_exercises_routine_id_routines", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"],
            name="fk_routine_exercises_exercise_id_exercises", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_routine_exercises"),
    )
    op.create_index("ix_routine_exercises_routine_id", "routine_exercises", ["routine_id"], unique=False)
    op.create_index("ix_routine_exercises_exercise_id", "routine_exercises", ["exercise_id"], unique=False)

    op.create_table(
        "workout_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("routine_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deload", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(
            ["routine_id"], ["routines.id"],
            name="fk_workout_logs_routine_id_routines", ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_workout_logs"),
    )
    op.create_index("ix_workout_logs_routine_finished", "workout_logs", ["routine_id", "finished_at"], unique=False)

    op.create_table(
        "workout_log_entries",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("workout_log_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("exercise_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("sets", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default="[]"),
        sa.Column("note", sa.String(length=500), nullable=True),
        sa.Column("is_superset", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(
            ["workout_log_id"], ["workout_logs.id"],
            name="fk_workout_log_entries_workout_log_id_workout_logs", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"],
            name="fk_workout_log_entries_exercise_id_exercises", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_workout_log_entries"),
    )
    op.create_index("ix_workout_log_entries_workout_log_id", "workout_log_entries", ["workout_log_id"], unique=False)


def downgrade() -> None:
    op.drop_table("workout_log_entries")
    op.drop_index("ix_workout_logs_routine_finished", table_name="workout_logs")
    op.drop_table("workout_logs")
    op.drop_table("routine_exercises")
    op.drop_index("ix_routines_name", table_name="routines")
    op.drop_table("routines")
    op.drop_index("ix_exercises_name", table_name="exercises")
    op.drop_table("exercises")
    exercise_type.drop(op.get_bind(), checkfirst=True)
