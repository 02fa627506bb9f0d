"""WorkoutLog (one session of a routine) and WorkoutLogEntry (one exercise's sets)."""

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


class WorkoutLog(Base):
    """A workout session. Unfinished while finished_at is null; deload runs never seed progression."""

    __tablename__ = "workout_logs"
    __table_args__ = (Index("ix_workout_logs_routine_finished", "routine_id", "finished_at"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    routine_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("routines.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_deload: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    routine: Mapped["Routine | None"] = relationship("Routine", back_populates="logs")
    entries: Mapped[list["WorkoutLogEntry"]] = relationship(
        "WorkoutLogEntry",
        back_populates="workout_log",
        cascade="all, delete-orphan",
        order_by="WorkoutLogEntry.order",
    )


class WorkoutLogEntry(Base):
    """Sets for one exercise in a log, stored as a JSON list of set dicts
    (weight/reps or duration/distance/calories, completed, type)."""

    __tablename__ = "workout_log_entries"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workout_log_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    order: Mapped[int] = mapped_column(Integer, default=0)
    sets: Mapped[list[dict]] = mapped_column(JSONB, default=list, nullable=False)
    note: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_superset: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    workout_log: Mapped["WorkoutLog"] = relationship("WorkoutLog", back_populates="entries")
    exercise: Mapped["Exercise"] = relationship("Exercise")
