"""Routine and its exercises with per-exercise progression targets."""

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


class Routine(Base):
    """Saved routine (name + ordered exercises with targets)."""

    __tablename__ = "routines"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    exercises: Mapped[list["RoutineExercise"]] = relationship(
        "RoutineExercise",
        back_populates="routine",
        cascade="all, delete-orphan",
        order_by="RoutineExercise.order",
    )
    logs: Mapped[list["WorkoutLog"]] = relationship("WorkoutLog", back_populates="routine")


class RoutineExercise(Base):
    """Exercise assigned to a routine. target_reps is "8-12", "8,5,3" or "10"."""

    __tablename__ = "routine_exercises"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    routine_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("routines.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order: Mapped[int] = mapped_column(Integer, default=0)
    target_sets: Mapped[str | None] = mapped_column(String(20), nullable=True)
    target_reps: Mapped[str | None] = mapped_column(String(50), nullable=True)
    increment_value: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg, default 2.5 when null
    note: Mapped[str | None] = mapped_column(String(500), nullable=True)

    routine: Mapped["Routine"] = relationship("Routine", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="routine_entries")
