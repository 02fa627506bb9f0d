"""Exercise model - name and modality (weight or cardio)."""

from __future__ import annotations

import uuid

from sqlalchemy import Enum, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import ExerciseType
from app.db.base import Base


class Exercise(Base):
    """Exercise definition. Progression targets live on RoutineExercise, not here."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[ExerciseType] = mapped_column(
        Enum(ExerciseType, name="exercise_type"), default=ExerciseType.WEIGHT, nullable=False
    )

    routine_entries: Mapped[list["RoutineExercise"]] = relationship(
        "RoutineExercise", back_populates="exercise", cascade="all, delete-orphan"
    )
