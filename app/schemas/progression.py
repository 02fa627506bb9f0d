"""Progressive overload schemas: sets, exercise targets and results."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from app.core.enums import ExerciseType, ProgressionType, SetType

# Numeric set fields are a number, the "" sentinel (blank input), or absent.
SetValue = float | Literal[""] | None
RepsValue = int | float | Literal[""] | None  # int kept as int; stored 7.5 tolerated


class WorkoutSetData(BaseModel):
    """One recorded or generated set. Fields not set for the modality stay None."""

    weight: SetValue = None
    reps: RepsValue = None
    duration: SetValue = None
    distance: SetValue = None
    calories: SetValue = None
    completed: bool = False
    type: SetType = SetType.NORMAL

    @field_validator("type", mode="before")
    @classmethod
    def _unknown_type_is_normal(cls, v: Any) -> Any:
        try:
            return SetType(v)
        except ValueError:
            return SetType.NORMAL

    @field_validator("completed", mode="before")
    @classmethod
    def _completed_default(cls, v: Any) -> Any:
        return False if v is None else v


class ExerciseForProgression(BaseModel):
    """Exercise modality joined with the routine's progression targets."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    type: ExerciseType = ExerciseType.WEIGHT
    target_reps: str | None = None  # "8-12", "8,5,3" or "10"
    target_sets: str | None = None
    increment_value: float | None = None


class ProgressionDiff(BaseModel):
    """What changed, for the notification shown after applying overload."""

    exercise_name: str
    old_weight: float
    old_reps: int
    new_weight: float
    new_reps: int
    type: ProgressionType


class ProgressionResult(BaseModel):
    new_sets: list[WorkoutSetData] = []
    diff: ProgressionDiff | None = None
    applied: bool = False
    failure_reason: str | None = None


class ProgressionPreviewRequest(BaseModel):
    """Stateless preview: caller supplies the exercise and its last sets."""

    exercise: ExerciseForProgression
    last_sets: list[WorkoutSetData] = []


class LastRoutineRunData(BaseModel):
    sets: dict[UUID, list[WorkoutSetData]] = {}
    session_notes: dict[UUID, str] = {}
    superset_status: dict[UUID, bool] = {}
    finished_at: datetime | None = None


class LastRoutineRunRead(BaseModel):
    found: bool
    data: LastRoutineRunData | None = None


class ExerciseOverloadResult(BaseModel):
    exercise_id: UUID
    applied: bool
    diff: ProgressionDiff | None = None
    reason: str | None = None


class OverloadSummary(BaseModel):
    """Result of applying overload across a workout log (one or all exercises)."""

    applied: bool = False
    reason: str | None = None
    results: list[ExerciseOverloadResult] = []
    new_sets: dict[UUID, list[WorkoutSetData]] = {}
