"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.exercise import Exercise
from app.models.routine import Routine, RoutineExercise
from app.models.workout import WorkoutLog, WorkoutLogEntry

__all__ = [
    "Exercise",
    "Routine",
    "RoutineExercise",
    "WorkoutLog",
    "WorkoutLogEntry",
]
