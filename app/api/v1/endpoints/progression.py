"""Stateless progressive overload preview - caller supplies exercise targets and last sets."""

from __future__ import annotations

from fastapi import APIRouter

from app.core.enums import ExerciseType
from app.schemas.progression import ProgressionPreviewRequest, ProgressionResult, WorkoutSetData
from app.services.progressive_overload import apply_progressive_overload, create_empty_set

router = APIRouter()


@router.post("/preview", response_model=ProgressionResult, response_model_exclude_none=True)
async def preview_overload(payload: ProgressionPreviewRequest):
    """
    Compute the next session's sets without touching the database.
    Business outcomes (no history, no targets, reset) come back with 200 and
    applied/failure_reason set; only a malformed body is a 422.
    """
    return apply_progressive_overload(payload.exercise, payload.last_sets)


@router.get("/empty-set", response_model=WorkoutSetData, response_model_exclude_none=True)
async def empty_set(exercise_type: ExerciseType = ExerciseType.WEIGHT):
    """Blank set for a new exercise row (weight/reps or duration/distance/calories)."""
    return create_empty_set(exercise_type)
