"""Workout log progression endpoints - last routine run and apply overload."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.progression import LastRoutineRunRead, OverloadSummary
from app.services.workout_overload import (
    RoutineNotFound,
    WorkoutLogNotFound,
    apply_overload,
    get_last_routine_run,
)

router = APIRouter()


@router.get(
    "/{log_id}/last-routine-run",
    response_model=LastRoutineRunRead,
    response_model_exclude_none=True,
)
async def last_routine_run(
    log_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Sets, notes and superset flags from the routine's previous finished (non-deload) run."""
    try:
        data = await get_last_routine_run(db, log_id)
    except WorkoutLogNotFound:
        raise HTTPException(status_code=404, detail="Workout log not found")
    except RoutineNotFound:
        raise HTTPException(status_code=404, detail="Routine not found for this log")
    if data is None:
        return LastRoutineRunRead(found=False)
    return LastRoutineRunRead(found=True, data=data)


@router.post(
    "/{log_id}/apply-overload",
    response_model=OverloadSummary,
    response_model_exclude_none=True,
)
async def apply_log_overload(
    log_id: uuid.UUID,
    exercise_id: uuid.UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Propose progressed sets for every exercise of the log's routine, or only
    exercise_id. Nothing is written: the client overwrites its working sets
    with new_sets if the lifter accepts.
    """
    try:
        return await apply_overload(db, log_id, exercise_id)
    except WorkoutLogNotFound:
        raise HTTPException(status_code=404, detail="Workout log not found")
    except RoutineNotFound:
        raise HTTPException(status_code=404, detail="Routine not found for this log")
