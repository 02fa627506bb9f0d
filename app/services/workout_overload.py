"""Apply progressive overload to a workout log using the routine's last finished run."""

from __future__ import annotations

import logging
import uuid

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import REASON_NO_HISTORY
from app.models.routine import Routine, RoutineExercise
from app.models.workout import WorkoutLog
from app.schemas.progression import (
    ExerciseForProgression,
    ExerciseOverloadResult,
    LastRoutineRunData,
    OverloadSummary,
    WorkoutSetData,
)
from app.services.progressive_overload import apply_progressive_overload

logger = logging.getLogger(__name__)


class WorkoutLogNotFound(LookupError):
    pass


class RoutineNotFound(LookupError):
    """The workout log is not attached to a routine."""


def exercise_for_progression(entry: RoutineExercise) -> ExerciseForProgression:
    """Join the routine's targets with the exercise's name and modality."""
    return ExerciseForProgression(
        id=str(entry.exercise_id),
        name=entry.exercise.name,
        type=entry.exercise.type,
        target_reps=entry.target_reps,
        target_sets=entry.target_sets,
        increment_value=entry.increment_value,
    )


def _stored_sets(exercise_id: uuid.UUID, raw_sets: list[dict] | None) -> list[WorkoutSetData]:
    """Validate stored JSON sets one by one; a malformed set is logged and skipped."""
    sets: list[WorkoutSetData] = []
    for i, raw in enumerate(raw_sets or []):
        try:
            sets.append(WorkoutSetData.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping stored set %d for exercise %s: %s", i, exercise_id, e)
    return sets


async def get_last_routine_run(db: AsyncSession, log_id: uuid.UUID) -> LastRoutineRunData | None:
    """
    Most recent finished, non-deload log of the same routine, excluding log_id.
    Returns None when the routine has no such run yet.
    """
    r = await db.execute(select(WorkoutLog.routine_id).where(WorkoutLog.id == log_id))
    row = r.one_or_none()
    if row is None:
        raise WorkoutLogNotFound(f"Workout log {log_id} not found")
    routine_id = row[0]
    if routine_id is None:
        raise RoutineNotFound(f"Workout log {log_id} has no routine")

    result = await db.execute(
        select(WorkoutLog)
        .options(selectinload(WorkoutLog.entries))
        .where(
            WorkoutLog.routine_id == routine_id,
            WorkoutLog.id != log_id,
            WorkoutLog.finished_at.isnot(None),
            WorkoutLog.is_deload.is_(False),
        )
        .order_by(WorkoutLog.finished_at.desc())
        .limit(1)
    )
    last_log = result.scalar_one_or_none()
    if last_log is None:
        return None

    data = LastRoutineRunData(finished_at=last_log.finished_at)
    for entry in last_log.entries:
        data.sets[entry.exercise_id] = _stored_sets(entry.exercise_id, entry.sets)
        if entry.note:
            data.session_notes[entry.exercise_id] = entry.note
        if entry.is_superset:
            data.superset_status[entry.exercise_id] = True
    return data


async def apply_overload(
    db: AsyncSession,
    log_id: uuid.UUID,
    exercise_id: uuid.UUID | None = None,
) -> OverloadSummary:
    """
    Run the overload engine for every routine exercise (or just exercise_id)
    that appears in the last run. Proposed sets are returned, not persisted:
    the client decides whether to overwrite its working sets.
    """
    last_run = await get_last_routine_run(db, log_id)
    if last_run is None:
        return OverloadSummary(applied=False, reason=REASON_NO_HISTORY)

    result = await db.execute(
        select(WorkoutLog)
        .options(
            selectinload(WorkoutLog.routine)
            .selectinload(Routine.exercises)
            .selectinload(RoutineExercise.exercise)
        )
        .where(WorkoutLog.id == log_id)
    )
    log = result.scalar_one()

    to_process = log.routine.exercises
    if exercise_id is not None:
        to_process = [entry for entry in to_process if entry.exercise_id == exercise_id]

    summary = OverloadSummary()
    for entry in to_process:
        last_sets = last_run.sets.get(entry.exercise_id)
        if last_sets is None:
            continue
        outcome = apply_progressive_overload(exercise_for_progression(entry), last_sets)
        # Warmup-only and no-weight runs are not applied but still carry sets over
        if outcome.new_sets:
            summary.new_sets[entry.exercise_id] = outcome.new_sets
        if outcome.applied:
            summary.results.append(
                ExerciseOverloadResult(exercise_id=entry.exercise_id, applied=True, diff=outcome.diff)
            )
        else:
            summary.results.append(
                ExerciseOverloadResult(exercise_id=entry.exercise_id, applied=False, reason=outcome.failure_reason)
            )
        logger.info(
            "Overload for exercise %s in log %s: applied=%s type=%s reason=%s",
            entry.exercise_id,
            log_id,
            outcome.applied,
            outcome.diff.type.value if outcome.diff else None,
            outcome.failure_reason,
        )

    summary.applied = any(r.applied for r in summary.results)
    return summary
