"""Progressive overload: propose the next session's sets from the last run.

Rules:
- WARMUP sets are copied from the last run (weight and reps kept).
- NORMAL sets drive the decision. If every working set hit its rep target the
  weight goes up by the exercise increment (PROMOTION); otherwise the weight is
  held and reps go back to the target (RESET).
- FAILURE, DROPSET and PAIN sets are left out of both the decision and the
  proposed sets.

Target reps come in three shapes, parsed once by parse_target_reps():
- "8-12"  range: every set must reach 12 to promote; new sets prescribe 8.
- "8,5,3" list: one target per set position, last value repeats.
- "10"    single: every set must reach 10; new sets prescribe 10.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from app.core.constants import (
    DEFAULT_INCREMENT,
    REASON_INVALID_TARGET_REPS,
    REASON_MISSED_TARGET,
    REASON_NO_HISTORY,
    REASON_NO_TARGET_REPS,
    REASON_NO_WEIGHT,
)
from app.core.enums import ExerciseType, ProgressionType, SetType
from app.schemas.progression import (
    ExerciseForProgression,
    ProgressionDiff,
    ProgressionResult,
    WorkoutSetData,
)

logger = logging.getLogger(__name__)


class InvalidRepSpecError(ValueError):
    """Target reps string contains a token that is not an integer."""


@dataclass(frozen=True)
class RepRange:
    """Range "min-max": reaching max on every set promotes, new sets start at min."""

    low: int
    high: int

    @property
    def first_target(self) -> int:
        return self.high

    @property
    def min_reps(self) -> int:
        return self.low

    def target_at(self, index: int) -> int:
        return self.high

    def prescribed_at(self, index: int) -> int:
        return self.low


@dataclass(frozen=True)
class RepList:
    """List "r1,r2,...": per-position targets (e.g. reverse pyramid)."""

    reps: tuple[int, ...]

    @property
    def first_target(self) -> int:
        return self.reps[0]

    @property
    def min_reps(self) -> int:
        return self.reps[-1]

    def target_at(self, index: int) -> int:
        return self.reps[min(index, len(self.reps) - 1)]

    def prescribed_at(self, index: int) -> int:
        return self.target_at(index)


@dataclass(frozen=True)
class RepSingle:
    reps: int

    @property
    def first_target(self) -> int:
        return self.reps

    @property
    def min_reps(self) -> int:
        return self.reps

    def target_at(self, index: int) -> int:
        return self.reps

    def prescribed_at(self, index: int) -> int:
        return self.reps


RepSpec = RepRange | RepList | RepSingle


def _parse_token(token: str, raw: str) -> int:
    try:
        return int(token.strip())
    except ValueError:
        raise InvalidRepSpecError(f"invalid target reps {raw!r}") from None


def parse_target_reps(raw: str) -> RepSpec:
    """Parse a target reps string. Raises InvalidRepSpecError on non-numeric tokens."""
    if "," in raw:
        return RepList(tuple(_parse_token(t, raw) for t in raw.split(",")))
    if "-" in raw:
        tokens = [t for t in raw.split("-") if t.strip()]
        if not tokens:
            raise InvalidRepSpecError(f"invalid target reps {raw!r}")
        low = _parse_token(tokens[0], raw)
        high = _parse_token(tokens[1], raw) if len(tokens) > 1 else low
        return RepRange(low, high)
    return RepSingle(_parse_token(raw, raw))


def parse_target_sets(raw: str | None) -> int | None:
    """Target set count, or None when absent or not an integer."""
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def create_empty_set(exercise_type: ExerciseType | str = ExerciseType.WEIGHT) -> WorkoutSetData:
    """
    Blank set shaped by modality. Unknown modalities get the weight shape.

    Fields of the other modality are left as None, not "". Dump with
    exclude_none=True (as the routers do) to get only the modality's keys.
    """
    if exercise_type == ExerciseType.CARDIO:
        return WorkoutSetData(duration="", distance="", calories="", completed=False, type=SetType.NORMAL)
    return WorkoutSetData(weight="", reps="", completed=False, type=SetType.NORMAL)


def classify_sets(
    sets: Sequence[WorkoutSetData],
) -> tuple[list[WorkoutSetData], list[WorkoutSetData]]:
    """Split into (working, warmup). Every other set type is dropped."""
    normal = [s for s in sets if s.type == SetType.NORMAL]
    warmup = [s for s in sets if s.type == SetType.WARMUP]
    return normal, warmup


def hit_all_targets(spec: RepSpec, normal_sets: Sequence[WorkoutSetData]) -> bool:
    """True when every working set reached the rep target for its position."""
    if isinstance(spec, RepList) and not normal_sets:
        return False
    return all((s.reps or 0) >= spec.target_at(i) for i, s in enumerate(normal_sets))


def _coerce_sets(last_sets: Sequence[WorkoutSetData | Mapping[str, Any]]) -> list[WorkoutSetData]:
    return [s if isinstance(s, WorkoutSetData) else WorkoutSetData.model_validate(s) for s in last_sets]


def _with_fields(exercise_type: ExerciseType, **fields: Any) -> WorkoutSetData:
    return create_empty_set(exercise_type).model_copy(update=fields)


def _working_sets(
    exercise: ExerciseForProgression,
    spec: RepSpec,
    history_count: int,
    weight: float,
) -> list[WorkoutSetData]:
    # Fill up to target_sets but never drop sets the lifter already does
    count = max(history_count, parse_target_sets(exercise.target_sets) or 0)
    return [
        _with_fields(exercise.type, weight=weight, reps=spec.prescribed_at(i), type=SetType.NORMAL)
        for i in range(count)
    ]


def apply_progressive_overload(
    exercise: ExerciseForProgression,
    last_sets: Sequence[WorkoutSetData | Mapping[str, Any]] | None,
) -> ProgressionResult:
    """
    Decide the next session's sets for one exercise from its last run.

    Never raises for business conditions: missing targets, missing history,
    unparsable targets and a last run without weight all come back as
    applied=False with a failure_reason. A RESET is applied but still carries
    a failure_reason so the lifter knows why the weight did not move.
    """
    if not exercise.target_reps or not exercise.target_reps.strip():
        return ProgressionResult(applied=False, failure_reason=REASON_NO_TARGET_REPS)

    if not last_sets:
        return ProgressionResult(applied=False, failure_reason=REASON_NO_HISTORY)

    try:
        spec = parse_target_reps(exercise.target_reps)
    except InvalidRepSpecError:
        logger.warning("Exercise %s has unparsable target reps %r", exercise.id, exercise.target_reps)
        return ProgressionResult(applied=False, failure_reason=REASON_INVALID_TARGET_REPS)

    normal_sets, warmup_sets = classify_sets(_coerce_sets(last_sets))

    new_sets = [
        _with_fields(exercise.type, weight=s.weight, reps=s.reps, type=SetType.WARMUP)
        for s in warmup_sets
    ]

    last_weight = normal_sets[0].weight if normal_sets else None
    if not last_weight:
        new_sets.extend(
            _with_fields(exercise.type, weight=s.weight, reps="", type=SetType.NORMAL)
            for s in normal_sets
        )
        return ProgressionResult(new_sets=new_sets, applied=False, failure_reason=REASON_NO_WEIGHT)

    last_weight = float(last_weight)

    if hit_all_targets(spec, normal_sets):
        increment = DEFAULT_INCREMENT if exercise.increment_value is None else exercise.increment_value
        next_weight = last_weight + increment
        new_sets.extend(_working_sets(exercise, spec, len(normal_sets), next_weight))
        # Lists report their first position; ranges report the new floor
        new_reps = spec.first_target if isinstance(spec, RepList) else spec.min_reps
        return ProgressionResult(
            new_sets=new_sets,
            diff=ProgressionDiff(
                exercise_name=exercise.name,
                old_weight=last_weight,
                old_reps=spec.first_target,
                new_weight=next_weight,
                new_reps=new_reps,
                type=ProgressionType.PROMOTION,
            ),
            applied=True,
        )

    new_sets.extend(_working_sets(exercise, spec, len(normal_sets), last_weight))
    return ProgressionResult(
        new_sets=new_sets,
        diff=ProgressionDiff(
            exercise_name=exercise.name,
            old_weight=last_weight,
            old_reps=spec.min_reps,
            new_weight=last_weight,
            new_reps=spec.min_reps,
            type=ProgressionType.RESET,
        ),
        applied=True,
        failure_reason=REASON_MISSED_TARGET,
    )
