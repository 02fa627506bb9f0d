"""Unit tests for the progressive overload engine."""

import pytest

from app.core.constants import (
    REASON_INVALID_TARGET_REPS,
    REASON_MISSED_TARGET,
    REASON_NO_HISTORY,
    REASON_NO_TARGET_REPS,
    REASON_NO_WEIGHT,
)
from app.core.enums import ExerciseType, ProgressionType, SetType
from app.schemas.progression import ExerciseForProgression, WorkoutSetData
from app.services.progressive_overload import (
    InvalidRepSpecError,
    RepList,
    RepRange,
    RepSingle,
    apply_progressive_overload,
    create_empty_set,
    parse_target_reps,
    parse_target_sets,
)


def _exercise(**overrides) -> ExerciseForProgression:
    fields = {
        "id": "ex1",
        "name": "Squat",
        "type": ExerciseType.WEIGHT,
        "target_reps": "8-12",
        "target_sets": "3",
        "increment_value": 2.5,
    }
    fields.update(overrides)
    return ExerciseForProgression(**fields)


def _set(weight, reps, type_="NORMAL"):
    return WorkoutSetData(weight=weight, reps=reps, completed=True, type=type_)


def _working(result):
    return [s for s in result.new_sets if s.type == SetType.NORMAL]


# ---------------------------------------------------------------------------
# Rep spec parsing
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("8-12", RepRange(8, 12)),
        (" 8 - 12 ", RepRange(8, 12)),
        ("8-", RepRange(8, 8)),
        ("8,5,3", RepList((8, 5, 3))),
        ("8, 5 ,3", RepList((8, 5, 3))),
        ("10", RepSingle(10)),
    ],
)
def test_parse_target_reps(raw, expected):
    assert parse_target_reps(raw) == expected


@pytest.mark.parametrize("raw", ["eight", "8,x,3", "8-twelve", "-", "8,,3"])
def test_parse_target_reps_rejects_non_numeric(raw):
    with pytest.raises(InvalidRepSpecError):
        parse_target_reps(raw)


def test_rep_list_repeats_last_target():
    spec = RepList((8, 5, 3))
    assert [spec.target_at(i) for i in range(5)] == [8, 5, 3, 3, 3]
    assert spec.min_reps == 3
    assert spec.first_target == 8


def test_rep_range_checks_max_and_prescribes_min():
    spec = RepRange(8, 12)
    assert spec.target_at(0) == 12
    assert spec.prescribed_at(2) == 8
    assert spec.min_reps == 8


@pytest.mark.parametrize("raw,expected", [("3", 3), (" 4 ", 4), (None, None), ("abc", None), ("", None)])
def test_parse_target_sets(raw, expected):
    assert parse_target_sets(raw) == expected


# ---------------------------------------------------------------------------
# Empty set factory
# ---------------------------------------------------------------------------


def test_empty_set_weight_shape():
    s = create_empty_set(ExerciseType.WEIGHT)
    assert s.model_dump(exclude_none=True) == {"weight": "", "reps": "", "completed": False, "type": SetType.NORMAL}


def test_empty_set_cardio_shape():
    s = create_empty_set("CARDIO")
    assert s.model_dump(exclude_none=True) == {
        "duration": "",
        "distance": "",
        "calories": "",
        "completed": False,
        "type": SetType.NORMAL,
    }


def test_empty_set_defaults_to_weight_shape():
    assert create_empty_set().weight == ""
    assert create_empty_set("YOGA").reps == ""


# ---------------------------------------------------------------------------
# Early exits
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("target_reps", [None, "", "   "])
def test_no_target_reps(target_reps):
    result = apply_progressive_overload(_exercise(target_reps=target_reps), [_set(60, 12)])
    assert result.applied is False
    assert result.failure_reason == REASON_NO_TARGET_REPS
    assert result.new_sets == []
    assert result.diff is None


@pytest.mark.parametrize("last_sets", [None, []])
def test_no_history(last_sets):
    result = apply_progressive_overload(_exercise(), last_sets)
    assert result.applied is False
    assert result.failure_reason == REASON_NO_HISTORY
    assert result.new_sets == []


def test_invalid_target_reps_is_reported_not_raised():
    result = apply_progressive_overload(_exercise(target_reps="8-twelve"), [_set(60, 12)])
    assert result.applied is False
    assert result.failure_reason == REASON_INVALID_TARGET_REPS
    assert result.new_sets == []


# ---------------------------------------------------------------------------
# Promotion / reset with range targets
# ---------------------------------------------------------------------------


def test_promotion_on_range():
    result = apply_progressive_overload(_exercise(), [_set(60, 12)] * 3)

    assert result.applied is True
    assert result.failure_reason is None
    assert result.diff.type == ProgressionType.PROMOTION
    assert result.diff.old_weight == 60
    assert result.diff.new_weight == 62.5
    assert result.diff.old_reps == 12
    assert result.diff.new_reps == 8
    assert len(result.new_sets) == 3
    for s in result.new_sets:
        assert (s.weight, s.reps, s.type) == (62.5, 8, SetType.NORMAL)


def test_reset_on_range_when_a_set_misses_max():
    result = apply_progressive_overload(_exercise(), [_set(60, 12), _set(60, 10), _set(60, 8)])

    assert result.applied is True
    assert result.failure_reason == REASON_MISSED_TARGET
    assert result.diff.type == ProgressionType.RESET
    assert result.diff.old_weight == 60
    assert result.diff.new_weight == 60
    assert result.diff.old_reps == result.diff.new_reps == 8
    assert [(s.weight, s.reps) for s in result.new_sets] == [(60, 8)] * 3


def test_reset_uses_first_working_set_weight():
    result = apply_progressive_overload(_exercise(), [_set(60, 10), _set(55, 12), _set(50, 12)])
    assert result.diff.type == ProgressionType.RESET
    assert {s.weight for s in result.new_sets} == {60}


def test_default_increment_when_missing():
    ex = _exercise(increment_value=None, target_sets=None)
    result = apply_progressive_overload(ex, [_set(60, 12)])
    assert result.diff.new_weight == 62.5
    assert len(result.new_sets) == 1


def test_custom_increment():
    result = apply_progressive_overload(_exercise(increment_value=5), [_set(100, 12)] * 3)
    assert result.diff.new_weight == 105


def test_single_target_promotes_and_keeps_reps():
    ex = _exercise(target_reps="8")
    result = apply_progressive_overload(ex, [_set(100, 8)] * 3)
    assert result.diff.type == ProgressionType.PROMOTION
    assert result.diff.new_weight == 102.5
    assert [s.reps for s in result.new_sets] == [8, 8, 8]


def test_missing_reps_count_as_miss():
    result = apply_progressive_overload(_exercise(), [_set(60, 12), _set(60, None), _set(60, "")])
    assert result.diff.type == ProgressionType.RESET


# ---------------------------------------------------------------------------
# Comma-separated targets
# ---------------------------------------------------------------------------


def test_list_promotion_keeps_pattern():
    ex = _exercise(target_reps="8,5,3")
    result = apply_progressive_overload(ex, [_set(100, 8), _set(100, 6), _set(100, 3)])

    assert result.diff.type == ProgressionType.PROMOTION
    assert result.diff.new_weight == 102.5
    assert result.diff.old_reps == 8
    assert result.diff.new_reps == 8
    assert [s.reps for s in result.new_sets] == [8, 5, 3]


def test_list_reset_keeps_pattern():
    ex = _exercise(target_reps="8,5,3")
    result = apply_progressive_overload(ex, [_set(100, 8), _set(100, 4), _set(100, 3)])

    assert result.diff.type == ProgressionType.RESET
    assert result.diff.new_weight == 100
    assert result.diff.new_reps == 3
    assert [s.reps for s in result.new_sets] == [8, 5, 3]


def test_list_fills_missing_positions_from_pattern():
    ex = _exercise(target_reps="8,5,3")
    result = apply_progressive_overload(ex, [_set(100, 8), _set(100, 5)])

    assert result.diff.type == ProgressionType.PROMOTION
    assert len(result.new_sets) == 3
    assert result.new_sets[2].reps == 3
    assert result.new_sets[2].weight == 102.5


def test_list_extra_sets_use_last_target():
    ex = _exercise(target_reps="8,5,3", target_sets=None)
    result = apply_progressive_overload(ex, [_set(100, 8), _set(100, 5), _set(100, 3), _set(100, 3)])
    assert result.diff.type == ProgressionType.PROMOTION
    assert [s.reps for s in result.new_sets] == [8, 5, 3, 3]


# ---------------------------------------------------------------------------
# Set types
# ---------------------------------------------------------------------------


def test_warmups_are_carried_over_first():
    last = [_set(40, 10, "WARMUP"), _set(50, 5, "WARMUP")] + [_set(60, 12)] * 3
    result = apply_progressive_overload(_exercise(), last)

    assert len(result.new_sets) == 5
    assert [(s.weight, s.reps, s.type) for s in result.new_sets[:2]] == [
        (40, 10, SetType.WARMUP),
        (50, 5, SetType.WARMUP),
    ]
    assert all(s.type == SetType.NORMAL and s.weight == 62.5 for s in result.new_sets[2:])


def test_failure_dropset_and_pain_sets_are_dropped():
    last = [
        _set(40, 10, "WARMUP"),
        _set(60, 12),
        _set(60, 6, "FAILURE"),
        _set(60, 12),
        _set(45, 10, "DROPSET"),
        _set(60, 2, "PAIN"),
    ]
    result = apply_progressive_overload(_exercise(), last)

    assert result.diff.type == ProgressionType.PROMOTION
    assert len(result.new_sets) == 4
    assert result.new_sets[0].type == SetType.WARMUP
    assert len(_working(result)) == 3
    assert not {SetType.FAILURE, SetType.DROPSET, SetType.PAIN} & {s.type for s in result.new_sets}


def test_warmups_only_history():
    last = [_set(40, 10, "WARMUP"), _set(50, 5, "WARMUP")]
    result = apply_progressive_overload(_exercise(), last)

    assert result.applied is False
    assert result.diff is None
    assert result.failure_reason == REASON_NO_WEIGHT
    assert [(s.weight, s.reps, s.type) for s in result.new_sets] == [
        (40, 10, SetType.WARMUP),
        (50, 5, SetType.WARMUP),
    ]


def test_untyped_and_unknown_types_count_as_working_sets():
    last = [{"weight": 60, "reps": 12, "completed": True}, {"weight": 60, "reps": 12, "type": "SUPERSET"}]
    result = apply_progressive_overload(_exercise(target_sets=None), last)
    assert result.diff.type == ProgressionType.PROMOTION
    assert len(result.new_sets) == 2


def test_accepts_raw_dicts_with_string_numbers():
    last = [{"weight": "60", "reps": "12", "completed": False, "type": "NORMAL"}]
    result = apply_progressive_overload(_exercise(target_sets=None), last)
    assert result.diff.new_weight == 62.5


# ---------------------------------------------------------------------------
# No weight recorded
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("weight", [None, "", 0])
def test_no_weight_keeps_sets_without_reps(weight):
    last = [_set(40, 10, "WARMUP"), _set(weight, 12), _set(60, 12)]
    result = apply_progressive_overload(_exercise(), last)

    assert result.applied is False
    assert result.diff is None
    assert result.failure_reason == REASON_NO_WEIGHT
    assert result.new_sets[0].type == SetType.WARMUP
    working = _working(result)
    assert len(working) == 2
    assert all(s.reps == "" for s in working)
    assert working[1].weight == 60


# ---------------------------------------------------------------------------
# Fill-up to target sets
# ---------------------------------------------------------------------------


def test_fill_up_to_target_sets_on_reset():
    ex = _exercise(target_sets="4")
    result = apply_progressive_overload(ex, [_set(60, 10), _set(60, 12)])
    assert [(s.weight, s.reps) for s in result.new_sets] == [(60, 8)] * 4


def test_fill_never_removes_sets():
    ex = _exercise(target_sets="2")
    result = apply_progressive_overload(ex, [_set(60, 12)] * 4)
    assert len(result.new_sets) == 4


def test_unparsable_target_sets_skips_fill():
    ex = _exercise(target_sets="three")
    result = apply_progressive_overload(ex, [_set(60, 12)])
    assert len(result.new_sets) == 1


def test_target_sets_accepts_integer():
    ex = _exercise(target_sets=3)
    assert ex.target_sets == "3"
    result = apply_progressive_overload(ex, [_set(60, 12)])
    assert len(result.new_sets) == 3


# ---------------------------------------------------------------------------
# Assisted (negative) weights, modality, compounding
# ---------------------------------------------------------------------------


def test_negative_weight_promotes_towards_zero():
    result = apply_progressive_overload(_exercise(target_reps="8"), [_set(-50, 8)] * 3)
    assert result.diff.type == ProgressionType.PROMOTION
    assert result.diff.old_weight == -50
    assert result.diff.new_weight == -47.5
    assert result.new_sets[0].weight == -47.5


def test_negative_weight_reset_holds():
    result = apply_progressive_overload(_exercise(target_reps="8"), [_set(-50, 8), _set(-50, 5), _set(-50, 8)])
    assert result.diff.type == ProgressionType.RESET
    assert result.diff.new_weight == -50
    assert result.new_sets[0].weight == -50


def test_cardio_exercise_sets_carry_cardio_fields():
    ex = _exercise(type=ExerciseType.CARDIO, target_reps="10", target_sets=None)
    result = apply_progressive_overload(ex, [_set(20, 10)])
    s = result.new_sets[0]
    assert (s.weight, s.reps) == (22.5, 10)
    assert (s.duration, s.distance, s.calories) == ("", "", "")


def test_reapplying_promotion_compounds():
    ex = _exercise(target_reps="8", target_sets=None)
    first = apply_progressive_overload(ex, [_set(100, 8)] * 2)
    second = apply_progressive_overload(ex, first.new_sets)
    assert second.diff.type == ProgressionType.PROMOTION
    assert second.diff.new_weight == 105


def test_fractional_reps_compare_numerically():
    result = apply_progressive_overload(_exercise(target_sets=None), [{"weight": 60, "reps": 11.5}])
    assert result.diff.type == ProgressionType.RESET
    assert WorkoutSetData.model_validate({"reps": 8}).reps == 8
    assert isinstance(WorkoutSetData.model_validate({"reps": 8}).reps, int)


def test_empty_set_other_modality_fields_are_none():
    s = create_empty_set(ExerciseType.WEIGHT)
    assert s.duration is None and s.distance is None and s.calories is None
    assert "duration" not in s.model_dump(exclude_none=True)
