"""Shared enums for models and API."""

from enum import Enum


class ExerciseType(str, Enum):
    """Exercise modality - decides which fields a set carries."""

    WEIGHT = "WEIGHT"  # weight + reps
    CARDIO = "CARDIO"  # duration + distance + calories


class SetType(str, Enum):
    """Set tag recorded per set. Only NORMAL sets drive progression."""

    NORMAL = "NORMAL"
    WARMUP = "WARMUP"
    FAILURE = "FAILURE"
    DROPSET = "DROPSET"
    PAIN = "PAIN"  # stopped due to pain


class ProgressionType(str, Enum):
    """Outcome of a progressive overload decision."""

    PROMOTION = "PROMOTION"  # all working sets hit target, weight goes up
    RESET = "RESET"  # weight held, reps back to target
