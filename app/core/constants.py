"""Application constants."""

# Progressive overload
DEFAULT_INCREMENT = 2.5  # kg added on promotion when the routine sets none

# Failure reasons surfaced to the lifter
REASON_NO_TARGET_REPS = "No target reps defined"
REASON_NO_HISTORY = "No history found"
REASON_INVALID_TARGET_REPS = "Invalid target reps format"
REASON_NO_WEIGHT = "Last run had no weight recorded"
REASON_MISSED_TARGET = "Did not hit target reps on all sets"
