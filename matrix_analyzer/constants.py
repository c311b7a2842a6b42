"""Shared constants used across the benchmark and fitting code."""

MATRIX_VALUE_LOW = 0.0
MATRIX_VALUE_HIGH = 10.0
"""Half-open range [low, high) for randomly generated matrix entries."""

FLOPS_PER_INNER_STEP = 2
"""One multiply and one add per innermost loop iteration."""

GIGA = 1e9
TERA = 1e12

THEORETICAL_DISPLAY_SCALE = 1e-6
"""Scale applied to 2n^3 - n^2 so the curve sits next to timings in milliseconds."""

MIN_FIT_POINTS = 3

CUBIC_CONFIRMED_THRESHOLD = 0.9
APPROXIMATELY_CUBIC_THRESHOLD = 0.7

COMPLEXITY_CUBIC = "cubic confirmed"
COMPLEXITY_APPROXIMATE = "approximately cubic"
COMPLEXITY_INDETERMINATE = "indeterminate"

MAX_TRIALS_PER_SIZE = 10
