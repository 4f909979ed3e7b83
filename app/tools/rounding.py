"""Half-up rounding used for scores, confidence and durations."""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity (141 for 140.5)."""
    return math.floor(value + 0.5)


def round_to_ten(score: float) -> int:
    """Round a score to the nearest 10 points."""
    return round_half_up(score / 10) * 10
