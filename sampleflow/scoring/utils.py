import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going up (68.5 -> 69, -0.5 -> 0).
    Python's round() is banker's rounding and would send 68.5 to 68.
    """
    return int(math.floor(value + 0.5))
