# ABOUTME: Rounding helpers shared by the response mappers and the model synthesizer.
# ABOUTME: Rounds halves upward so 2.5 -> 3 and -2.5 -> -2, matching the dashboard's display rules.

import math


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_percent(value: int) -> int:
    return min(100, max(0, value))
