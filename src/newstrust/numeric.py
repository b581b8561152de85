import math


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go toward +infinity)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
