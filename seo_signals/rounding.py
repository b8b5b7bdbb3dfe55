import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (10.5 -> 11).

    Built-in round() rounds half to even, which would turn an sns score of
    10.5 into 10.
    """
    return int(math.floor(value + 0.5))
