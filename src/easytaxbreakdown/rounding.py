import math

# Amounts are rounded half-up (towards +infinity on ties), not with Python's banker's rounding.


def round_half_up(value, digits=0):
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round2(value):
    return round_half_up(value, 2)


def round4(value):
    return round_half_up(value, 4)


def round_euro(value):
    return int(math.floor(value + 0.5))
