import math
from typing import Any


def parse_id(value: Any) -> int | None:
    """Parse a record id (user, post, column) into a non-negative int.

    Accepts ints, integral finite floats and strings of ASCII digits. Anything
    else, including booleans, fractions, NaN, infinities and unicode digits,
    gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and value >= 0:
            return int(value)
        return None
    if isinstance(value, str):
        if value.isascii() and value.isdecimal():
            return int(value)
    return None
