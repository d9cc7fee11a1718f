"""Angle utilities: degree wrapping, continuous angle accumulation, and DMS formatting.

All angles are in degrees. Every function is pure; callers that animate an
angle keep the current value themselves and pass it back in on the next call.
"""

import math

_FULL_TURN = 360.0
_INV_FULL_TURN = 1.0 / _FULL_TURN
# Above this, whole-turn counts no longer fit exactly in a float product.
_FAST_PATH_LIMIT = 2.0**52


def normalize_degrees(angle: float) -> float:
    """Wrap an angle into [0, 360).

    Subtracts the truncated number of whole turns instead of calling a general
    floating modulo, since this sits on a per-frame path. Magnitudes of 2**52
    and above go through math.fmod, which stays exact.

    Args:
        angle: Angle in degrees. Any finite value.

    Returns:
        Equivalent angle in [0, 360). NaN for non-finite input.
    """
    if not math.isfinite(angle):
        return math.nan
    if abs(angle) < _FAST_PATH_LIMIT:
        wrapped = angle - int(angle * _INV_FULL_TURN) * _FULL_TURN
    else:
        wrapped = math.fmod(angle, _FULL_TURN)
    if wrapped < 0.0:
        wrapped += _FULL_TURN
    # Tiny negative remainders round up to exactly 360 when bumped.
    if wrapped >= _FULL_TURN:
        wrapped -= _FULL_TURN
    return wrapped


def advance_angle(current: float, increment: float) -> float:
    """Add an increment to an angle and keep the result in [0, 360).

    Repeated calls with a small fixed increment produce a smoothly increasing
    angle that wraps at 360 → 0.

    Args:
        current: The previous output (or any starting angle), in degrees.
        increment: Step in degrees. Normalized before it is added.

    Returns:
        The advanced angle in [0, 360).
    """
    return normalize_degrees(current + normalize_degrees(increment))


def degrees_to_dms(degrees: float) -> tuple[int, int, float]:
    """Split decimal degrees into (degrees, minutes, seconds).

    The sign is carried on the degrees field; minutes and seconds are never
    negative. For -0.5 the degrees field is 0, so callers that print the value
    should use ``format_dms``, which keeps the sign.
    """
    magnitude = abs(degrees)
    whole = int(magnitude)
    minutes_float = (magnitude - whole) * 60.0
    minutes = int(minutes_float)
    seconds = (minutes_float - minutes) * 60.0
    # Rounding carry (e.g. 59.99999 s)
    if seconds >= 59.95:
        seconds = 0.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        whole += 1
    return (-whole if degrees < 0 else whole), minutes, seconds


def format_dms(degrees: float) -> str:
    """Format decimal degrees as ``D°MM'SS.S"``.

    >>> format_dms(20.926361)
    '20°55\\'34.9"'
    """
    whole, minutes, seconds = degrees_to_dms(degrees)
    sign = "-" if degrees < 0 and whole == 0 else ""
    return f"{sign}{whole}°{minutes:02d}'{seconds:04.1f}\""
