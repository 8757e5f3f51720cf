"""Calendar and ISO 8601 conversions for split Julian Dates.

The functions here convert between proleptic Gregorian calendar fields and a
split Julian Date ``(jd1, jd2)`` whose second component lies in
``[-0.5, 0.5)``. ``jd1`` carries the Julian Date of noon on the civil day, so
the integer part never mixes with the time of day and no precision is lost
to the large magnitude of the Julian Date.

Calendar work is done with Python integers and floats. These functions
extract concrete values and are therefore not traceable under ``jax.jit``;
call them outside of JIT-compiled functions.
"""

from __future__ import annotations

import math
import re

from .constants import JD_MJD_OFFSET, SECONDS_PER_DAY
from .exceptions import InvalidArgumentError

# YYYY-MM-DDTHH:MM:SS with optional fractional seconds of any precision
_ISOT_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2}(?:\.\d+)?)", re.ASCII
)

_MS_PER_DAY = 86_400_000

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _days_in_month(year: int, month: int) -> int:
    if month == 2 and year % 4 == 0 and (year % 100 != 0 or year % 400 == 0):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def caldate_to_mjd(year: int, month: int, day: int) -> int:
    """Return the Modified Julian Date of 00:00 on a proleptic Gregorian date.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.

    Returns:
        int: Modified Julian Date at the start of the day.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """
    if month <= 2:
        year -= 1
        month += 12

    b = year // 400 - year // 100 + year // 4

    # floor(30.6001 * (month + 1)) in scaled integer arithmetic
    return 365 * year - 679004 + b + (306001 * (month + 1)) // 10000 + day


def caldate_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> tuple[float, float]:
    """Convert a calendar date and time of day to a split Julian Date.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the day. Default: ``0``
        minute (int): Minute of the hour. Default: ``0``
        second (float): Second of the minute, may be fractional. Default: ``0.0``

    Returns:
        tuple[float, float]: ``(jd1, jd2)`` where ``jd1`` is the Julian Date
            of noon on the given day and ``jd2`` is the time of day relative
            to noon, in days.

    Examples:
        ```python
        from astroepochs.time import caldate_to_jd
        caldate_to_jd(2000, 1, 1, 12)  # (2451545.0, 0.0)
        ```
    """
    mjd = caldate_to_mjd(year, month, day)
    jd1 = float(mjd) + (JD_MJD_OFFSET + 0.5)
    frac_of_day = (hour * 3600 + minute * 60 + second) / SECONDS_PER_DAY
    return jd1, frac_of_day - 0.5


def _day_and_millis(jd1: float, jd2: float) -> tuple[int, int]:
    """Split a Julian Date into the civil day number and milliseconds of day.

    The civil day number is the integer Julian Day that starts at the
    preceding midnight. Milliseconds are rounded to the nearest integer and
    carried into the next day when they reach a full day.
    """
    day = math.floor(jd1)
    frac = (jd1 - day) + jd2 + 0.5
    shift = math.floor(frac)
    day += shift
    frac -= shift

    ms = round(frac * _MS_PER_DAY)
    if ms >= _MS_PER_DAY:
        day += 1
        ms -= _MS_PER_DAY
    return day, ms


def _jdn_to_caldate(z: int) -> tuple[int, int, int]:
    """Convert an integer Julian Day number to a proleptic Gregorian date.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
           Applications*, 2012, p. 322.
    """
    # Scaled integer forms of (z - 1867216.25) / 36524.25, 365.25 * c and
    # 30.6001 * e keep the arithmetic exact
    alpha = (100 * z - 186721625) // 3652425
    a = z + 1 + alpha - alpha // 4

    b = a + 1524
    c = (100 * b - 12210) // 36525
    d = (36525 * c) // 100
    e = ((b - d) * 10000) // 306001

    day = b - d - (306001 * e) // 10000
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return year, month, day


def jd_to_caldate(jd1: float, jd2: float = 0.0) -> tuple[int, int, int, int, int, float]:
    """Convert a split Julian Date to proleptic Gregorian calendar fields.

    The time of day is rounded to the nearest millisecond.

    Args:
        jd1 (float): First component of the Julian Date.
        jd2 (float): Second component of the Julian Date. Default: ``0.0``

    Returns:
        tuple: ``(year, month, day, hour, minute, second)`` where second is a
            float with millisecond resolution.
    """
    z, ms = _day_and_millis(float(jd1), float(jd2))
    year, month, day = _jdn_to_caldate(z)

    hour, ms = divmod(ms, 3_600_000)
    minute, ms = divmod(ms, 60_000)
    return year, month, day, hour, minute, ms / 1000.0


def parse_isot(isostr: str) -> tuple[int, int, int, int, int, float]:
    """Validate and parse an ISO 8601 string ``YYYY-MM-DDTHH:MM:SS[.fff...]``.

    Args:
        isostr (str): ISO 8601 date-time string. Fractional seconds are
            optional and may have any number of digits. No time zone
            designator is accepted; the scale is carried separately.

    Returns:
        tuple: ``(year, month, day, hour, minute, second)``.

    Raises:
        InvalidArgumentError: If the string does not match the pattern or a
            field is out of range.
    """
    m = _ISOT_PATTERN.fullmatch(isostr)
    if m is None:
        raise InvalidArgumentError(f"Time: Invalid ISO 8601 format: {isostr!r}")

    year = int(m.group(1))
    month = int(m.group(2))
    day = int(m.group(3))
    hour = int(m.group(4))
    minute = int(m.group(5))
    second = float(m.group(6))

    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Month must be between 1 and 12. Got: {month}")
    if not 1 <= day <= 31:
        raise InvalidArgumentError(f"Day must be between 1 and 31. Got: {day}")
    n_days = _days_in_month(year, month)
    if day > n_days:
        raise InvalidArgumentError(f"Day must be between 1 and {n_days} for {year:04d}-{month:02d}. Got: {day}")
    if not 0 <= hour < 24:
        raise InvalidArgumentError(f"Hour must be between 0 and 23. Got: {hour}")
    if not 0 <= minute < 60:
        raise InvalidArgumentError(f"Minute must be between 0 and 59. Got: {minute}")
    if not 0.0 <= second < 60.0:
        raise InvalidArgumentError(f"Seconds must be >= 0.0 and < 60.0. Got: {second}")

    return year, month, day, hour, minute, second


def isot_to_jd(isostr: str) -> tuple[float, float]:
    """Convert an ISO 8601 string to a split Julian Date.

    Args:
        isostr (str): ISO 8601 date-time string, see :func:`parse_isot`.

    Returns:
        tuple[float, float]: ``(jd1, jd2)`` as returned by :func:`caldate_to_jd`.
    """
    return caldate_to_jd(*parse_isot(isostr))


def format_isot(jd1: float, jd2: float = 0.0) -> str:
    """Render a split Julian Date as ``YYYY-MM-DDTHH:MM:SS.sss``.

    Args:
        jd1 (float): First component of the Julian Date.
        jd2 (float): Second component of the Julian Date. Default: ``0.0``

    Returns:
        str: ISO 8601 string with exactly three fractional second digits.

    Raises:
        InvalidArgumentError: If the rounded date falls outside years 0000-9999.
    """
    z, ms = _day_and_millis(float(jd1), float(jd2))
    year, month, day = _jdn_to_caldate(z)
    if not 0 <= year <= 9999:
        raise InvalidArgumentError(f"Time: year {year} is outside the ISO 8601 range 0000-9999")

    hour, ms = divmod(ms, 3_600_000)
    minute, ms = divmod(ms, 60_000)
    second, ms = divmod(ms, 1000)
    return f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}.{ms:03d}"
