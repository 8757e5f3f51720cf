"""Time scale and time format tags.

Provides the two closed enumerations that tag every
:class:`~astroepochs.epoch.Time`:

- :class:`TimeScale`: the physical time standard (TAI, TT, TDB, UTC, TCB, TCG).
- :class:`TimeFormat`: the external representation (JD, MJD, ISOT).

Both accept their enum members or case-insensitive strings wherever a tag is
expected; :func:`as_scale` and :func:`as_format` perform the coercion and
validation.
"""

from __future__ import annotations

from enum import Enum

from .exceptions import InvalidArgumentError


class TimeScale(Enum):
    """Physical time standard of an epoch."""

    TAI = "tai"
    TT = "tt"
    TDB = "tdb"
    UTC = "utc"
    TCB = "tcb"
    TCG = "tcg"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TimeScale.{self.name}"


class TimeFormat(Enum):
    """External representation of an epoch."""

    JD = "jd"
    MJD = "mjd"
    ISOT = "isot"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TimeFormat.{self.name}"


TIME_SCALES: frozenset[TimeScale] = frozenset(TimeScale)
TIME_FORMATS: frozenset[TimeFormat] = frozenset(TimeFormat)


def _tag_str(tag) -> str:
    if isinstance(tag, (TimeScale, TimeFormat)):
        return str(tag)
    if isinstance(tag, str):
        return f"'{tag}'"
    return repr(tag)


def _supported(enum_cls) -> str:
    return ", ".join(member.name for member in enum_cls)


def is_tag(value) -> bool:
    """Return ``True`` if *value* has a type usable as a scale or format tag."""
    return isinstance(value, (str, TimeScale, TimeFormat))


def as_scale(scale: TimeScale | str) -> TimeScale:
    """Coerce *scale* to a :class:`TimeScale`.

    Args:
        scale: A ``TimeScale`` member or its case-insensitive name
            (``"tt"``, ``"TDB"``, ...).

    Returns:
        The matching ``TimeScale``.

    Raises:
        InvalidArgumentError: If *scale* is not a supported time scale.
    """
    if isinstance(scale, TimeScale):
        return scale
    if isinstance(scale, str):
        try:
            return TimeScale(scale.lower())
        except ValueError:
            pass
    raise InvalidArgumentError(
        f"Time: invalid time scale {_tag_str(scale)}. Supported: [{_supported(TimeScale)}]"
    )


def as_format(format: TimeFormat | str) -> TimeFormat:
    """Coerce *format* to a :class:`TimeFormat`.

    Args:
        format: A ``TimeFormat`` member or its case-insensitive name
            (``"jd"``, ``"MJD"``, ``"isot"``).

    Returns:
        The matching ``TimeFormat``.

    Raises:
        InvalidArgumentError: If *format* is not a supported time format.
    """
    if isinstance(format, TimeFormat):
        return format
    if isinstance(format, str):
        try:
            return TimeFormat(format.lower())
        except ValueError:
            pass
    raise InvalidArgumentError(
        f"Time: invalid time format {_tag_str(format)}. Supported: [{_supported(TimeFormat)}]"
    )
