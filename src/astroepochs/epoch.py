"""The epoch module provides the ``Time`` class for representing instants in time.

A ``Time`` stores a Julian Date as two numbers, ``jd1 + jd2``, together with
a time scale tag (TAI, TT, TDB, UTC, TCB, TCG) and a time format tag (JD,
MJD, ISOT). ``jd2`` is kept in ``[-0.5, 0.5)`` and ``jd1`` carries the
whole days, so the fractional day keeps full precision even though the
Julian Date itself is a large number.

The numeric type of the components is generic. Python floats stay Python
floats, ``fractions.Fraction`` and NumPy scalars are preserved, and JAX
arrays or tracers flow through every operation. ``Time`` is registered as a
JAX pytree with ``(jd1, jd2)`` as leaves and ``(scale, format)`` as static
data, so it works under ``jax.jit``, ``jax.vmap`` and ``jax.grad``:
differentiating a quantity with respect to a time offset is supported.

Time values are immutable. Scale conversion, arithmetic and format queries
return new ``Time`` objects or plain numbers and strings.
"""

from __future__ import annotations

import jax

from .constants import JD_MJD_OFFSET
from .conversions import ConversionGraph, apply_offsets
from .exceptions import FormatMismatchError, InternalError, InvalidArgumentError, ScaleMismatchError
from .scales import TimeFormat, TimeScale, as_format, as_scale, is_tag
from .time import format_isot, isot_to_jd
from .utils import cast_like, floor, is_real, promote, rebalance, zero_like


def _type_name(value) -> str:
    return type(value).__name__


class Time:
    """High-precision astronomical epoch stored as a split Julian Date.

    Constructors:
        Time(jd1, jd2, scale, format)
        Time(value, scale, format)       # JD or MJD number
        Time(isostr, scale, format)      # "YYYY-MM-DDTHH:MM:SS[.fff]", ISOT only
        Time(other_time)

    ``scale`` and ``format`` accept :class:`~astroepochs.scales.TimeScale` /
    :class:`~astroepochs.scales.TimeFormat` members or their case-insensitive
    names.

    Properties:
        - ``jd1``, ``jd2``, ``scale``, ``format``: stored fields.
        - ``jd``, ``mjd``, ``isot``, ``value``: the epoch in a given format.
        - ``tai``, ``tt``, ``tdb``, ``utc``, ``tcb``, ``tcg``: a new ``Time``
          converted to that scale, keeping the format.

    Arithmetic is in days: ``t + 1.0`` advances one day and ``t2 - t1``
    returns the difference in days. Subtraction and ordering require equal
    scales and formats.

    Examples:
        ```python
        from astroepochs import Time

        t = Time(2451545.0, 0.25, "tt", "jd")
        t.tdb.mjd
        Time("2024-02-29T12:34:56.000", "tai", "isot").isot
        (t + 2.0) - t  # 2.0
        ```
    """

    __slots__ = ("_jd1", "_jd2", "_scale", "_format")

    def __init__(self, *args) -> None:
        """Initialize Time. Supports multiple constructor forms.

        Args:
            *args: ``(jd1, jd2, scale, format)``, ``(value, scale, format)``
                where *value* is a real number or an ISO 8601 string, or a
                single ``Time`` to copy.

        Raises:
            InvalidArgumentError: If a tag is unsupported, the value does not
                match the format, or an ISO 8601 string is malformed.
        """
        if len(args) == 4:
            self._init_parts(*args)
        elif len(args) == 3:
            if isinstance(args[0], str):
                self._init_string(*args)
            else:
                self._init_value(*args)
        elif len(args) == 1 and isinstance(args[0], Time):
            self._init_time(args[0])
        else:
            raise InvalidArgumentError(
                "Time requires (jd1, jd2, scale, format), (value, scale, format), or a Time"
            )

    @classmethod
    def _from_internal(cls, jd1, jd2, scale: TimeScale, format: TimeFormat) -> Time:
        """Create a Time from already balanced components without validation.

        Used by pytree unflatten, where the leaves may be placeholders rather
        than numbers, and by operations whose output is already balanced.
        """
        obj = object.__new__(cls)
        obj._jd1 = jd1
        obj._jd2 = jd2
        obj._scale = scale
        obj._format = format
        return obj

    def _init_parts(self, jd1, jd2, scale, format):
        """Initialize from split Julian Date components."""
        problems = []
        if not is_real(jd1):
            problems.append(f"jd1 must be real; got {_type_name(jd1)}.")
        if not is_real(jd2):
            problems.append(f"jd2 must be real; got {_type_name(jd2)}.")
        if not is_tag(scale):
            problems.append(f"scale must be a TimeScale or str; got {_type_name(scale)}.")
        if not is_tag(format):
            problems.append(f"format must be a TimeFormat or str; got {_type_name(format)}.")
        if problems:
            raise InvalidArgumentError("Time: invalid time input types. " + " ".join(problems))

        self._scale = as_scale(scale)
        self._format = as_format(format)
        self._jd1, self._jd2 = rebalance(jd1, jd2)

    def _init_value(self, value, scale, format):
        """Initialize from a single JD or MJD number."""
        scale = as_scale(scale)
        format = as_format(format)
        _validate_input_coupling(value, format)

        whole = floor(value)
        if format is TimeFormat.JD:
            jd1, jd2 = whole, value - whole
        elif format is TimeFormat.MJD:
            jd1, jd2 = whole + cast_like(value, JD_MJD_OFFSET), value - whole
        else:
            raise InternalError(f"Unsupported numeric time format {format}")

        self._scale = scale
        self._format = format
        self._jd1, self._jd2 = rebalance(jd1, jd2)

    def _init_string(self, isostr, scale, format):
        """Initialize from an ISO 8601 string."""
        scale = as_scale(scale)
        format = as_format(format)
        _validate_input_coupling(isostr, format)

        self._scale = scale
        self._format = format
        self._jd1, self._jd2 = rebalance(*isot_to_jd(isostr))

    def _init_time(self, other):
        """Initialize as a copy of another Time."""
        self._jd1 = other._jd1
        self._jd2 = other._jd2
        self._scale = other._scale
        self._format = other._format

    # Stored fields

    @property
    def jd1(self):
        """First component of the split Julian Date (whole days)."""
        return self._jd1

    @property
    def jd2(self):
        """Second component of the split Julian Date, in ``[-0.5, 0.5)``."""
        return self._jd2

    @property
    def scale(self) -> TimeScale:
        """Time scale tag."""
        return self._scale

    @property
    def format(self) -> TimeFormat:
        """Time format tag."""
        return self._format

    # Format accessors

    @property
    def jd(self):
        """Julian Date as a single number, ``jd1 + jd2``."""
        return self._jd1 + self._jd2

    @property
    def mjd(self):
        """Modified Julian Date, ``(jd1 - 2400000.5) + jd2``."""
        return (self._jd1 - cast_like(self._jd1, JD_MJD_OFFSET)) + self._jd2

    @property
    def isot(self) -> str:
        """ISO 8601 string ``YYYY-MM-DDTHH:MM:SS.sss`` rounded to the millisecond.

        Extracts concrete values, so it is not available under ``jax.jit``.
        """
        return format_isot(self._jd1, self._jd2)

    @property
    def value(self):
        """The epoch expressed in its own format: ``jd``, ``mjd`` or ``isot``."""
        if self._format is TimeFormat.JD:
            return self.jd
        if self._format is TimeFormat.MJD:
            return self.mjd
        if self._format is TimeFormat.ISOT:
            return self.isot
        raise InternalError(f"Unsupported time format {self._format}")

    # Scale conversion

    def to_scale(self, scale: TimeScale | str, graph: ConversionGraph | None = None) -> Time:
        """Return this epoch converted to *scale*, keeping the format.

        Args:
            scale: Target time scale.
            graph: Conversion graph supplying the offset models. Default:
                :data:`~astroepochs.conversions.DEFAULT_GRAPH`.

        Returns:
            Time: New epoch in the target scale. This epoch is unchanged.

        Raises:
            InvalidArgumentError: If *scale* is not a supported time scale.
            ConversionError: If the graph has no path to *scale*.
        """
        scale = as_scale(scale)
        jd1, jd2 = apply_offsets(self._jd1, self._jd2, self._scale, scale, graph=graph)
        return Time._from_internal(jd1, jd2, scale, self._format)

    @property
    def tai(self) -> Time:
        """This epoch in International Atomic Time."""
        return self.to_scale(TimeScale.TAI)

    @property
    def tt(self) -> Time:
        """This epoch in Terrestrial Time."""
        return self.to_scale(TimeScale.TT)

    @property
    def tdb(self) -> Time:
        """This epoch in Barycentric Dynamical Time."""
        return self.to_scale(TimeScale.TDB)

    @property
    def utc(self) -> Time:
        """This epoch in Coordinated Universal Time."""
        return self.to_scale(TimeScale.UTC)

    @property
    def tcb(self) -> Time:
        """This epoch in Barycentric Coordinate Time."""
        return self.to_scale(TimeScale.TCB)

    @property
    def tcg(self) -> Time:
        """This epoch in Geocentric Coordinate Time."""
        return self.to_scale(TimeScale.TCG)

    # Arithmetic operators

    def __add__(self, days) -> Time:
        """Return a new Time advanced by *days*.

        The offset is split into whole days and a fraction before it is
        added, so large offsets do not spill into ``jd2``. The numeric type
        of *days* is kept, which lets JAX tracers (and their gradients) pass
        through.

        Args:
            days: Offset in days.

        Returns:
            Time: New epoch with the same scale and format.
        """
        if isinstance(days, Time) or not is_real(days):
            return NotImplemented
        d1, d2 = rebalance(zero_like(days), days)
        jd1, jd2 = rebalance(self._jd1 + d1, self._jd2 + d2)
        return Time._from_internal(jd1, jd2, self._scale, self._format)

    def __radd__(self, days) -> Time:
        return self.__add__(days)

    def __sub__(self, other):
        """Subtract days, or compute the difference between two epochs.

        Args:
            other: If ``Time``, returns ``self - other`` in days. If numeric,
                returns a new Time moved back by that many days.

        Returns:
            Time or number: New epoch, or the difference in days.

        Raises:
            ScaleMismatchError: If both epochs have different scales.
            FormatMismatchError: If both epochs have different formats.
        """
        if isinstance(other, Time):
            _check_compatible(other, self, "subtract")
            return (self._jd1 - other._jd1) + (self._jd2 - other._jd2)
        if not is_real(other):
            return NotImplemented
        return self.__add__(-other)

    # Comparison operators

    def __eq__(self, other):
        """Value equality: same scale, same format and equal ``jd1 + jd2``.

        Different internal splits of the same Julian Date compare equal. No
        scale conversion is performed; epochs with different tags are not
        equal.
        """
        if not isinstance(other, Time):
            return NotImplemented
        if self._scale is not other._scale or self._format is not other._format:
            return False
        a1, b1 = promote(self._jd1, other._jd1)
        a2, b2 = promote(self._jd2, other._jd2)
        return (a1 + a2) == (b1 + b2)

    def __ne__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        eq = self.__eq__(other)
        return not eq if isinstance(eq, bool) else ~eq

    def __lt__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self._difference(other, "compare") < 0

    def __le__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self._difference(other, "compare") <= 0

    def __gt__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self._difference(other, "compare") > 0

    def __ge__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self._difference(other, "compare") >= 0

    def _difference(self, other: Time, action: str):
        _check_compatible(other, self, action)
        return (self._jd1 - other._jd1) + (self._jd2 - other._jd2)

    # String representations

    def __str__(self):
        return f"{self.value} {self._scale} ({self._format})"

    def __repr__(self):
        return (
            f"Time(jd1={self._jd1!r}, jd2={self._jd2!r}, "
            f"scale={self._scale!r}, format={self._format!r})"
        )

    def __hash__(self):
        return hash((self._scale, self._format, float(self._jd1 + self._jd2)))


def _validate_input_coupling(value, format: TimeFormat) -> None:
    """Check that *value* has the input type that *format* requires."""
    if format is TimeFormat.ISOT:
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Time: format {format} requires str input. Got {_type_name(value)}"
            )
    elif format in (TimeFormat.JD, TimeFormat.MJD):
        if not is_real(value):
            raise InvalidArgumentError(
                f"Time: format {format} requires real input. Got {_type_name(value)}"
            )
    else:
        raise InternalError(f"Time: unsupported format {format} in this constructor.")


def _check_compatible(t1: Time, t2: Time, action: str) -> None:
    if t1.scale is not t2.scale:
        raise ScaleMismatchError(
            f"Cannot {action} Times with different scales ({t1.scale} vs {t2.scale})"
        )
    if t1.format is not t2.format:
        raise FormatMismatchError(
            f"Cannot {action} Times with different formats ({t1.format} vs {t2.format})"
        )


# Register Time as a JAX pytree so it can be used with jit, vmap, grad, etc.
jax.tree_util.register_pytree_node(
    Time,
    lambda t: ((t._jd1, t._jd2), (t._scale, t._format)),
    lambda aux, children: Time._from_internal(*children, *aux),
)
