"""One-hop time scale offset models.

Each ``offset_<src>2<dst>`` function takes the elapsed time since J2000.0,
in seconds of the *source* scale, and returns ``dst - src`` in seconds. All
functions are pure and keep the numeric precision of their input:

- JAX arrays and tracers are evaluated with ``jax.numpy`` in their own
  floating dtype, so the models are traceable under ``jax.jit``,
  ``jax.vmap`` and ``jax.grad``. JAX integer arrays fall back to the dtype
  returned by :func:`~astroepochs.config.get_dtype`.
- Everything else (Python numbers, ``fractions.Fraction``, NumPy scalars) is
  evaluated with NumPy, in the input's floating dtype or ``float64``.

Fidelity note:
    The TDB - TT model is the single-term periodic approximation used by
    NAIF/SPICE. It is accurate to roughly tens of microseconds, which is
    adequate for design and trade studies but not for navigation-grade
    timing. TCB conversions are built on TDB and inherit the approximation.
    A higher-fidelity model (for example the ERFA ``dtdb`` harmonic series)
    can be substituted per conversion graph with
    :meth:`~astroepochs.conversions.ConversionGraph.with_offset`.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import (
    JD_J2000,
    JD_T0,
    L_B,
    L_G,
    MJD2000,
    SECONDS_PER_DAY,
    TAI_UTC_1972,
    TDB0,
    TDB_TT_EB,
    TDB_TT_K,
    TDB_TT_M0,
    TDB_TT_M1,
    TT_TAI,
)

# Seconds from J2000.0 to T0 (1977-01-01T00:00:32.184 TT), negative
_T0_SECONDS = (JD_T0 - JD_J2000) * SECONDS_PER_DAY

# Leap second table: (MJD of introduction, TAI-UTC in seconds)
# Each entry marks the UTC MJD at which TAI-UTC steps to the given value.
# Source: IERS Bulletin C / USNO leap second table (1972-01-01 through 2017-01-01).
_LEAP_SECOND_TABLE: tuple[tuple[float, float], ...] = (
    (41317.0, 10.0),  # 1972-01-01
    (41499.0, 11.0),  # 1972-07-01
    (41683.0, 12.0),  # 1973-01-01
    (42048.0, 13.0),  # 1974-01-01
    (42413.0, 14.0),  # 1975-01-01
    (42778.0, 15.0),  # 1976-01-01
    (43144.0, 16.0),  # 1977-01-01
    (43509.0, 17.0),  # 1978-01-01
    (43874.0, 18.0),  # 1979-01-01
    (44239.0, 19.0),  # 1980-01-01
    (44786.0, 20.0),  # 1981-07-01
    (45151.0, 21.0),  # 1982-07-01
    (45516.0, 22.0),  # 1983-07-01
    (46247.0, 23.0),  # 1985-07-01
    (47161.0, 24.0),  # 1988-01-01
    (47892.0, 25.0),  # 1990-01-01
    (48257.0, 26.0),  # 1991-01-01
    (48804.0, 27.0),  # 1992-07-01
    (49169.0, 28.0),  # 1993-07-01
    (49534.0, 29.0),  # 1994-07-01
    (50083.0, 30.0),  # 1996-01-01
    (50630.0, 31.0),  # 1997-07-01
    (51179.0, 32.0),  # 1999-01-01
    (53736.0, 33.0),  # 2006-01-01
    (54832.0, 34.0),  # 2009-01-01
    (56109.0, 35.0),  # 2012-07-01
    (57204.0, 36.0),  # 2015-07-01
    (57754.0, 37.0),  # 2017-01-01
)


Seconds = jax.Array | np.ndarray


def _namespace(x):
    return jnp if isinstance(x, jax.Array) else np


def _as_seconds(seconds: ArrayLike) -> Seconds:
    """Return *seconds* as a floating array in its own working precision."""
    if isinstance(seconds, jax.Array):
        if jnp.issubdtype(seconds.dtype, jnp.floating):
            return seconds
        return seconds.astype(get_dtype())
    seconds = np.asarray(seconds)
    if np.issubdtype(seconds.dtype, np.floating):
        return seconds
    # int and Fraction inputs
    return np.asarray(seconds, dtype=np.float64)


def leap_seconds_tai_utc(mjd: ArrayLike) -> Seconds:
    """Return TAI-UTC (cumulative leap seconds) for a given UTC MJD.

    Uses a hardcoded step-function lookup table covering 1972-01-01 through
    2017-01-01. For dates before 1972, returns 10.0; for dates after the last
    entry, returns the most recent value (37.0).

    JIT-compatible for JAX input: uses ``searchsorted`` for O(log n) lookup.

    Args:
        mjd: Modified Julian Date (UTC), scalar or array.

    Returns:
        TAI-UTC in seconds.
    """
    mjd = _as_seconds(mjd)
    xp = _namespace(mjd)
    mjd_breaks = xp.asarray([m for m, _ in _LEAP_SECOND_TABLE], dtype=mjd.dtype)
    tai_utc_vals = xp.asarray([v for _, v in _LEAP_SECOND_TABLE], dtype=mjd.dtype)

    # side='right' gives the first break strictly after mjd, so idx-1 is the
    # entry in force
    idx = xp.searchsorted(mjd_breaks, mjd, side="right")
    return xp.where(idx == 0, xp.asarray(TAI_UTC_1972, dtype=mjd.dtype), tai_utc_vals[idx - 1])


def _mjd_from_seconds(seconds: Seconds) -> Seconds:
    return MJD2000 + seconds / SECONDS_PER_DAY


def offset_tai2tt(seconds: ArrayLike) -> Seconds:
    """Return TT - TAI in seconds (constant 32.184 s)."""
    seconds = _as_seconds(seconds)
    return _namespace(seconds).full_like(seconds, TT_TAI)


def offset_tt2tai(seconds: ArrayLike) -> Seconds:
    """Return TAI - TT in seconds (constant -32.184 s)."""
    seconds = _as_seconds(seconds)
    return _namespace(seconds).full_like(seconds, -TT_TAI)


def offset_utc2tai(seconds: ArrayLike) -> Seconds:
    """Return TAI - UTC in seconds from the leap second table.

    Args:
        seconds: UTC seconds since J2000.0.

    Returns:
        Cumulative leap seconds in force at the given UTC instant.
    """
    seconds = _as_seconds(seconds)
    return leap_seconds_tai_utc(_mjd_from_seconds(seconds))


def offset_tai2utc(seconds: ArrayLike) -> Seconds:
    """Return UTC - TAI in seconds from the leap second table.

    The table is indexed by UTC, so the TAI instant is first shifted by the
    leap seconds in force at TAI and the lookup repeated at the resulting
    UTC estimate.

    Args:
        seconds: TAI seconds since J2000.0.

    Returns:
        Negative cumulative leap seconds.
    """
    seconds = _as_seconds(seconds)
    utc_guess = seconds - leap_seconds_tai_utc(_mjd_from_seconds(seconds))
    return -leap_seconds_tai_utc(_mjd_from_seconds(utc_guess))


def _tdb_minus_tt(seconds: Seconds) -> Seconds:
    g = TDB_TT_M0 + TDB_TT_M1 * seconds
    xp = _namespace(seconds)
    return TDB_TT_K * xp.sin(g + TDB_TT_EB * xp.sin(g))


def offset_tt2tdb(seconds: ArrayLike) -> Seconds:
    """Return TDB - TT in seconds using the low-fidelity periodic model.

    Args:
        seconds: TT seconds since J2000.0.

    Returns:
        TDB - TT, bounded by about 1.7 ms.

    References:

        1. NAIF SPICE Toolkit, *Time Required Reading*, ``DELTET`` kernel
           variables ``DELTA_T_A``, ``K``, ``EB`` and ``M``.
    """
    seconds = _as_seconds(seconds)
    return _tdb_minus_tt(seconds)


def offset_tdb2tt(seconds: ArrayLike) -> Seconds:
    """Return TT - TDB in seconds using the low-fidelity periodic model.

    The periodic term is evaluated at the TDB argument; the difference from
    evaluating it at TT is below a picosecond.

    Args:
        seconds: TDB seconds since J2000.0.

    Returns:
        TT - TDB, bounded by about 1.7 ms.
    """
    seconds = _as_seconds(seconds)
    return -_tdb_minus_tt(seconds)


def offset_tt2tcg(seconds: ArrayLike) -> Seconds:
    """Return TCG - TT in seconds.

    Args:
        seconds: TT seconds since J2000.0.

    Returns:
        Accumulated TCG - TT rate offset since 1977-01-01T00:00:32.184 TT.

    References:

        1. G. Petit and B. Luzum, *IERS Technical Note 36*, 2010, eq. 10.6.
    """
    seconds = _as_seconds(seconds)
    return (L_G / (1.0 - L_G)) * (seconds - _T0_SECONDS)


def offset_tcg2tt(seconds: ArrayLike) -> Seconds:
    """Return TT - TCG in seconds.

    Args:
        seconds: TCG seconds since J2000.0.
    """
    seconds = _as_seconds(seconds)
    return -L_G * (seconds - _T0_SECONDS)


def offset_tdb2tcb(seconds: ArrayLike) -> Seconds:
    """Return TCB - TDB in seconds.

    Args:
        seconds: TDB seconds since J2000.0.

    Returns:
        Accumulated TCB - TDB rate offset, including the ``TDB0`` constant.

    References:

        1. IAU 2006 Resolution B3.
    """
    seconds = _as_seconds(seconds)
    return (L_B * (seconds - _T0_SECONDS) - TDB0) / (1.0 - L_B)


def offset_tcb2tdb(seconds: ArrayLike) -> Seconds:
    """Return TDB - TCB in seconds.

    Args:
        seconds: TCB seconds since J2000.0.
    """
    seconds = _as_seconds(seconds)
    return -L_B * (seconds - _T0_SECONDS) + TDB0
