"""Type-generic numeric helpers for split Julian Date arithmetic.

Epoch components may be plain Python numbers (``float``, ``int``,
``fractions.Fraction``), NumPy floating scalars, or JAX arrays and tracers.
These helpers dispatch on that type so the same code path preserves the
caller's numeric type, stays exact for Python numbers, and remains
traceable under ``jax.jit``, ``jax.grad`` and ``jax.vmap`` for JAX inputs.
"""

from __future__ import annotations

import math
import numbers

import jax
import jax.numpy as jnp
import numpy as np

from .config import get_dtype


def is_array(x) -> bool:
    """Return ``True`` if *x* is a JAX array or tracer."""
    return isinstance(x, jax.Array)


def is_real(x) -> bool:
    """Return ``True`` if *x* is a supported real-number-like value.

    Booleans are rejected even though Python treats them as integers.
    """
    if isinstance(x, bool):
        return False
    if is_array(x):
        return jnp.issubdtype(x.dtype, jnp.floating) or jnp.issubdtype(x.dtype, jnp.integer)
    return isinstance(x, numbers.Real)


def promote(a, b):
    """Convert *a* and *b* to a common floating numeric type.

    JAX inputs win over everything else, then NumPy scalars, then the
    Python numeric tower. Integer results are promoted to a float type so
    fractional day parts can be represented.

    Returns:
        tuple: ``(a, b)`` converted to the common type.
    """
    if is_array(a) or is_array(b):
        dtype = jnp.result_type(a, b)
        if not jnp.issubdtype(dtype, jnp.floating):
            dtype = get_dtype()
        return jnp.asarray(a, dtype=dtype), jnp.asarray(b, dtype=dtype)

    if isinstance(a, np.generic) or isinstance(b, np.generic):
        dtype = np.result_type(a, b)
        if not np.issubdtype(dtype, np.floating):
            dtype = np.dtype(np.float64)
        return dtype.type(a), dtype.type(b)

    common = type(a + b)
    if issubclass(common, numbers.Integral):
        common = float
    return common(a), common(b)


def floor(x):
    """Return ``floor(x)`` with the same numeric type as *x*."""
    if is_array(x):
        return jnp.floor(x)
    if isinstance(x, np.generic):
        return np.floor(x)
    return type(x)(math.floor(x))


def zero_like(x):
    """Return a zero with the same numeric type as *x*."""
    return x - x


def cast_like(like, value):
    """Convert *value* to the numeric type of *like*.

    Used to bring offset-model output (a JAX array) back into the working
    type of an epoch. Traced values are returned unchanged so JAX promotion
    takes over when a computation is being staged.
    """
    if is_array(like):
        return jnp.asarray(value, dtype=like.dtype)
    if isinstance(value, jax.core.Tracer):
        return value
    if isinstance(like, np.generic):
        return like.dtype.type(float(value))
    return type(like)(float(value))


def rebalance(jd1, jd2):
    """Rebalance a split Julian Date so that ``-0.5 <= jd2 < 0.5``.

    Whole days are moved from ``jd2`` into ``jd1``. A ``jd2`` of exactly
    ``0.5`` shifts up to ``-0.5``. The shift is computed in closed form, so
    large offsets cost the same as small ones, and a single guard step
    corrects the case where ``jd2 + 0.5`` rounds up to the next integer.

    Both components are first promoted to a common numeric type. JAX inputs
    use ``jnp.floor``/``jnp.where`` and remain traceable; the shift has zero
    derivative, so gradients pass through ``jd2`` unchanged.

    Args:
        jd1: First component of the Julian Date.
        jd2: Second component of the Julian Date.

    Returns:
        tuple: ``(jd1, jd2)`` with the same sum and ``jd2`` in ``[-0.5, 0.5)``.
    """
    jd1, jd2 = promote(jd1, jd2)
    half = cast_like(jd2, 0.5)

    shift = floor(jd2 + half)
    jd1 = jd1 + shift
    jd2 = jd2 - shift

    if is_array(jd2):
        guard = jnp.where(jd2 < -half, 1.0, 0.0).astype(jd2.dtype)
        return jd1 - guard, jd2 + guard
    if jd2 < -half:
        return jd1 - 1, jd2 + 1
    return jd1, jd2
