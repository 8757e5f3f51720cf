
"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used for
JAX values that carry no float dtype of their own, such as integer arrays
passed as Julian Date components or as offset-model seconds.  Floating JAX
inputs keep their own dtype so gradients and traced values flow through
unchanged.  The default is ``jnp.float32``; switching to ``jnp.float64``
automatically enables JAX's 64-bit mode (``jax_enable_x64``).

Plain Python and NumPy inputs never use this setting.  Offsets for them are
evaluated with NumPy in the epoch's own precision (float64 for Python floats,
ints and ``Fraction``), and the split Julian Date components of a
:class:`~astroepochs.epoch.Time` are never cast.

Call ``set_dtype`` **before** any JIT compilation.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype used for JAX inputs without a float dtype.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    logger.debug("Default float dtype set to %s", jnp.dtype(dtype).name)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float32``).
    """
    return _dtype
