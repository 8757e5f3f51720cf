import jax.numpy as jnp
import pytest

from astroepochs.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Evaluate offset models in float64 before every test.

    JAX starts in 32-bit mode. This fixture enables 64-bit mode so scale
    conversions of Python-float epochs keep sub-microsecond accuracy, unless
    a module overrides it (test_config.py resets to float32).
    """
    set_dtype(jnp.float64)
