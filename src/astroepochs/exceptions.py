"""Exception types raised by the astroepochs time system.

Every error derives from :class:`AstroEpochsError`. Argument and mismatch
errors additionally subclass :class:`ValueError` so callers that already
guard numeric parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class AstroEpochsError(Exception):
    """Base class for all astroepochs errors."""


class InvalidArgumentError(AstroEpochsError, ValueError):
    """An input tag, value, or ISO 8601 string was rejected during validation."""


class ConversionError(AstroEpochsError):
    """No conversion path or offset model exists between two time scales."""


class ScaleMismatchError(AstroEpochsError, ValueError):
    """Two epochs with different time scales were combined."""


class FormatMismatchError(AstroEpochsError, ValueError):
    """Two epochs with different time formats were combined."""


class InternalError(AstroEpochsError, RuntimeError):
    """A branch that upstream validation should make unreachable was reached."""
