"""
astroepochs is a high-precision astronomical time library implemented on top of JAX.
"""

from .constants import (
    SECONDS_PER_DAY,
    JD_MJD_OFFSET,
    JD_J2000,
    MJD2000,
    TT_TAI,
    L_G,
    L_B,
    TDB0,
    JD_T0,
)

from .config import set_dtype, get_dtype

from .exceptions import (
    AstroEpochsError,
    InvalidArgumentError,
    ConversionError,
    ScaleMismatchError,
    FormatMismatchError,
    InternalError,
)

from .scales import TimeScale, TimeFormat

from .time import (
    caldate_to_jd,
    jd_to_caldate,
    parse_isot,
    format_isot,
)

from .offsets import leap_seconds_tai_utc

from .conversions import (
    ConversionGraph,
    DEFAULT_GRAPH,
    get_conversion_path,
    apply_offsets,
)

from .epoch import Time

# Tag aliases
TAI = TimeScale.TAI
TT = TimeScale.TT
TDB = TimeScale.TDB
UTC = TimeScale.UTC
TCB = TimeScale.TCB
TCG = TimeScale.TCG

JD = TimeFormat.JD
MJD = TimeFormat.MJD
ISOT = TimeFormat.ISOT

__all__ = [
    # Constants
    "SECONDS_PER_DAY",
    "JD_MJD_OFFSET",
    "JD_J2000",
    "MJD2000",
    "TT_TAI",
    "L_G",
    "L_B",
    "TDB0",
    "JD_T0",
    # Config
    "set_dtype",
    "get_dtype",
    # Exceptions
    "AstroEpochsError",
    "InvalidArgumentError",
    "ConversionError",
    "ScaleMismatchError",
    "FormatMismatchError",
    "InternalError",
    # Tags
    "TimeScale",
    "TimeFormat",
    "TAI",
    "TT",
    "TDB",
    "UTC",
    "TCB",
    "TCG",
    "JD",
    "MJD",
    "ISOT",
    # Calendar
    "caldate_to_jd",
    "jd_to_caldate",
    "parse_isot",
    "format_isot",
    # Offsets
    "leap_seconds_tai_utc",
    # Conversions
    "ConversionGraph",
    "DEFAULT_GRAPH",
    "get_conversion_path",
    "apply_offsets",
    # Epoch
    "Time",
]
