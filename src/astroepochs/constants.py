"""
The `constants` module defines the time constants used by the astroepochs time system.
"""

# Day and epoch constants

"""
Number of SI seconds in one day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD_J2000 = 2451545.0

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

# Time scale constants

"""
Constant offset between Terrestrial Time and International Atomic Time, TT - TAI. Units: *s*

References:

1. G. Petit and B. Luzum, *IERS Technical Note 36*, 2010
"""
TT_TAI = 32.184

"""
TAI-UTC offset used for dates before the first tabulated leap second (1972-01-01). Units: *s*
"""
TAI_UTC_1972 = 10.0

"""
Rate of TCG relative to TT, 1 - d(TT)/d(TCG). Units: *dimensionless*

References:

1. IAU 2000 Resolution B1.9
"""
L_G = 6.969290134e-10

"""
Rate of TCB relative to TDB, 1 - d(TDB)/d(TCB). Units: *dimensionless*

References:

1. IAU 2006 Resolution B3
"""
L_B = 1.550519768e-8

"""
TDB - TCB at the T0 epoch. Units: *s*

References:

1. IAU 2006 Resolution B3
"""
TDB0 = -6.55e-5

"""
Julian Date of 1977-01-01T00:00:32.184 TT, where TT, TCG and TCB coincide. Units: *days*
"""
JD_T0 = 2443144.5003725

# TDB - TT periodic model coefficients (NAIF/SPICE approximation)

"""
Amplitude of the TDB - TT periodic term. Units: *s*
"""
TDB_TT_K = 1.657e-3

"""
Eccentricity of the Earth-Moon barycenter orbit used by the TDB - TT model. Units: *dimensionless*
"""
TDB_TT_EB = 1.671e-2

"""
Mean anomaly of the Earth-Moon barycenter at J2000.0. Units: *rad*
"""
TDB_TT_M0 = 6.239996

"""
Mean motion of the Earth-Moon barycenter. Units: *rad/s*
"""
TDB_TT_M1 = 1.99096871e-7
