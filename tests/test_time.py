import pytest

from astroepochs import TAI, UTC, ISOT
from astroepochs.epoch import Time
from astroepochs.exceptions import InvalidArgumentError
from astroepochs.time import (
    caldate_to_jd,
    caldate_to_mjd,
    format_isot,
    isot_to_jd,
    jd_to_caldate,
    parse_isot,
)


def test_caldate_to_mjd():
    assert caldate_to_mjd(2000, 1, 1) == 51544


def test_caldate_to_mjd_leap_day():
    assert caldate_to_mjd(2024, 2, 29) == 60369


def test_caldate_to_mjd_mjd_epoch():
    assert caldate_to_mjd(1858, 11, 17) == 0


def test_caldate_to_mjd_gregorian_reform():
    # Proleptic Gregorian throughout, so the day before the reform is contiguous
    assert caldate_to_mjd(1582, 10, 15) == -100840
    assert caldate_to_mjd(1582, 10, 14) == -100841


def test_caldate_to_jd():
    assert caldate_to_jd(2000, 1, 1, 12, 0, 0) == (2451545.0, 0.0)


def test_caldate_to_jd_midnight():
    jd1, jd2 = caldate_to_jd(2000, 1, 1)
    assert jd1 == 2451545.0
    assert jd2 == -0.5


def test_caldate_to_jd_fraction_of_day():
    jd1, jd2 = caldate_to_jd(2017, 9, 21, 12, 23, 12.0)
    assert jd1 == 2458018.0
    assert jd2 == pytest.approx(0.016111111111111076, abs=1e-12)


def test_jd_to_caldate_j2000():
    year, month, day, hour, minute, second = jd_to_caldate(2451545.0)
    assert year == 2000
    assert month == 1
    assert day == 1
    assert hour == 12
    assert minute == 0
    assert second == pytest.approx(0.0, abs=1e-6)


def test_jd_to_caldate_midnight():
    year, month, day, hour, minute, second = jd_to_caldate(2451544.5)
    assert year == 2000
    assert month == 1
    assert day == 1
    assert hour == 0
    assert minute == 0
    assert second == pytest.approx(0.0, abs=1e-6)


def test_jd_to_caldate_split():
    year, month, day, hour, minute, second = jd_to_caldate(2460370.0, 0.024259259259259314)
    assert (year, month, day) == (2024, 2, 29)
    assert (hour, minute) == (12, 34)
    assert second == pytest.approx(56.0, abs=1e-6)


def test_jd_to_caldate_gregorian_reform():
    year, month, day, hour, minute, second = jd_to_caldate(2299161.0, -0.5)
    assert (year, month, day) == (1582, 10, 15)
    assert (hour, minute) == (0, 0)


def test_jd_to_caldate_unbalanced_split():
    # jd2 outside [-0.5, 0.5) is still interpreted as jd1 + jd2
    assert jd_to_caldate(2451540.0, 5.25) == (2000, 1, 1, 18, 0, 0.0)


def test_jd_to_caldate_caldate_to_jd_roundtrip():
    for fields in (
        (1972, 1, 1, 0, 0, 0.0),
        (1999, 12, 31, 23, 59, 59.999),
        (2000, 2, 29, 6, 30, 15.5),
        (2017, 1, 1, 0, 0, 37.0),
        (2100, 3, 1, 12, 0, 0.0),
    ):
        assert jd_to_caldate(*caldate_to_jd(*fields)) == pytest.approx(fields, abs=1e-6)


def test_parse_isot():
    assert parse_isot("2024-02-29T12:34:56.125") == (2024, 2, 29, 12, 34, 56.125)


def test_parse_isot_without_fraction():
    assert parse_isot("2024-02-29T12:34:56") == (2024, 2, 29, 12, 34, 56.0)


def test_parse_isot_rejects_time_zone():
    with pytest.raises(InvalidArgumentError, match="Invalid ISO 8601 format"):
        parse_isot("2024-02-29T12:34:56+00:00")


def test_parse_isot_rejects_non_ascii_digits():
    with pytest.raises(InvalidArgumentError, match="Invalid ISO 8601 format"):
        parse_isot("٢٠٢٤-02-29T12:34:56")


def test_isot_to_jd():
    assert isot_to_jd("2000-01-01T12:00:00") == (2451545.0, 0.0)


def test_format_isot():
    assert format_isot(2451545.0, 0.25) == "2000-01-01T18:00:00.000"


def test_format_isot_single_value():
    assert format_isot(2451544.5) == "2000-01-01T00:00:00.000"


def test_format_isot_rounds_milliseconds():
    assert format_isot(2451545.0, 0.0006 / 86400.0) == "2000-01-01T12:00:00.001"
    assert format_isot(2451545.0, 0.0004 / 86400.0) == "2000-01-01T12:00:00.000"


def test_format_isot_carries_into_next_day():
    assert format_isot(2451545.0, 0.4999999999) == "2000-01-02T00:00:00.000"


def test_format_isot_carries_into_next_year():
    assert format_isot(2451910.0, 0.4999999999) == "2001-01-01T00:00:00.000"


def test_century_year_is_not_leap():
    t = Time("2100-02-28T00:00:00", UTC, ISOT) + 1.0
    assert t.isot == "2100-03-01T00:00:00.000"


def test_quadricentennial_year_is_leap():
    t = Time("2000-02-28T00:00:00", UTC, ISOT) + 1.0
    assert t.isot == "2000-02-29T00:00:00.000"


def test_leap_year_end():
    t = Time("2024-12-31T23:59:59.500", TAI, ISOT) + 0.5 / 86400.0
    assert t.isot == "2025-01-01T00:00:00.000"


@pytest.mark.parametrize(
    "isostr",
    ["2023-02-30T00:00:00", "2023-02-29T00:00:00", "2100-02-29T00:00:00", "2023-04-31T00:00:00"],
)
def test_parse_isot_rejects_day_past_month_end(isostr):
    with pytest.raises(InvalidArgumentError, match="Day must be between 1 and"):
        parse_isot(isostr)


def test_parse_isot_accepts_leap_day():
    assert parse_isot("2024-02-29T00:00:00")[:3] == (2024, 2, 29)
    assert parse_isot("2000-02-29T00:00:00")[:3] == (2000, 2, 29)


def test_invalid_calendar_date_not_constructed():
    with pytest.raises(InvalidArgumentError, match="for 2023-02"):
        Time("2023-02-30T00:00:00", UTC, ISOT)


def test_format_isot_last_representable_millisecond():
    assert format_isot(*caldate_to_jd(9999, 12, 31, 23, 59, 59.0)) == "9999-12-31T23:59:59.000"


def test_format_isot_rejects_year_past_9999():
    with pytest.raises(InvalidArgumentError, match="outside the ISO 8601 range"):
        format_isot(*caldate_to_jd(9999, 12, 31, 23, 59, 59.9996))


def test_isot_past_year_9999_raises():
    t = Time("9999-12-31T23:59:59", TAI, ISOT) + 1.0
    with pytest.raises(InvalidArgumentError):
        t.isot
