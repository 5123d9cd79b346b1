import calendar
import datetime
import time

import pytest

from towerdefence.timestamp import Timestamp, days_in_year, is_leap_year


@pytest.mark.parametrize("year", range(1890, 2110))
def test_is_leap_year_matches_calendar(year):
    assert is_leap_year(year) == calendar.isleap(year)


@pytest.mark.parametrize("year", [1900, 2000, 2023, 2024])
def test_days_in_year(year):
    assert days_in_year(year) == (366 if calendar.isleap(year) else 365)


@pytest.mark.parametrize(
    "fields",
    [
        (2024, 2, 29, 23, 59, 59, 99),
        (2023, 12, 31, 0, 0, 0, 0),
        (1999, 1, 1, 12, 30, 15, 42),
        (2100, 7, 4, 6, 5, 4, 3),
    ],
)
def test_from_fields_round_trip(fields):
    ts = Timestamp.from_fields(*fields)
    got = (ts.year, ts.month(), ts.day(), ts.hour(), ts.minute(), ts.second(), ts.hundredths())
    assert got == fields


@pytest.mark.parametrize(
    "fields",
    [
        (2024, 13, 1, 0, 0, 0, 0),
        (2024, 0, 1, 0, 0, 0, 0),
        (2024, 1, 0, 0, 0, 0, 0),
        (2023, 2, 29, 0, 0, 0, 0),
        (2024, 4, 31, 0, 0, 0, 0),
        (2024, 1, 1, 24, 0, 0, 0),
        (2024, 1, 1, 0, 60, 0, 0),
        (2024, 1, 1, 0, 0, 60, 0),
        (2024, 1, 1, 0, 0, 0, 100),
    ],
)
def test_from_fields_rejects_out_of_range(fields):
    with pytest.raises(ValueError):
        Timestamp.from_fields(*fields)


@pytest.mark.parametrize(
    "date",
    [datetime.date(2024, 3, 5), datetime.date(2023, 12, 31), datetime.date(2000, 2, 29),
     datetime.date(1970, 1, 1)],
)
def test_day_of_year_matches_stdlib(date):
    ts = Timestamp.from_fields(date.year, date.month, date.day)
    assert ts.day_of_year() == date.timetuple().tm_yday


@pytest.mark.parametrize(
    "date",
    [datetime.date(y, m, d) for y in (1899, 1960, 2000, 2006, 2007, 2008, 2024, 2100)
     for m, d in ((1, 1), (2, 28), (3, 1), (12, 31))],
)
def test_day_of_week_matches_stdlib(date):
    ts = Timestamp.from_fields(date.year, date.month, date.day)
    assert ts.day_of_week() == date.isoweekday() % 7


def test_ordering_and_equality():
    earlier = Timestamp.from_fields(2023, 12, 31, 23, 59, 59, 99)
    later = Timestamp.from_fields(2024, 1, 1)
    assert earlier < later
    assert later >= earlier
    assert Timestamp.from_fields(2024, 1, 1) == later


def test_parse_equivalent_formats():
    reference = Timestamp.parse("2024-03-05", "YYYY-MM-DD")
    assert Timestamp.parse("05-MAR-2024", "DD-MON-YYYY") == reference
    assert Timestamp.parse("05/03/2024", "DD/MM/YYYY") == reference
    assert Timestamp.parse("05\\03\\2024", "DD/MM/YYYY") == reference
    assert Timestamp.parse("20240305", "YYYYMMDD") == reference
    assert Timestamp.parse("05-mar-24", "DD-MON-YY") == reference
    assert Timestamp.parse("05-MAR-2024") == reference


def test_two_digit_year_pivot():
    assert Timestamp.parse("05/03/69", "DD/MM/YY").year == 2069
    assert Timestamp.parse("05/03/70", "DD/MM/YY").year == 1970


@pytest.mark.parametrize(
    "text, fmt",
    [
        ("2024-03-05 10:11:12.345", "YYYY-MM-DD HH:MM:SS.SSS"),
        ("2024-03-05T10:11:12.345", "YYYY-MM-DDTHH:MM:SS.SSS"),
        ("05-MAR-2024 10:11:12.34", "DD-MON-YYYY hh:mm:ss.ss"),
        ("05/03/24 10:11:12.34", "DD/MM/YY hh:mm:ss.ss"),
    ],
)
def test_parse_with_fraction(text, fmt):
    assert Timestamp.parse(text, fmt) == Timestamp.from_fields(2024, 3, 5, 10, 11, 12, 34)


@pytest.mark.parametrize(
    "text, fmt",
    [
        ("2024-03-05 10:11:12", "YYYY-MM-DD HH:MM:SS"),
        ("2024-03-05T10:11:12", "YYYY-MM-DDTHH:MM:SS"),
        ("05-MAR-24 10:11:12", "DD-MON-YY hh:mm:ss"),
        ("05/03/2024 10:11:12", "DD/MM/YYYY hh:mm:ss"),
    ],
)
def test_parse_with_seconds(text, fmt):
    assert Timestamp.parse(text, fmt) == Timestamp.from_fields(2024, 3, 5, 10, 11, 12)


def test_parse_time_only_formats_use_year_zero():
    assert Timestamp.parse("13:45", "HH:MM") == Timestamp.from_fields(0, 1, 1, 13, 45)
    assert Timestamp.parse("13:45:07", "HH:MM:SS") == Timestamp.from_fields(0, 1, 1, 13, 45, 7)
    assert Timestamp.parse("2024-03-05 13:45", "YYYY-MM-DD HH:MM") == Timestamp.from_fields(
        2024, 3, 5, 13, 45)


def test_parse_unknown_month_defaults_to_january():
    assert Timestamp.parse("05-XYZ-2024", "DD-MON-YYYY") == Timestamp.from_fields(2024, 1, 5)


@pytest.mark.parametrize(
    "text, fmt",
    [
        ("2024-03-05", "NOT-A-FORMAT"),
        ("2024/03/05", "YYYY-MM-DD"),
        ("05.03.2024", "DD/MM/YYYY"),
        ("05", "DD-MON-YYYY"),
        ("31/02/2024", "DD/MM/YYYY"),
    ],
)
def test_parse_rejects_bad_input(text, fmt):
    with pytest.raises(ValueError):
        Timestamp.parse(text, fmt)


@pytest.mark.parametrize(
    "fmt", ["%Y-%m-%d %H:%M:%S", "%j", "%w", "%y", "%d/%m"],
)
def test_strftime_numeric_matches_stdlib(fmt):
    moment = datetime.datetime(2024, 3, 5, 10, 11, 12)
    ts = Timestamp.from_fields(2024, 3, 5, 10, 11, 12)
    assert ts.strftime(fmt) == moment.strftime(fmt)


def test_strftime_names():
    ts = Timestamp.from_fields(2007, 1, 1)
    assert ts.strftime("%A %a %B %b") == "Monday Mon January Jan"


def test_strftime_twelve_hour_clock_wraps_noon_to_zero():
    assert Timestamp.from_fields(2024, 1, 1, 12).strftime("%I") == "00"


def test_strftime_fraction_directives():
    ts = Timestamp.from_fields(2024, 1, 1, 0, 0, 7, 5)
    assert ts.strftime("%!") == "07.05"
    assert ts.strftime("%£") == "05"


def test_strftime_literals_and_unknown_directives():
    ts = Timestamp.from_fields(2024, 1, 1)
    assert ts.strftime("a%qb") == "ab"
    assert ts.strftime("100%%") == "100%"
    assert ts.strftime("x%ty") == "x\ty"
    assert ts.strftime("end%") == "end"


def test_now_matches_local_clock():
    before = time.localtime()
    ts = Timestamp.now()
    after = time.localtime()
    assert ts.year in {before.tm_year, after.tm_year}
    assert ts.hundredths() == 0