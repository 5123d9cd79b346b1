"""Calendar timestamps held as a year plus hundredths of a second into that year."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Callable, NamedTuple

HUNDREDTHS_PER_SECOND = 100
HUNDREDTHS_PER_MINUTE = 60 * HUNDREDTHS_PER_SECOND
HUNDREDTHS_PER_HOUR = 60 * HUNDREDTHS_PER_MINUTE
HUNDREDTHS_PER_DAY = 24 * HUNDREDTHS_PER_HOUR

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DAY_ABBREVIATIONS = tuple(name[:3] for name in DAY_NAMES)

_INT = re.compile(r"\s*([+-]?\d+)")
_SLASH = "/\\"


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    if year % 400 == 0:
        return True
    if year % 100 == 0:
        return False
    return year % 4 == 0


def days_in_year(year: int) -> int:
    """Number of days in the given year."""
    return 366 if is_leap_year(year) else 365


def month_lengths(year: int) -> tuple[int, ...]:
    """Days in each month of the given year."""
    february = 29 if is_leap_year(year) else 28
    return (31, february, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _scan(text: str, count: int) -> list[int]:
    """Read up to ``count`` colon separated integers, stopping at the first mismatch."""
    values: list[int] = []
    pos = 0
    for index in range(count):
        if index:
            if text[pos:pos + 1] != ":":
                break
            pos += 1
        match = _INT.match(text, pos)
        if match is None:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


class _Layout(NamedTuple):
    checks: tuple[tuple[int, str], ...]
    day: int | None = None
    month: int | None = None
    month_name: int | None = None
    year2: int | None = None
    year4: int | None = None
    hm: int | None = None
    hms: int | None = None
    hms_fraction: int | None = None


def _dash_date(extra: tuple[tuple[int, str], ...] = ()) -> tuple[tuple[int, str], ...]:
    return ((2, "-"), (6, "-")) + extra


def _slash_date(extra: tuple[tuple[int, str], ...] = ()) -> tuple[tuple[int, str], ...]:
    return ((2, _SLASH), (5, _SLASH)) + extra


def _iso_date(extra: tuple[tuple[int, str], ...] = ()) -> tuple[tuple[int, str], ...]:
    return ((4, "-"), (7, "-")) + extra


_LAYOUTS: dict[str, _Layout] = {
    "DD-MON-YYYY": _Layout(_dash_date(), day=0, month_name=3, year4=7),
    "DD-MON-YY": _Layout(_dash_date(), day=0, month_name=3, year2=7),
    "DD/MM/YYYY": _Layout(_slash_date(), day=0, month=3, year4=6),
    "DD/MM/YY": _Layout(_slash_date(), day=0, month=3, year2=6),
    "DD-MON-YYYY hh:mm:ss.ss": _Layout(
        _dash_date(((11, " "), (14, ":"), (17, ":"), (20, "."))),
        day=0, month_name=3, year4=7, hms_fraction=12),
    "DD-MON-YY hh:mm:ss.ss": _Layout(
        _dash_date(((9, " "), (12, ":"), (15, ":"), (18, "."))),
        day=0, month_name=3, year2=7, hms_fraction=10),
    "DD/MM/YYYY hh:mm:ss.ss": _Layout(
        _slash_date(((10, " "), (13, ":"), (16, ":"), (19, "."))),
        day=0, month=3, year4=6, hms_fraction=11),
    "DD/MM/YY hh:mm:ss.ss": _Layout(
        _slash_date(((8, " "), (11, ":"), (14, ":"), (17, "."))),
        day=0, month=3, year2=6, hms_fraction=9),
    "DD-MON-YYYY hh:mm:ss": _Layout(
        _dash_date(((11, " "), (14, ":"), (17, ":"))),
        day=0, month_name=3, year4=7, hms=12),
    "DD-MON-YY hh:mm:ss": _Layout(
        _dash_date(((9, " "), (12, ":"), (15, ":"))),
        day=0, month_name=3, year2=7, hms=10),
    "DD/MM/YYYY hh:mm:ss": _Layout(
        _slash_date(((10, " "), (13, ":"), (16, ":"))),
        day=0, month=3, year4=6, hms=11),
    "DD/MM/YY hh:mm:ss": _Layout(
        _slash_date(((8, " "), (11, ":"), (14, ":"))),
        day=0, month=3, year2=6, hms=9),
    "YYYY-MM-DD": _Layout(_iso_date(), day=8, month=5, year4=0),
    "YYYY-MM-DD HH:MM": _Layout(
        _iso_date(((10, " "), (13, ":"))), day=8, month=5, year4=0, hm=11),
    "YYYY-MM-DD HH:MM:SS": _Layout(
        _iso_date(((10, " "), (13, ":"), (16, ":"))), day=8, month=5, year4=0, hms=11),
    "YYYY-MM-DD HH:MM:SS.SSS": _Layout(
        _iso_date(((10, " "), (13, ":"), (16, ":"), (19, "."))),
        day=8, month=5, year4=0, hms_fraction=11),
    "YYYY-MM-DDTHH:MM": _Layout(
        _iso_date(((10, "T"), (13, ":"))), day=8, month=5, year4=0, hm=11),
    "YYYY-MM-DDTHH:MM:SS": _Layout(
        _iso_date(((10, "T"), (13, ":"), (16, ":"))), day=8, month=5, year4=0, hms=11),
    "YYYY-MM-DDTHH:MM:SS.SSS": _Layout(
        _iso_date(((10, "T"), (13, ":"), (16, ":"), (19, "."))),
        day=8, month=5, year4=0, hms_fraction=11),
    "HH:MM": _Layout(((2, ":"),), hm=0),
    "HH:MM:SS": _Layout(((2, ":"), (5, ":")), hms=0),
    "HH:MM:SS.SSS": _Layout(((2, ":"), (5, ":"), (8, ".")), hms_fraction=0),
    "YYYYMMDD": _Layout((), day=6, month=4, year4=0),
}

FORMATS = tuple(_LAYOUTS)
SQLITE_FORMATS = (
    "YYYY-MM-DD",
    "YYYY-MM-DD HH:MM",
    "YYYY-MM-DD HH:MM:SS",
    "YYYY-MM-DD HH:MM:SS.SSS",
    "YYYY-MM-DDTHH:MM",
    "YYYY-MM-DDTHH:MM:SS",
    "YYYY-MM-DDTHH:MM:SS.SSS",
    "HH:MM",
    "HH:MM:SS",
    "HH:MM:SS.SSS",
)


def _padded(value: int, width: int) -> str:
    return f"{value:0{width}d}"


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point in time: a year and the hundredths of a second elapsed since its start."""

    year: int
    ticks: int

    @classmethod
    def from_fields(cls, year, month=1, day=1, hour=0, minute=0, second=0, hundredths=0):
        """Build a timestamp from calendar fields, raising ValueError when any is out of range."""
        if year < 0:
            raise ValueError(f"year out of range: {year}")
        if not 1 <= month <= 12:
            raise ValueError(f"month out of range: {month}")
        if not 1 <= day <= month_lengths(year)[month - 1]:
            raise ValueError(f"day out of range: {day}")
        if not 0 <= hour <= 23:
            raise ValueError(f"hour out of range: {hour}")
        if not 0 <= minute <= 59:
            raise ValueError(f"minute out of range: {minute}")
        if not 0 <= second <= 59:
            raise ValueError(f"second out of range: {second}")
        if not 0 <= hundredths <= 99:
            raise ValueError(f"hundredths out of range: {hundredths}")
        days = sum(month_lengths(year)[: month - 1]) + day - 1
        ticks = (
            hundredths
            + second * HUNDREDTHS_PER_SECOND
            + minute * HUNDREDTHS_PER_MINUTE
            + hour * HUNDREDTHS_PER_HOUR
            + days * HUNDREDTHS_PER_DAY
        )
        return cls(year, ticks)

    @classmethod
    def now(cls):
        """The current local time, to the whole second."""
        now = time.localtime()
        return cls.from_fields(now.tm_year, now.tm_mon, now.tm_mday,
                               now.tm_hour, now.tm_min, now.tm_sec, 0)

    @classmethod
    def parse(cls, text, fmt="DD-MON-YYYY"):
        """Parse ``text`` laid out as ``fmt``; raise ValueError if it does not fit."""
        layout = _LAYOUTS.get(fmt)
        if layout is None:
            raise ValueError(f"unknown timestamp format: {fmt!r}")
        for index, allowed in layout.checks:
            char = text[index:index + 1]
            if not char or char not in allowed:
                raise ValueError(f"{text!r} does not match format {fmt!r}")

        def number(start: int, width: int, default: int) -> int:
            values = _scan(text[start:start + width], 1)
            return values[0] if values else default

        hundredths = second = minute = hour = year = 0
        day = month = 1
        if layout.day is not None:
            day = number(layout.day, 2, day)
        if layout.month is not None:
            month = number(layout.month, 2, month)
        if layout.month_name is not None:
            name = text[layout.month_name:layout.month_name + 3].upper()
            for index, abbreviation in enumerate(MONTH_ABBREVIATIONS, start=1):
                if name == abbreviation.upper():
                    month = index
        if layout.year2 is not None:
            year = number(layout.year2, 2, year)
            year += 2000 if year < 70 else 1900
        if layout.year4 is not None:
            year = number(layout.year4, 4, year)
        if layout.hm is not None:
            values = _scan(text[layout.hm:layout.hm + 5], 2)
            hour, minute = (values + [hour, minute][len(values):])[:2]
        clock = layout.hms if layout.hms is not None else layout.hms_fraction
        if clock is not None:
            values = _scan(text[clock:clock + 8], 3)
            hour, minute, second = (values + [hour, minute, second][len(values):])[:3]
        if layout.hms_fraction is not None:
            hundredths = number(layout.hms_fraction + 9, 2, hundredths)
        return cls.from_fields(year, month, day, hour, minute, second, hundredths)

    def _days(self) -> int:
        return self.ticks // HUNDREDTHS_PER_DAY

    def month(self) -> int:
        """Month of the year, 1 to 12."""
        remaining = self._days() + 1
        total = 0
        for index, length in enumerate(month_lengths(self.year), start=1):
            total += length
            if remaining <= total:
                return index
        return 12

    def day(self) -> int:
        """Day of the month, starting at 1."""
        remaining = self._days()
        for length in month_lengths(self.year):
            if length >= remaining + 1:
                return remaining + 1
            remaining -= length
        return remaining + 1

    def hour(self) -> int:
        return (self.ticks % HUNDREDTHS_PER_DAY) // HUNDREDTHS_PER_HOUR

    def minute(self) -> int:
        return (self.ticks % HUNDREDTHS_PER_HOUR) // HUNDREDTHS_PER_MINUTE

    def second(self) -> int:
        return (self.ticks % HUNDREDTHS_PER_MINUTE) // HUNDREDTHS_PER_SECOND

    def hundredths(self) -> int:
        return self.ticks % HUNDREDTHS_PER_SECOND

    def day_of_year(self) -> int:
        """Day of the year; 1 January is 1."""
        return self._days() + 1

    def day_of_week(self) -> int:
        """Day of the week; 0 is Sunday."""
        dow = 1  # 1 January 2007 was a Monday
        year = 2007
        while self.year < year:
            year -= 1
            dow = (dow - 1 - is_leap_year(year)) % 7
        while self.year > year:
            year += 1
            dow = (dow + 365 + is_leap_year(year - 1)) % 7
        return (dow + (self.day_of_year() - 1) % 7) % 7

    def strftime(self, fmt: str) -> str:
        """Format with %a %A %j %w %b %B %H %I %m %M %S %Y %y %d %t %% %! and %£."""
        directives: dict[str, Callable[[], str]] = {
            "a": lambda: DAY_ABBREVIATIONS[self.day_of_week()],
            "A": lambda: DAY_NAMES[self.day_of_week()],
            "j": lambda: _padded(self.day_of_year(), 3)[:3],
            "w": lambda: str(self.day_of_week())[:1],
            "b": lambda: MONTH_ABBREVIATIONS[self.month() - 1],
            "B": lambda: MONTH_NAMES[self.month() - 1],
            "H": lambda: _padded(self.hour(), 2)[:2],
            "I": lambda: _padded(self.hour() % 12, 2)[:2],
            "m": lambda: _padded(self.month(), 2)[:2],
            "M": lambda: _padded(self.minute(), 2)[:2],
            "S": lambda: _padded(self.second(), 2)[:2],
            "Y": lambda: _padded(self.year, 4)[:4],
            "y": lambda: _padded(self.year, 4)[2:4],
            "d": lambda: _padded(self.day(), 2)[:2],
            "t": lambda: "\t",
            "%": lambda: "%",
            "!": lambda: f"{_padded(self.second(), 2)[:2]}.{_padded(self.hundredths(), 2)[:2]}",
            "£": lambda: _padded(self.hundredths(), 2)[:2],
        }
        out: list[str] = []
        chars = iter(fmt)
        for char in chars:
            if char != "%":
                out.append(char)
                continue
            spec = next(chars, None)
            if spec is None:
                break
            handler = directives.get(spec)
            if handler is not None:
                out.append(handler())
        return "".join(out)