"""Calendar arithmetic on timestamps: shifting by units and measuring differences."""

from __future__ import annotations

from .timestamp import (
    HUNDREDTHS_PER_DAY,
    HUNDREDTHS_PER_HOUR,
    HUNDREDTHS_PER_MINUTE,
    HUNDREDTHS_PER_SECOND,
    Timestamp,
    days_in_year,
    is_leap_year,
    month_lengths,
)

SECONDS_PER_DAY = HUNDREDTHS_PER_DAY // HUNDREDTHS_PER_SECOND


def _rebuild(ts: Timestamp, year: int, month: int, day: int) -> Timestamp:
    return Timestamp.from_fields(
        year, month, day, ts.hour(), ts.minute(), ts.second(), ts.hundredths()
    )


def add_years(ts: Timestamp, count: int) -> Timestamp:
    """Shift by whole years, keeping the date; 29 February moves to 1 March in a common year."""
    year = ts.year + count
    month, day = ts.month(), ts.day()
    if month == 2 and day == 29 and not is_leap_year(year):
        month, day = 3, 1
    return _rebuild(ts, year, month, day)


def add_months(ts: Timestamp, count: int) -> Timestamp:
    """Shift by whole months; a day past the end of the target month becomes its last day."""
    total = ts.month() - 1 + count
    year = ts.year + total // 12
    month = total % 12 + 1
    day = min(ts.day(), month_lengths(year)[month - 1])
    return _rebuild(ts, year, month, day)


def add_days(ts: Timestamp, count: int) -> Timestamp:
    """Shift by whole days, crossing year boundaries as needed."""
    year = ts.year
    ordinal = ts.day_of_year() + count
    while ordinal > days_in_year(year):
        ordinal -= days_in_year(year)
        year += 1
    while ordinal <= 0:
        year -= 1
        ordinal += days_in_year(year)
    return Timestamp(year, (ordinal - 1) * HUNDREDTHS_PER_DAY + ts.ticks % HUNDREDTHS_PER_DAY)


def _shift(ts: Timestamp, delta: int) -> Timestamp:
    days, time_of_day = divmod(ts.ticks % HUNDREDTHS_PER_DAY + delta, HUNDREDTHS_PER_DAY)
    moved = add_days(ts, days)
    return Timestamp(moved.year, moved.ticks - moved.ticks % HUNDREDTHS_PER_DAY + time_of_day)


def add_hours(ts: Timestamp, count: int) -> Timestamp:
    return _shift(ts, count * HUNDREDTHS_PER_HOUR)


def add_minutes(ts: Timestamp, count: int) -> Timestamp:
    return _shift(ts, count * HUNDREDTHS_PER_MINUTE)


def add_seconds(ts: Timestamp, count: int) -> Timestamp:
    return _shift(ts, count * HUNDREDTHS_PER_SECOND)


def add_hundredths(ts: Timestamp, count: int) -> Timestamp:
    return _shift(ts, count)


def _years_between(earlier: Timestamp, later: Timestamp) -> range:
    return range(earlier.year + 1, later.year)


def diff_years(a: Timestamp, b: Timestamp) -> float:
    """Years from ``b`` to ``a``, fractions counted in days; time of day is ignored."""
    if a == b:
        return 0.0
    if a < b:
        return -diff_years(b, a)
    if a.year == b.year:
        return (a.day_of_year() - b.day_of_year()) / days_in_year(a.year)
    rest_of_start = days_in_year(b.year) - b.day_of_year()
    whole = len(_years_between(b, a))
    divisor = 365
    if is_leap_year(b.year) and b.month() < 3:
        divisor += 1
    if is_leap_year(a.year):
        if b.month() == 2:
            if b.day() == 29:
                divisor += 1
        elif b.month() > 2:
            divisor += 1
    return (rest_of_start + a.day_of_year()) / divisor + whole


def diff_months(a: Timestamp, b: Timestamp) -> int:
    """Whole months from ``b`` to ``a``."""
    if a == b:
        return 0
    if a < b:
        return -diff_months(b, a)
    cursor = b
    count = 0
    while cursor <= a:
        cursor = add_months(cursor, 1)
        count += 1
    return count - 1


def diff_days(a: Timestamp, b: Timestamp) -> int:
    """Calendar days from ``b`` to ``a``."""
    if a == b:
        return 0
    if a < b:
        return -diff_days(b, a)
    if a.year == b.year:
        return a.day_of_year() - b.day_of_year()
    between = sum(days_in_year(year) for year in _years_between(b, a))
    return days_in_year(b.year) - b.day_of_year() + between + a.day_of_year()


def diff_seconds(a: Timestamp, b: Timestamp) -> int:
    """Whole seconds from ``b`` to ``a``."""
    if a == b:
        return 0
    if a < b:
        return -diff_seconds(b, a)
    if a.year == b.year:
        return (a.ticks - b.ticks) // HUNDREDTHS_PER_SECOND
    rest_of_start = days_in_year(b.year) * SECONDS_PER_DAY - b.ticks // HUNDREDTHS_PER_SECOND
    between = sum(days_in_year(year) * SECONDS_PER_DAY for year in _years_between(b, a))
    return rest_of_start + between + a.ticks // HUNDREDTHS_PER_SECOND


def diff_hundredths(a: Timestamp, b: Timestamp) -> int:
    """Hundredths of a second from ``b`` to ``a``."""
    if a == b:
        return 0
    if a < b:
        return -diff_hundredths(b, a)
    if a.year == b.year:
        return a.ticks - b.ticks
    rest_of_start = days_in_year(b.year) * HUNDREDTHS_PER_DAY - b.ticks
    between = sum(days_in_year(year) * HUNDREDTHS_PER_DAY for year in _years_between(b, a))
    return rest_of_start + between + a.ticks