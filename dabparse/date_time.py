"""FIG 0/10: date and time."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import FigTruncatedError, begin_fig0

_MONTH_DAY = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


@dataclass(frozen=True)
class DabTime:
    """A UTC date and time as carried in FIG 0/10."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int = 0
    milliseconds: int = 0
    unix_timestamp_seconds: int = 0


@dataclass(frozen=True)
class DateAndTime:
    """Parsed FIG 0/10 content."""

    leap_second_pending: bool
    is_long_form: bool
    dab_time: DabTime


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def mjd_to_ymd(mjd: int) -> tuple[int, int, int]:
    """Convert a Modified Julian Date to (year, month, day)."""
    j = mjd + 2400001 + 68569
    c = 4 * j // 146097
    j = j - (146097 * c + 3) // 4
    y = 4000 * (j + 1) // 1461001
    j = j - 1461 * y // 4 + 31
    m = 80 * j // 2447
    day = j - 2447 * m // 80
    j = m // 11
    month = m + 2 - 12 * j
    year = 100 * (c - 49) + y + j
    return year, month, day


def utc_timestamp(year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
    """Seconds since 1970-01-01 UTC, or -1 for times before it."""
    tm_mon = month - 1
    tm_year = year - 1900
    mon = _trunc_mod(tm_mon, 12)
    yr = tm_year + _trunc_div(tm_mon, 12)
    if mon < 0:
        mon += 12
        yr -= 1
    year_for_leap = yr + 1 if mon > 1 else yr
    days = (
        _MONTH_DAY[mon] + day - 1
        + 365 * (yr - 70)
        + _trunc_div(year_for_leap - 69, 4)
        - _trunc_div(year_for_leap - 1, 100)
        + _trunc_div(year_for_leap + 299, 400)
    )
    seconds = second + 60 * (minute + 60 * (hour + 24 * days))
    return -1 if seconds < 0 else seconds


def parse_date_and_time(data, header=None) -> DateAndTime:
    """Parse a FIG 0/10; when several entries are present the last one wins."""
    _, reader = begin_fig0(data, header)
    result = None
    while reader:
        b0, b1, b2, b3 = reader.read_bytes(4)
        mjd = (b0 & 0x7F) << 10 | b1 << 2 | (b2 & 0xC0) >> 6
        leap_second_pending = bool(b2 & 0x20)
        utc_flag = bool(b2 & 0x08)
        hour = (b2 & 0x07) << 2 | (b3 & 0xC0) >> 6
        minute = b3 & 0x3F

        second = 0
        milliseconds = 0
        if utc_flag:
            b4, b5 = reader.read_bytes(2)
            second = (b4 & 0xFC) >> 2
            milliseconds = (b4 & 0x03) << 8 | b5

        year, month, day = mjd_to_ymd(mjd)
        result = DateAndTime(
            leap_second_pending=leap_second_pending,
            is_long_form=utc_flag,
            dab_time=DabTime(
                year=year,
                month=month,
                day=day,
                hour=hour,
                minute=minute,
                second=second,
                milliseconds=milliseconds,
                unix_timestamp_seconds=utc_timestamp(year, month, day, hour, minute, second),
            ),
        )

    if result is None:
        raise FigTruncatedError("FIG 0/10 carries no date and time entry")
    return result