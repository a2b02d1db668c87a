"""Julian and Gregorian calendar codecs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from lark import Transformer, v_args

from pystardate._constants import (
    DAYS_PER_QUADCENT,
    DEFAULT_PRECISION,
    GREGORIAN_OFFSET_DAYS,
    SECONDS_PER_DAY,
)
from pystardate._errors import MalformedDateError, ValueOutOfRangeError
from pystardate._grammars import calendar_parser, time_of_day_parser, try_parse
from pystardate._time import IntermediateTime
from pystardate.codec._base import Codec, CodecName, make_time, parse_int

NORMAL_MONTH_DAYS: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
LEAP_MONTH_DAYS: tuple[int, ...] = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

MonthTable = Callable[[int], tuple[int, ...]]


def is_julian_leap_year(year: int) -> bool:
    return year % 4 == 0


def is_gregorian_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


@dataclass(frozen=True)
class CalendarDate:
    """A calendar date and UTC time of day, with no calendar attached."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def format(self, separator: str) -> str:
        return (
            f"{self.year:04d}{separator}{self.month:02d}{separator}{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )


@v_args(inline=True)
class _TimeOfDayBuilder(Transformer):
    def start(self, hour, minute, second):
        return str(hour), str(minute), str(second or "0")


def read_calendar(text: str, separator: str) -> CalendarDate | None:
    """Parse ``YYYY<sep>MM<sep>DD[Thh:mm[:ss]]`` without range checks.

    Returns None when the date part does not match. A matching date with a
    malformed time of day raises :class:`MalformedDateError`.
    """
    tree = try_parse(calendar_parser(separator), text)
    if tree is None:
        return None
    year, month, day, rest = tree.children

    hour = minute = second = 0
    if rest is not None:
        time_tree = try_parse(time_of_day_parser, rest)
        if time_tree is None:
            raise MalformedDateError("time of day", text)
        # Converted outside the transformer, which would wrap a range error
        # in VisitError.
        hour, minute, second = _TimeOfDayBuilder().transform(time_tree)
        hour = parse_int(hour, "hour", text)
        minute = parse_int(minute, "minute", text)
        second = parse_int(second, "second", text)

    return CalendarDate(
        year=parse_int(year, "date", text),
        month=parse_int(month, "month", text),
        day=parse_int(day, "day", text),
        hour=hour,
        minute=minute,
        second=second,
    )


def check_fields(date: CalendarDate, token: str) -> None:
    """Range-check every field except the day against its month."""
    if not 1 <= date.month <= 12:
        raise ValueOutOfRangeError("month", token)
    if not 1 <= date.day <= 31:
        raise ValueOutOfRangeError("day", token)
    if not 0 <= date.hour <= 23:
        raise ValueOutOfRangeError("hour", token)
    if not 0 <= date.minute <= 59:
        raise ValueOutOfRangeError("minute", token)
    if not 0 <= date.second <= 59:
        raise ValueOutOfRangeError("second", token)
    if date.year < 0:
        raise ValueOutOfRangeError("date", token)


def seconds_of_day(date: CalendarDate) -> int:
    return date.hour * 3600 + date.minute * 60 + date.second


def walk_months(year: int, ndays: int, tod: int, month_days: MonthTable) -> CalendarDate:
    """Turn a day offset from January 1st of ``year`` into a calendar date.

    ``ndays`` may run past the end of ``year``; the year advances whenever
    the month counter wraps past December.
    """
    month = 0
    table = month_days(year)
    while ndays >= table[month]:
        ndays -= table[month]
        month += 1
        if month == 12:
            month = 0
            year += 1
            table = month_days(year)

    hour, tod = divmod(tod, 3600)
    minute, second = divmod(tod, 60)
    return CalendarDate(year, month + 1, ndays + 1, hour, minute, second)


class CalendarCodec(Codec):
    """Proleptic calendar codec parameterized by its leap-year rule."""

    separator: ClassVar[str]
    gregorian: ClassVar[bool]

    def is_leap_year(self, year: int) -> bool:
        if self.gregorian:
            return is_gregorian_leap_year(year)
        return is_julian_leap_year(year)

    def month_days(self, year: int) -> tuple[int, ...]:
        return LEAP_MONTH_DAYS if self.is_leap_year(year) else NORMAL_MONTH_DAYS

    def decode(self, text: str) -> IntermediateTime | None:
        date = read_calendar(text, self.separator)
        if date is None:
            return None
        return self.to_time(date, token=text)

    def encode(self, time: IntermediateTime, *, precision: int = DEFAULT_PRECISION) -> str:
        return self.to_date(time).format(self.separator)

    def to_time(self, date: CalendarDate, *, token: str | None = None) -> IntermediateTime:
        """Convert a calendar date to the internal representation.

        Raises:
            ValueOutOfRangeError: If a field is out of range, or the date
                lies before the internal epoch.
        """
        if token is None:
            token = date.format(self.separator)
        check_fields(date, token)
        table = self.month_days(date.year)
        if date.day > table[date.month - 1]:
            raise ValueOutOfRangeError("day", token)

        elapsed = date.year - 1
        days = elapsed * 365 + elapsed // 4
        if self.gregorian:
            days += elapsed // 400 - elapsed // 100 + GREGORIAN_OFFSET_DAYS
        days += sum(table[: date.month - 1]) + date.day - 1
        return make_time(days * SECONDS_PER_DAY + seconds_of_day(date), 0, token)

    def to_date(self, time: IntermediateTime) -> CalendarDate:
        days, tod = divmod(time.seconds, SECONDS_PER_DAY)

        # Estimate the year from below (never more than two years short) so
        # the month walk only has a short distance to cover. Gregorian days
        # are shifted to count from January 1st of year -399 so that the
        # 400-year cycle lines up with the day number.
        if self.gregorian:
            days += DAYS_PER_QUADCENT - GREGORIAN_OFFSET_DAYS
            year = (days // DAYS_PER_QUADCENT) * 400 + (days % DAYS_PER_QUADCENT) // 366
            days += year // 100 - year // 400
        else:
            year = days // 366 + days // (366 * 487)
        days -= year * 365 + year // 4

        year = year - 399 if self.gregorian else year + 1
        return walk_months(year, days, tod, self.month_days)


class JulianCodec(CalendarCodec):
    """Julian calendar, ``YYYY=MM=DD``."""

    name = CodecName.JULIAN
    separator = "="
    gregorian = False


class GregorianCodec(CalendarCodec):
    """Gregorian calendar, ``YYYY-MM-DD``."""

    name = CodecName.GREGORIAN
    separator = "-"
    gregorian = True
