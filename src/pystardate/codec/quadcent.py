"""Quadcent calendar codec.

Every Quadcent year lasts exactly one average Gregorian year
(31556952 seconds) but is displayed with the ordinary 365-day month table.
Time within a year is therefore rescaled by the exact ratio 146097:146000
between real seconds and displayed seconds.
"""

from __future__ import annotations

from pystardate._constants import (
    DEFAULT_PRECISION,
    FRACTION_BITS,
    QUADCENT_EPOCH,
    QUADCENT_EPOCH_YEAR,
    QUADCENT_YEAR_SECONDS,
    SECONDS_PER_DAY,
    STANDARD_YEAR_SECONDS,
)
from pystardate._errors import ValueOutOfRangeError
from pystardate._time import IntermediateTime
from pystardate.codec._base import Codec, CodecName, make_time
from pystardate.codec.calendar import (
    NORMAL_MONTH_DAYS,
    CalendarDate,
    check_fields,
    read_calendar,
    seconds_of_day,
    walk_months,
)

# Real seconds : displayed seconds, in lowest terms.
_REAL_PER_DISPLAY = QUADCENT_YEAR_SECONDS // 216
_DISPLAY_PER_REAL = STANDARD_YEAR_SECONDS // 216


def _normal_year(_year: int) -> tuple[int, ...]:
    return NORMAL_MONTH_DAYS


class QuadcentCodec(Codec):
    """Quadcent calendar, ``YYYY*MM*DD``."""

    name = CodecName.QUADCENT
    separator = "*"

    def decode(self, text: str) -> IntermediateTime | None:
        date = read_calendar(text, self.separator)
        if date is None:
            return None
        return self.to_time(date, token=text)

    def encode(self, time: IntermediateTime, *, precision: int = DEFAULT_PRECISION) -> str:
        return self.to_date(time).format(self.separator)

    def to_time(self, date: CalendarDate, *, token: str | None = None) -> IntermediateTime:
        if token is None:
            token = date.format(self.separator)
        check_fields(date, token)
        if date.day > NORMAL_MONTH_DAYS[date.month - 1]:
            raise ValueOutOfRangeError("day", token)

        seconds = QUADCENT_EPOCH + (date.year - QUADCENT_EPOCH_YEAR) * QUADCENT_YEAR_SECONDS
        days = sum(NORMAL_MONTH_DAYS[: date.month - 1]) + date.day - 1
        displayed = days * SECONDS_PER_DAY + seconds_of_day(date)

        # Scale up to real seconds; the fraction is rounded up so that
        # scaling back down lands on the same displayed second.
        whole, rest = divmod(displayed * QUADCENT_YEAR_SECONDS, STANDARD_YEAR_SECONDS)
        fraction = ((rest << FRACTION_BITS) + STANDARD_YEAR_SECONDS - 1) // STANDARD_YEAR_SECONDS
        return make_time(seconds + whole, fraction, token)

    def to_date(self, time: IntermediateTime) -> CalendarDate:
        years, real = divmod(time.seconds - QUADCENT_EPOCH, QUADCENT_YEAR_SECONDS)
        year = QUADCENT_EPOCH_YEAR + years

        # real:fraction scaled by 146000/146097, high and low words apart.
        high = real * _DISPLAY_PER_REAL
        low = time.fraction * _DISPLAY_PER_REAL
        high += low >> FRACTION_BITS
        displayed = high // _REAL_PER_DISPLAY

        days, tod = divmod(displayed, SECONDS_PER_DAY)
        return walk_months(year, days, tod, _normal_year)
