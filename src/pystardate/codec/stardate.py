"""Stardate codec.

Stardates are written ``[issue]integer.fraction``. The rate depends on the
era, which is chosen from the numbers themselves:

* negative issues and issues 0-18, plus ``[19]0000``-``[19]7339``: one unit
  is a fifth of a day and one issue is 2000 days;
* ``[19]7340``-``[19]7839``: ten days per unit;
* ``[19]7840``-``[20]5005``: two days per unit;
* issue 21 onwards (TNG): 100000 units per issue, one issue being a
  quarter of a 400-year Gregorian cycle.

The two movie-era rates are handled by rescaling the stardate onto the
early rate before converting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lark import Transformer, v_args

from pystardate._constants import (
    DEFAULT_PRECISION,
    EARLY_FILM_SECONDS,
    EARLY_FILM_UNIT_SECONDS,
    FILM_ISSUE,
    FILM_START,
    FIRST_TNG_ISSUE,
    FRACTION_BITS,
    FRACTION_DENOMINATOR,
    FRACTION_DIGITS,
    FRACTION_SCALE,
    ISSUE_SECONDS,
    LAST_FILM_INTEGER,
    LAST_FILM_ISSUE,
    LATE_FILM_START,
    LATE_FILM_START_SCALED,
    LATE_FILM_UNIT_SECONDS,
    MAX_INTEGER,
    MAX_TOS_INTEGER,
    STARDATE_EPOCH,
    TNG_EPOCH,
    TNG_ISSUE_SECONDS,
    TNG_UNIT_DENOMINATOR,
    TNG_UNIT_NUMERATOR,
    TOS_UNIT_SECONDS,
)
from pystardate._errors import ValueOutOfRangeError
from pystardate._grammars import stardate_parser, try_parse
from pystardate._time import IntermediateTime
from pystardate.codec._base import Codec, CodecName, make_time, parse_int, validate_precision

logger = logging.getLogger(__name__)

_FILM_SCALE = EARLY_FILM_UNIT_SECONDS // TOS_UNIT_SECONDS
"""50 early units per early-film unit."""

_LATE_FILM_SCALE = EARLY_FILM_UNIT_SECONDS // LATE_FILM_UNIT_SECONDS
"""5 early-film units per late-film unit."""

_TNG_MILLIONTHS_DENOMINATOR = TNG_UNIT_DENOMINATOR * FRACTION_DENOMINATOR

# Pre-TNG fractions of a unit are carried as multiples of
# 1 / (FRACTION_SCALE * EARLY_FILM_UNIT_SECONDS); converting to millionths
# multiplies by 10**6 / 864000, i.e. 125 / 108.
_MILLIONTHS_NUMERATOR = 125
_MILLIONTHS_DENOMINATOR = 108


@dataclass(frozen=True)
class StardateValue:
    """A parsed stardate: ``[-issue]integer.fraction``.

    ``fraction`` holds six decimal digits (millionths of a unit).
    """

    negative: bool
    issue: int
    integer: int
    fraction: int = 0

    @property
    def is_tng(self) -> bool:
        return not self.negative and self.issue >= FIRST_TNG_ISSUE

    def integer_cap(self) -> int:
        if self.negative or self.issue < LAST_FILM_ISSUE:
            return MAX_TOS_INTEGER
        if self.issue == LAST_FILM_ISSUE:
            return LAST_FILM_INTEGER
        return MAX_INTEGER

    def format(self, precision: int = DEFAULT_PRECISION) -> str:
        """Render the stardate, truncating the fraction to ``precision`` digits."""
        validate_precision(precision)
        width = 5 if self.is_tng else 4
        sign = "-" if self.negative else ""
        text = f"[{sign}{self.issue}]{self.integer:0{width}d}"
        if precision:
            text += "." + f"{self.fraction:0{FRACTION_DIGITS}d}"[:precision]
        return text


@v_args(inline=True)
class _StardateBuilder(Transformer):
    def fraction(self, digits=None):
        digits = str(digits or "")[:FRACTION_DIGITS]
        return int(digits.ljust(FRACTION_DIGITS, "0"))

    def start(self, minus, issue, integer, fraction):
        return minus is not None, str(issue), str(integer), fraction or 0


def parse_stardate(text: str) -> StardateValue | None:
    """Parse stardate syntax, returning None if ``text`` is not a stardate."""
    tree = try_parse(stardate_parser, text)
    if tree is None:
        return None
    # Digit strings are converted here rather than in the transformer, which
    # would wrap a range error in VisitError.
    negative, issue, integer, fraction = _StardateBuilder().transform(tree)
    return StardateValue(
        negative=negative,
        issue=parse_int(issue, "date", text),
        integer=parse_int(integer, "integer", text),
        fraction=fraction,
    )


def _rescale_film(integer: int, fraction: int) -> tuple[int, int]:
    """Map a movie-era ``[19]`` integer:fraction onto the early rate.

    [19]7340-[19]15005 first becomes 7340-390640 at the early rate. Values
    from what was [19]7840 (now 32340) are at two days per unit, so they
    are scaled back down by five into 32340-104000.
    """
    integer = (
        FILM_START
        + (integer - FILM_START) * _FILM_SCALE
        + fraction // (FRACTION_DENOMINATOR // _FILM_SCALE)
    )
    fraction = (fraction * _FILM_SCALE) % FRACTION_DENOMINATOR
    if integer >= LATE_FILM_START_SCALED:
        fraction = (
            fraction // _LATE_FILM_SCALE
            + (integer % _LATE_FILM_SCALE) * (FRACTION_DENOMINATOR // _LATE_FILM_SCALE)
        )
        integer = LATE_FILM_START_SCALED + (integer - LATE_FILM_START_SCALED) // _LATE_FILM_SCALE
    return integer, fraction


def _pre_tng_to_time(value: StardateValue, token: str) -> IntermediateTime:
    issue, integer, fraction = value.issue, value.integer, value.fraction
    if value.negative:
        # Computed one issue late; the extra issue is removed at the end.
        seconds = STARDATE_EPOCH - (issue - 1) * ISSUE_SECONDS
    else:
        if issue == LAST_FILM_ISSUE:
            issue = FILM_ISSUE
            integer += 10000
        if issue == FILM_ISSUE and integer >= FILM_START:
            integer, fraction = _rescale_film(integer, fraction)
        seconds = STARDATE_EPOCH + issue * ISSUE_SECONDS
    seconds += TOS_UNIT_SECONDS * integer

    # fraction / 10**6 of a 17280 second unit, as seconds << 32; 17280 / 10**6
    # cancels to 54 / 3125. Rounded up.
    scaled = ((fraction << FRACTION_BITS) * 54 + 3124) // 3125
    seconds += scaled >> FRACTION_BITS
    if value.negative:
        seconds -= ISSUE_SECONDS
    return make_time(seconds, scaled & (FRACTION_SCALE - 1), token)


def _tng_to_time(value: StardateValue, token: str) -> IntermediateTime:
    seconds = TNG_EPOCH + (value.issue - FIRST_TNG_ISSUE) * TNG_ISSUE_SECONDS
    units = (value.integer * FRACTION_DENOMINATOR + value.fraction) * TNG_UNIT_NUMERATOR
    whole, rest = divmod(units, _TNG_MILLIONTHS_DENOMINATOR)
    fraction = ((rest << FRACTION_BITS) + _TNG_MILLIONTHS_DENOMINATOR - 1) // _TNG_MILLIONTHS_DENOMINATOR
    return make_time(seconds + whole, fraction, token)


def _millionths(unit_fraction: int) -> int:
    return (unit_fraction * _MILLIONTHS_NUMERATOR // _MILLIONTHS_DENOMINATOR) >> FRACTION_BITS


def _negative_value(time: IntermediateTime) -> StardateValue:
    diff = STARDATE_EPOCH - time.seconds - 1
    nsecs = ISSUE_SECONDS - 1 - diff % ISSUE_SECONDS
    integer, rest = divmod(nsecs, TOS_UNIT_SECONDS)
    fraction = ((rest << FRACTION_BITS) | time.fraction) * _FILM_SCALE
    return StardateValue(True, 1 + diff // ISSUE_SECONDS, integer, _millionths(fraction))


def _positive_value(time: IntermediateTime) -> StardateValue:
    issue, nsecs = divmod(time.seconds - STARDATE_EPOCH, ISSUE_SECONDS)

    if issue < FILM_ISSUE or (issue == FILM_ISSUE and nsecs < FILM_START * TOS_UNIT_SECONDS):
        integer, rest = divmod(nsecs, TOS_UNIT_SECONDS)
        fraction = ((rest << FRACTION_BITS) | time.fraction) * _FILM_SCALE
        return StardateValue(False, issue, integer, _millionths(fraction))

    # Movie era: count from [19]7340, which may be several issues back.
    nsecs += (issue - FILM_ISSUE) * ISSUE_SECONDS - FILM_START * TOS_UNIT_SECONDS
    issue = FILM_ISSUE
    if nsecs >= EARLY_FILM_SECONDS:
        nsecs -= EARLY_FILM_SECONDS
        integer, rest = divmod(nsecs, LATE_FILM_UNIT_SECONDS)
        integer += LATE_FILM_START
        if integer >= 10000:
            integer -= 10000
            issue += 1
        fraction = ((rest << FRACTION_BITS) | time.fraction) * _LATE_FILM_SCALE
    else:
        integer, rest = divmod(nsecs, EARLY_FILM_UNIT_SECONDS)
        integer += FILM_START
        fraction = (rest << FRACTION_BITS) | time.fraction
    return StardateValue(False, issue, integer, _millionths(fraction))


def _tng_value(time: IntermediateTime) -> StardateValue:
    issue, nsecs = divmod(time.seconds - TNG_EPOCH, TNG_ISSUE_SECONDS)
    # nsecs:fraction in millionths of a unit, high and low words apart.
    high = nsecs * _TNG_MILLIONTHS_DENOMINATOR
    low = time.fraction * _TNG_MILLIONTHS_DENOMINATOR
    high += low >> FRACTION_BITS
    millionths = high // TNG_UNIT_NUMERATOR
    integer, fraction = divmod(millionths, FRACTION_DENOMINATOR)
    return StardateValue(False, FIRST_TNG_ISSUE + issue, integer, fraction)


class StardateCodec(Codec):
    """Stardates in all three eras, plus negative stardates."""

    name = CodecName.STARDATE

    def decode(self, text: str) -> IntermediateTime | None:
        value = parse_stardate(text)
        if value is None:
            return None
        return self.to_time(value, token=text)

    def encode(self, time: IntermediateTime, *, precision: int = DEFAULT_PRECISION) -> str:
        return self.to_value(time).format(precision)

    def to_time(self, value: StardateValue, *, token: str | None = None) -> IntermediateTime:
        """Convert a stardate to the internal representation.

        Raises:
            ValueOutOfRangeError: If the integer part exceeds the cap for its
                issue, or the stardate lies before the internal epoch.
        """
        if token is None:
            token = value.format(FRACTION_DIGITS)
        if value.integer > value.integer_cap():
            raise ValueOutOfRangeError("integer", token)
        if value.is_tng:
            logger.debug("stardate %s: TNG era", token)
            return _tng_to_time(value, token)
        logger.debug("stardate %s: pre-TNG era", token)
        return _pre_tng_to_time(value, token)

    def to_value(self, time: IntermediateTime) -> StardateValue:
        if time.seconds >= TNG_EPOCH:
            return _tng_value(time)
        if time.seconds < STARDATE_EPOCH:
            return _negative_value(time)
        return _positive_value(time)
