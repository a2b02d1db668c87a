"""Abstract base class for date codecs."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import ClassVar

from pystardate._constants import DEFAULT_PRECISION, MAX_PRECISION
from pystardate._errors import InvalidPrecisionError, ValueOutOfRangeError
from pystardate._time import IntermediateTime, is_representable


class CodecName(enum.StrEnum):
    STARDATE = "stardate"
    JULIAN = "julian"
    GREGORIAN = "gregorian"
    QUADCENT = "quadcent"
    UNIX = "unix"
    UNIX_HEX = "unix-hex"


class Codec(ABC):
    """Converts one textual date format to and from :class:`IntermediateTime`.

    ``decode`` returns None when the text does not belong to this format and
    raises :class:`ValueOutOfRangeError` when it does but a field is invalid.
    """

    name: ClassVar[CodecName]

    @abstractmethod
    def decode(self, text: str) -> IntermediateTime | None: ...

    @abstractmethod
    def encode(self, time: IntermediateTime, *, precision: int = DEFAULT_PRECISION) -> str: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def make_time(seconds: int, fraction: int, token: str) -> IntermediateTime:
    """Build an IntermediateTime, reporting an unrepresentable date."""
    if not is_representable(seconds):
        raise ValueOutOfRangeError("date", token)
    return IntermediateTime(seconds, fraction)


def parse_int(digits: str, field: str, token: str, base: int = 10) -> int:
    """Convert a digit string, reporting numbers too long to convert."""
    try:
        return int(digits, base)
    except ValueError as exc:
        raise ValueOutOfRangeError(field, token, wrapped=exc) from exc


def validate_precision(precision: int) -> None:
    if not 0 <= precision <= MAX_PRECISION:
        raise InvalidPrecisionError(
            "precision must be between 0 and 6",
            f"precision {precision!r} is outside 0-{MAX_PRECISION}",
        )
