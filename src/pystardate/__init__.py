"""pystardate - Convert dates between stardates, calendars and Unix time."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystardate")
except PackageNotFoundError:  # running from a source tree
    __version__ = "0.0.0.dev0"

from pystardate._constants import DEFAULT_PRECISION
from pystardate._dispatch import (
    FORMATS,
    BatchResult,
    FormatDescriptor,
    Outcome,
    Result,
    convert,
    convert_all,
    decode_token,
    get_format,
)
from pystardate._errors import (
    InvalidPrecisionError,
    MalformedDateError,
    StardateError,
    UnknownFormatError,
    UnrecognizedDateError,
    ValueOutOfRangeError,
)
from pystardate._time import IntermediateTime
from pystardate.codec import (
    CalendarDate,
    Codec,
    CodecName,
    GregorianCodec,
    JulianCodec,
    QuadcentCodec,
    StardateCodec,
    StardateValue,
    UnixCodec,
    UnixHexCodec,
    get_codec,
)
from pystardate.codec._base import validate_precision

__all__ = [
    "convert",
    "convert_all",
    "decode",
    "encode",
    "from_gregorian",
    "get_codec",
    "get_format",
    "FORMATS",
    "BatchResult",
    "CalendarDate",
    "Codec",
    "CodecName",
    "FormatDescriptor",
    "IntermediateTime",
    "Outcome",
    "Result",
    "StardateValue",
    "GregorianCodec",
    "JulianCodec",
    "QuadcentCodec",
    "StardateCodec",
    "UnixCodec",
    "UnixHexCodec",
    "InvalidPrecisionError",
    "MalformedDateError",
    "StardateError",
    "UnknownFormatError",
    "UnrecognizedDateError",
    "ValueOutOfRangeError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())


def decode(text: str) -> IntermediateTime:
    """Decode a date in any supported notation.

    Args:
        text: A stardate (``[47]1234.56``), Julian (``2023=06=02``),
            Gregorian (``2023-06-15T12:30``), Quadcent (``2023*06*15``) or
            Unix (``U1686832245``, ``U-0x10``) date.

    Returns:
        The decoded IntermediateTime.

    Raises:
        UnrecognizedDateError: If no format recognises the text.
        ValueOutOfRangeError: If a format recognises it but a field is invalid.
    """
    _, time = decode_token(text)
    return time


def encode(
    time: IntermediateTime,
    fmt: str = "s",
    *,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Encode an IntermediateTime in one format.

    Args:
        time: The instant to encode.
        fmt: Selector character (``s``, ``j``, ``g``, ``q``, ``u``, ``x``) or
            codec name. Defaults to stardate.
        precision: Stardate fraction digits, 0-6. Truncated, never rounded.

    Returns:
        The formatted date.

    Raises:
        UnknownFormatError: If fmt is not registered.
        InvalidPrecisionError: If precision is outside 0-6.
    """
    validate_precision(precision)
    return get_format(fmt).codec.encode(time, precision=precision)


def from_gregorian(date: CalendarDate) -> IntermediateTime:
    """Convert a Gregorian UTC date, such as the current clock reading.

    Raises:
        ValueOutOfRangeError: If a field of ``date`` is out of range.
    """
    return GregorianCodec().to_time(date)
