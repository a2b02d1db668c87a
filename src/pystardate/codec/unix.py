"""Unix time codecs (decimal and hexadecimal output)."""

from __future__ import annotations

from typing import ClassVar

from pystardate._constants import DEFAULT_PRECISION, UNIX_EPOCH
from pystardate._errors import MalformedDateError
from pystardate._grammars import try_parse, unix_parser
from pystardate._time import IntermediateTime
from pystardate.codec._base import Codec, CodecName, make_time, parse_int


class UnixCodec(Codec):
    """Signed whole seconds since 1970-01-01, written ``U[-][0x]digits``.

    Input accepts either radix; output uses the codec's radix. Fractions of
    a second are dropped on output.
    """

    name = CodecName.UNIX
    radix: ClassVar[int] = 10

    def decode(self, text: str) -> IntermediateTime | None:
        if text[:1] not in ("U", "u"):
            return None
        tree = try_parse(unix_parser, text)
        if tree is None:
            raise MalformedDateError("Unix date", text)
        minus, digits = tree.children
        if digits.type == "HEX":
            magnitude = parse_int(digits[2:], "date", text, base=16)
        else:
            magnitude = parse_int(digits, "date", text)
        seconds = UNIX_EPOCH - magnitude if minus is not None else UNIX_EPOCH + magnitude
        return make_time(seconds, 0, text)

    def encode(self, time: IntermediateTime, *, precision: int = DEFAULT_PRECISION) -> str:
        if time.seconds >= UNIX_EPOCH:
            sign, magnitude = "", time.seconds - UNIX_EPOCH
        else:
            sign, magnitude = "-", UNIX_EPOCH - time.seconds
        if self.radix == 16:
            return f"U{sign}0x{magnitude:x}"
        return f"U{sign}{magnitude}"


class UnixHexCodec(UnixCodec):
    """Unix time with hexadecimal output."""

    name = CodecName.UNIX_HEX
    radix = 16
