"""Date codecs: one per textual format."""

from pystardate._errors import UnknownFormatError
from pystardate.codec._base import Codec, CodecName
from pystardate.codec.calendar import CalendarCodec, CalendarDate, GregorianCodec, JulianCodec
from pystardate.codec.quadcent import QuadcentCodec
from pystardate.codec.stardate import StardateCodec, StardateValue
from pystardate.codec.unix import UnixCodec, UnixHexCodec

__all__ = [
    "Codec",
    "CodecName",
    "CalendarCodec",
    "CalendarDate",
    "GregorianCodec",
    "JulianCodec",
    "QuadcentCodec",
    "StardateCodec",
    "StardateValue",
    "UnixCodec",
    "UnixHexCodec",
    "get_codec",
]

_REGISTRY: dict[str, type[Codec]] = {
    CodecName.STARDATE: StardateCodec,
    CodecName.JULIAN: JulianCodec,
    CodecName.GREGORIAN: GregorianCodec,
    CodecName.QUADCENT: QuadcentCodec,
    CodecName.UNIX: UnixCodec,
    CodecName.UNIX_HEX: UnixHexCodec,
}


def get_codec(name: str) -> Codec:
    """Get a codec instance by name.

    Args:
        name: Codec name (e.g., "stardate", "julian", "gregorian", "quadcent",
            "unix", "unix-hex").

    Returns:
        A Codec instance.

    Raises:
        UnknownFormatError: If the codec name is unknown.
    """
    cls = _REGISTRY.get(name)
    if cls is None:
        raise UnknownFormatError(
            "unknown date format",
            f"unknown codec: {name!r}. Available: {', '.join(sorted(_REGISTRY))}",
        )
    return cls()
