"""Format registry and dispatch.

Decoders are tried in a fixed order. The grammars never overlap, so the
order only decides which format reports an error for a malformed token.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pystardate._constants import DEFAULT_FORMATS, DEFAULT_PRECISION
from pystardate._errors import (
    StardateError,
    UnknownFormatError,
    UnrecognizedDateError,
    ValueOutOfRangeError,
)
from pystardate._time import IntermediateTime
from pystardate.codec import (
    Codec,
    CodecName,
    GregorianCodec,
    JulianCodec,
    QuadcentCodec,
    StardateCodec,
    UnixCodec,
    UnixHexCodec,
)
from pystardate.codec._base import validate_precision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatDescriptor:
    """A registered format: its selector character and codec."""

    selector: str
    codec: Codec
    decodes: bool = True

    @property
    def name(self) -> CodecName:
        return self.codec.name


FORMATS: tuple[FormatDescriptor, ...] = (
    FormatDescriptor("s", StardateCodec()),
    FormatDescriptor("j", JulianCodec()),
    FormatDescriptor("g", GregorianCodec()),
    FormatDescriptor("q", QuadcentCodec()),
    FormatDescriptor("u", UnixCodec()),
    FormatDescriptor("x", UnixHexCodec(), decodes=False),
)


class Outcome(enum.StrEnum):
    UNMATCHED = "unmatched"
    OUT_OF_RANGE = "out_of_range"
    SUCCESS = "success"


@dataclass(frozen=True)
class Result:
    """Outcome of converting one token."""

    token: str
    outcome: Outcome
    outputs: tuple[str, ...] = ()
    source: CodecName | None = None
    time: IntermediateTime | None = None
    error: StardateError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def line(self) -> str:
        """Outputs joined by single spaces."""
        return " ".join(self.outputs)


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of converting several tokens independently."""

    results: tuple[Result, ...]

    @property
    def failed(self) -> bool:
        return any(not r.ok for r in self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


def get_format(key: str) -> FormatDescriptor:
    """Look up a format by selector character or codec name.

    Raises:
        UnknownFormatError: If nothing is registered under ``key``.
    """
    for fmt in FORMATS:
        if key == fmt.selector or key == fmt.name:
            return fmt
    raise UnknownFormatError(
        "unknown date format",
        f"unknown format {key!r}. Available: "
        + ", ".join(f"{f.selector} ({f.name})" for f in FORMATS),
    )


def select_formats(keys: Iterable[str]) -> tuple[FormatDescriptor, ...]:
    """Resolve a selection to descriptors in registry order.

    An empty selection falls back to :data:`DEFAULT_FORMATS`.
    """
    chosen = {get_format(key).selector for key in keys}
    if not chosen:
        chosen = {get_format(key).selector for key in DEFAULT_FORMATS}
    return tuple(fmt for fmt in FORMATS if fmt.selector in chosen)


def decode_token(text: str) -> tuple[FormatDescriptor, IntermediateTime]:
    """Decode ``text`` with the first format whose grammar accepts it.

    Raises:
        UnrecognizedDateError: If no format accepts the token.
        ValueOutOfRangeError: If a format accepts it but a field is invalid.
    """
    for fmt in FORMATS:
        if not fmt.decodes:
            continue
        time = fmt.codec.decode(text)
        if time is not None:
            logger.debug("decoded %r as %s: %s", text, fmt.name, time)
            return fmt, time
    raise UnrecognizedDateError(text)


def encode_time(
    time: IntermediateTime,
    formats: tuple[FormatDescriptor, ...],
    precision: int = DEFAULT_PRECISION,
) -> tuple[str, ...]:
    return tuple(fmt.codec.encode(time, precision=precision) for fmt in formats)


def convert(
    token: str,
    *,
    formats: Iterable[str] = DEFAULT_FORMATS,
    precision: int = DEFAULT_PRECISION,
) -> Result:
    """Convert one token to every selected format.

    Args:
        token: The input date in any supported notation.
        formats: Selector characters or codec names to output. Outputs
            follow registry order, not the order given here.
        precision: Stardate fraction digits, 0-6.

    Returns:
        A Result; unrecognised and out-of-range tokens are reported in it
        rather than raised.

    Raises:
        UnknownFormatError: If a selected format is not registered.
        InvalidPrecisionError: If precision is outside 0-6.
    """
    validate_precision(precision)
    selection = select_formats(formats)
    try:
        fmt, time = decode_token(token)
    except UnrecognizedDateError as exc:
        logger.debug("unrecognised token %r", token)
        return Result(token, Outcome.UNMATCHED, error=exc)
    except ValueOutOfRangeError as exc:
        logger.debug("rejected token %r: %s", token, exc.internal())
        return Result(token, Outcome.OUT_OF_RANGE, error=exc)
    return Result(
        token,
        Outcome.SUCCESS,
        outputs=encode_time(time, selection, precision),
        source=fmt.name,
        time=time,
    )


def convert_all(
    tokens: Iterable[str],
    *,
    formats: Iterable[str] = DEFAULT_FORMATS,
    precision: int = DEFAULT_PRECISION,
) -> BatchResult:
    """Convert tokens one by one; a failed token does not stop the rest."""
    formats = tuple(formats)
    return BatchResult(
        tuple(convert(token, formats=formats, precision=precision) for token in tokens)
    )
