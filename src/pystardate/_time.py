"""The internal time value shared by every codec."""

from __future__ import annotations

from dataclasses import dataclass

from pystardate._constants import FRACTION_BITS, FRACTION_SCALE, MAX_SECONDS


def is_representable(seconds: int) -> bool:
    """Whether a whole-second count fits the internal range."""
    return 0 <= seconds <= MAX_SECONDS


@dataclass(frozen=True, order=True)
class IntermediateTime:
    """Seconds since 0001=01=01 Julian plus a 32-bit binary fraction.

    Every codec decodes to and encodes from this type, so it carries no
    calendar semantics of its own. Ordering compares ``seconds`` and then
    ``fraction``, which is exact.
    """

    seconds: int
    fraction: int = 0

    def __post_init__(self) -> None:
        if not is_representable(self.seconds):
            raise ValueError(f"seconds out of range: {self.seconds}")
        if not 0 <= self.fraction < FRACTION_SCALE:
            raise ValueError(f"fraction out of range: {self.fraction}")

    @classmethod
    def from_ticks(cls, ticks: int) -> IntermediateTime:
        """Build from a fixed-point count of 1/2**32 second ticks."""
        return cls(ticks >> FRACTION_BITS, ticks & (FRACTION_SCALE - 1))

    @property
    def ticks(self) -> int:
        return (self.seconds << FRACTION_BITS) | self.fraction

    def shift(self, seconds: int, fraction: int = 0) -> IntermediateTime:
        """Return this instant moved by a signed duration.

        ``fraction`` may be negative or exceed one second; carry and borrow
        into ``seconds`` are normalized.

        Raises:
            ValueError: If the result falls outside the representable range.
        """
        return IntermediateTime.from_ticks(self.ticks + (seconds << FRACTION_BITS) + fraction)

    def __str__(self) -> str:
        return f"{self.seconds}+{self.fraction}/2^32"
