"""
Packet timestamps.

Timestamps are integer microseconds. A few sentinel values sit outside the
range of real timestamps and mark stream phases:

- UNSET: no timestamp assigned yet
- PRE_STREAM: stream-level setup data (e.g. a VideoHeader), delivered once
  before any real packet
- POST_STREAM: stream-level data delivered after the last real packet

Ordering: UNSET < PRE_STREAM < real timestamps < POST_STREAM
"""

from dataclasses import dataclass
from typing import ClassVar, Dict

_UNSET_VALUE = -(2 ** 63)
_PRE_STREAM_VALUE = -(2 ** 63) + 1
_POST_STREAM_VALUE = 2 ** 63 - 1

_SENTINEL_NAMES: Dict[int, str] = {
    _UNSET_VALUE: "Timestamp::Unset",
    _PRE_STREAM_VALUE: "Timestamp::PreStream",
    _POST_STREAM_VALUE: "Timestamp::PostStream",
}


@dataclass(frozen=True, order=True)
class Timestamp:
    """
    Timestamp in microseconds.

    Attributes:
        value: Microseconds (or one of the sentinel values)

    Example:
        ts = Timestamp.from_seconds(1.5)
        assert ts.value == 1_500_000
        assert Timestamp.PRE_STREAM < ts < Timestamp.POST_STREAM
    """
    value: int

    UNSET: ClassVar['Timestamp']
    PRE_STREAM: ClassVar['Timestamp']
    POST_STREAM: ClassVar['Timestamp']

    @classmethod
    def from_seconds(cls, seconds: float) -> 'Timestamp':
        """Create a timestamp from seconds (rounded to the nearest microsecond)."""
        return cls(int(round(seconds * 1_000_000)))

    def seconds(self) -> float:
        """Get timestamp in seconds."""
        if self.is_special():
            raise ValueError(f"{self} has no value in seconds")
        return self.value / 1_000_000

    def is_special(self) -> bool:
        """True for UNSET, PRE_STREAM and POST_STREAM."""
        return self.value in _SENTINEL_NAMES

    def is_range_value(self) -> bool:
        return not self.is_special()

    def __str__(self) -> str:
        return _SENTINEL_NAMES.get(self.value, str(self.value))


Timestamp.UNSET = Timestamp(_UNSET_VALUE)
Timestamp.PRE_STREAM = Timestamp(_PRE_STREAM_VALUE)
Timestamp.POST_STREAM = Timestamp(_POST_STREAM_VALUE)
