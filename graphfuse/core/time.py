"""Timestamp value used by stamped variables."""

import math
import numbers
from dataclasses import dataclass
from typing import Union

NSEC_PER_SEC = 1_000_000_000


@dataclass(frozen=True, order=True)
class Time:
    """Point in time as whole seconds plus nanoseconds.

    Ordering and hashing follow (sec, nsec), so values can be used as map keys
    and sorted for sliding-window bookkeeping.
    """

    sec: int = 0
    nsec: int = 0

    def __post_init__(self):
        """Normalize so that 0 <= nsec < 1e9."""
        for name in ("sec", "nsec"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise TypeError(
                    f"Time.{name} must be an integer, got {value!r}; use Time.from_seconds for floats"
                )
        sec, nsec = divmod(int(self.sec) * NSEC_PER_SEC + int(self.nsec), NSEC_PER_SEC)
        if sec < 0:
            raise ValueError(f"Time cannot be negative: {self.sec}s {self.nsec}ns")
        object.__setattr__(self, "sec", sec)
        object.__setattr__(self, "nsec", nsec)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Time":
        """Build a Time from floating-point seconds."""
        if not math.isfinite(seconds):
            raise ValueError(f"Time must be finite, got {seconds}")
        total_nsec = int(round(seconds * NSEC_PER_SEC))
        return cls(0, total_nsec)

    def to_seconds(self) -> float:
        """Convert to floating-point seconds."""
        return self.sec + self.nsec / NSEC_PER_SEC

    def to_nanoseconds(self) -> int:
        return self.sec * NSEC_PER_SEC + self.nsec

    def __str__(self) -> str:
        return f"{self.sec}.{self.nsec:09d}"


TimeLike = Union[Time, float, int]


def as_time(stamp: TimeLike) -> Time:
    """Coerce seconds or a Time into a Time."""
    if isinstance(stamp, Time):
        return stamp
    if isinstance(stamp, bool) or not isinstance(stamp, (int, float)):
        raise TypeError(f"Expected Time or seconds, got {type(stamp).__name__}")
    return Time.from_seconds(float(stamp))
