"""Time-of-day interval model used by conflict detection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time


def overlaps(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """Half-open overlap test on [start, end) intervals.

    Equivalent to the three-way rule: b starts inside a, b ends inside a, or
    b contains a. Touching endpoints (a_end == b_start) do not overlap.
    Inverted or zero-length intervals are not rejected here.
    """
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True)
class TimeInterval:
    start: time
    end: time

    def overlaps(self, other: TimeInterval) -> bool:
        return overlaps(self.start, self.end, other.start, other.end)

    @property
    def is_valid(self) -> bool:
        return self.start < self.end
