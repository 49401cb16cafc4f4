"""Per-block min/max statistics and block lookup by reference id."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Any, Optional, Sequence

I32_MAX = 2**31 - 1
I32_MIN = -(2**31)


@dataclass
class Stat:
    """Minimum and maximum of an i32 column (RefID or POS) within one block."""

    min_value: int = I32_MAX
    max_value: int = I32_MIN

    def update(self, value: int) -> None:
        """Widen the range to include ``value``."""
        self.max_value = max(value, self.max_value)
        self.min_value = min(value, self.min_value)

    def is_reset(self) -> bool:
        """True if no value has been recorded since the last reset."""
        return self.min_value == I32_MAX and self.max_value == I32_MIN

    def reset(self) -> None:
        """Return to the empty state."""
        self.min_value = I32_MAX
        self.max_value = I32_MIN

    def to_dict(self) -> dict[str, int]:
        """Representation used in file metadata."""
        return {"min_value": self.min_value, "max_value": self.max_value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stat":
        """Build from the metadata representation."""
        return cls(min_value=int(data["min_value"]), max_value=int(data["max_value"]))


def find_leftmost_block(ref_id: int, stats: Sequence[Stat]) -> Optional[int]:
    """Index of the first block that may hold ``ref_id``, or None if no block does.

    Blocks must be ordered by reference id, as in a sorted file.
    """
    index = bisect_left(stats, ref_id, key=lambda s: s.max_value)
    if index == len(stats) or stats[index].min_value > ref_id:
        return None
    return index


def find_rightmost_block(ref_id: int, stats: Sequence[Stat]) -> int:
    """Index one past the last block whose minimum does not exceed ``ref_id``."""
    return bisect_right(stats, ref_id, key=lambda s: s.min_value)