"""
Clearance Severity

Closed four-level classification with a fixed total order:

    OK < CAUTION < WARNING < DANGER

The order drives worst-first sorting and "worst wins" aggregation, so it is
carried by an explicit rank rather than by comparing the string values.
"""

from enum import Enum


class Severity(Enum):
    OK = "ok"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def worst(cls, severities) -> "Severity":
        """Most severe of an iterable of severities (OK when empty)."""
        return max(severities, key=lambda s: s.rank, default=cls.OK)

    @classmethod
    def from_rank(cls, rank: int) -> "Severity":
        for severity, value in _RANK.items():
            if value == rank:
                return severity
        raise ValueError(f"No severity with rank {rank}")


_RANK = {
    Severity.OK: 0,
    Severity.CAUTION: 1,
    Severity.WARNING: 2,
    Severity.DANGER: 3,
}


__all__ = ["Severity"]
