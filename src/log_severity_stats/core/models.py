"""Core data models for severity aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TimeMode(str, Enum):
    """Direction of a timestamp filter. Both directions exclude the threshold itself."""

    BEFORE = "BEFORE"
    AFTER = "AFTER"

    def matches(self, timestamp: int, threshold: int) -> bool:
        if self is TimeMode.BEFORE:
            return timestamp < threshold
        return timestamp > threshold


@dataclass(frozen=True, slots=True)
class LogRecord:
    """One ingested record. Never mutated after insertion."""

    timestamp: int
    category: str
    severity: float


@dataclass(frozen=True, slots=True)
class Stats:
    """Aggregate severity statistics for a set of records.

    ``count`` is zero only for the empty result, where min/max/mean are all 0.0.
    """

    min: float
    max: float
    mean: float
    count: int

    @classmethod
    def empty(cls) -> Stats:
        return cls(min=0.0, max=0.0, mean=0.0, count=0)

    @property
    def is_empty(self) -> bool:
        return self.count == 0
