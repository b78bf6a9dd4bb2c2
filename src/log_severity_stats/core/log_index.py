"""In-memory severity index.

Records are kept twice: once in a flat insertion-ordered list (for time queries over
everything) and once in a per-category bucket (for category-scoped queries). Both
containers hold the same ``LogRecord`` objects, so every record is reachable from both.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable

from .models import LogRecord, Stats, TimeMode


class _Accumulator:
    """Single-pass min/max/sum/count over severities."""

    __slots__ = ("min", "max", "total", "count")

    def __init__(self) -> None:
        self.min: float | None = None
        self.max: float | None = None
        self.total = 0.0
        self.count = 0

    def add(self, severity: float) -> None:
        if self.min is None or self.max is None:
            self.min = self.max = severity
        elif math.isnan(severity) or math.isnan(self.min):
            self.min = self.max = math.nan
        else:
            # -0.0 orders below 0.0 here, as IEEE min/max do.
            if severity < self.min or (severity == self.min == 0.0 and math.copysign(1.0, severity) < 0):
                self.min = severity
            if severity > self.max or (severity == self.max == 0.0 and math.copysign(1.0, self.max) < 0):
                self.max = severity
        self.total += severity
        self.count += 1

    def to_stats(self) -> Stats:
        if self.min is None or self.max is None:
            return Stats.empty()
        return Stats(min=self.min, max=self.max, mean=self.total / self.count, count=self.count)


def _aggregate(records: Iterable[LogRecord]) -> Stats:
    acc = _Accumulator()
    for record in records:
        acc.add(record.severity)
    return acc.to_stats()


def _within(records: Iterable[LogRecord], mode: TimeMode, threshold: int) -> Iterable[LogRecord]:
    return (r for r in records if mode.matches(r.timestamp, threshold))


class LogIndex:
    """Owns all ingested records and answers min/max/mean severity queries.

    Category names are matched exactly (case- and whitespace-sensitive).
    Category-scoped queries return ``None`` when the category was never inserted;
    that is distinct from a time filter matching nothing, which yields ``Stats.empty()``.
    """

    def __init__(self) -> None:
        self._records: list[LogRecord] = []
        self._by_category: dict[str, list[LogRecord]] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, category: object) -> bool:
        with self._lock:
            return category in self._by_category

    def insert(self, timestamp: int, category: str, severity: float) -> None:
        """Append a record to the flat list and to its category bucket."""
        record = LogRecord(timestamp=timestamp, category=category, severity=severity)
        with self._lock:
            self._records.append(record)
            bucket = self._by_category.get(category)
            if bucket is None:
                bucket = self._by_category[category] = []
            bucket.append(record)

    def stats_by_category(self, category: str) -> Stats | None:
        with self._lock:
            bucket = self._by_category.get(category)
            if bucket is None:
                return None
            return _aggregate(bucket)

    def stats_by_time(self, mode: TimeMode | str, threshold: int) -> Stats:
        mode = TimeMode(mode)
        with self._lock:
            return _aggregate(_within(self._records, mode, threshold))

    def stats_by_category_and_time(
        self,
        category: str,
        mode: TimeMode | str,
        threshold: int,
    ) -> Stats | None:
        mode = TimeMode(mode)
        with self._lock:
            bucket = self._by_category.get(category)
            if bucket is None:
                return None
            return _aggregate(_within(bucket, mode, threshold))

    def categories(self) -> dict[str, int]:
        """Return bucket sizes keyed by category, in first-seen order."""
        with self._lock:
            return {name: len(bucket) for name, bucket in self._by_category.items()}

    def records(self) -> tuple[LogRecord, ...]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return tuple(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._by_category.clear()
