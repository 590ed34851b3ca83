from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import TimeEntry
from ..time_math import duration_minutes


class EntryDurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for entry durations).

    `raw_minutes` is the entry's length before any correction; entries where
    it is not positive are reported as anomalies. `entry_minutes` is what the
    entry adds to totals.
    """

    def raw_minutes(self, entry: TimeEntry) -> int:
        return duration_minutes(entry.start_time, entry.end_time)

    @abstractmethod
    def entry_minutes(self, entry: TimeEntry) -> int:
        raise NotImplementedError
