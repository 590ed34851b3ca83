from __future__ import annotations

from ..model import TimeEntry
from .base import EntryDurationCalculator


class ClampedDurationCalculator(EntryDurationCalculator):
    """Standard rule: end - start, not below 0.

    Entries with a non-positive duration still count as entries; they just add
    no time. See DurationAggregator.find_anomalies for how they are reported.
    """

    def entry_minutes(self, entry: TimeEntry) -> int:
        return max(self.raw_minutes(entry), 0)
