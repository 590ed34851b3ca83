from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import ProjectStatus
from .calculator.base import EntryDurationCalculator
from .calculator.clamped_calculator import ClampedDurationCalculator
from .model import DailyReport, DayTotal, DurationAnomaly, ProjectAggregate, ProjectMeta, TimeEntry
from .time_math import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class _ProjectGroup:
    project_name: str
    total_minutes: int
    first_date: date
    last_date: date
    project_id: Optional[int] = None


class DurationAggregator:
    """Derives per-day, per-project and global totals from daily reports.

    Stateless: every call reads only its arguments and returns new objects,
    so one instance can be shared by concurrent requests.
    """

    def __init__(self, *, calculator: Optional[EntryDurationCalculator] = None):
        self._calculator = calculator or ClampedDurationCalculator()

    def entry_minutes(self, entry: TimeEntry) -> int:
        return self._calculator.entry_minutes(entry)

    def total_minutes(self, reports: Iterable[DailyReport]) -> int:
        return sum(self._calculator.entry_minutes(e) for r in reports for e in r.entries)

    def per_day_totals(self, reports: Iterable[DailyReport]) -> list[DayTotal]:
        return [
            DayTotal(
                report_date=r.report_date,
                entry_count=len(r.entries),
                total_minutes=sum(self._calculator.entry_minutes(e) for e in r.entries),
            )
            for r in reports
        ]

    def per_project_totals(
        self,
        reports: Iterable[DailyReport],
        project_meta: Optional[Sequence[ProjectMeta]] = None,
    ) -> list[ProjectAggregate]:
        groups: dict[str, _ProjectGroup] = {}

        for r in reports:
            for entry in r.entries:
                name = entry.project_name.strip()
                g = groups.get(name)
                if not g:
                    g = _ProjectGroup(project_name=name, total_minutes=0, first_date=r.report_date, last_date=r.report_date)
                    groups[name] = g
                g.total_minutes += self._calculator.entry_minutes(entry)
                g.first_date = min(g.first_date, r.report_date)
                g.last_date = max(g.last_date, r.report_date)
                if g.project_id is None and entry.project_id is not None:
                    g.project_id = entry.project_id

        meta_by_id: dict[int, ProjectMeta] = {}
        meta_by_name: dict[str, ProjectMeta] = {}
        for m in project_meta or ():
            if m.project_id is not None:
                meta_by_id.setdefault(m.project_id, m)
            meta_by_name.setdefault(m.project_name.strip(), m)

        out: list[ProjectAggregate] = []
        for g in groups.values():
            meta = meta_by_id.get(g.project_id) if g.project_id is not None else None
            if meta is None:
                # Legacy rows carry no project id; fall back to the trimmed name.
                meta = meta_by_name.get(g.project_name)

            out.append(
                ProjectAggregate(
                    project_name=g.project_name,
                    total_minutes=g.total_minutes,
                    first_date=g.first_date,
                    last_date=g.last_date,
                    start_date=(meta.start_date if meta and meta.start_date else g.first_date),
                    end_date=(meta.end_date if meta and meta.end_date else g.last_date),
                    status=(meta.status if meta else ProjectStatus.ACTIVE),
                )
            )

        # sorted() is stable: equal totals keep first-seen order.
        return sorted(out, key=lambda p: p.total_minutes, reverse=True)

    @staticmethod
    def average_minutes_per_project(per_project: Sequence[ProjectAggregate]) -> int:
        if not per_project:
            return 0
        return round_half_up(sum(p.total_minutes for p in per_project), len(per_project))

    def find_anomalies(self, reports: Iterable[DailyReport]) -> list[DurationAnomaly]:
        anomalies: list[DurationAnomaly] = []
        for r in reports:
            for entry in r.entries:
                minutes = self._calculator.raw_minutes(entry)
                if minutes > 0:
                    continue
                logger.warning(
                    "Report %s (%s, %s): entry %r %s-%s has %d min, counted as 0",
                    r.report_id,
                    r.employee_id,
                    r.report_date.isoformat(),
                    entry.project_name,
                    entry.start_time,
                    entry.end_time,
                    minutes,
                )
                anomalies.append(
                    DurationAnomaly(
                        report_id=r.report_id,
                        report_date=r.report_date,
                        project_name=entry.project_name.strip(),
                        start_time=entry.start_time,
                        end_time=entry.end_time,
                        minutes=minutes,
                    )
                )
        return anomalies
