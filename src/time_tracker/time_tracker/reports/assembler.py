from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.constants import ALL_TIME_LABEL
from .aggregator import DurationAggregator
from .model import DailyReport, DayTotal, DurationAnomaly, ProjectAggregate, ProjectMeta, TimeEntry
from .time_math import duration_minutes, format_clock, format_duration, round_half_up


@dataclass(frozen=True)
class DateRange:
    from_date: Optional[date] = None
    to_date: Optional[date] = None


def date_range_label(from_date: Optional[date], to_date: Optional[date]) -> str:
    if from_date and to_date:
        return f"from {from_date.isoformat()} to {to_date.isoformat()}"
    if from_date:
        return f"from {from_date.isoformat()} onwards"
    if to_date:
        return f"up to {to_date.isoformat()}"
    return ALL_TIME_LABEL


@dataclass(frozen=True)
class DailyStats:
    count: int
    total_minutes: int
    average_minutes: int


@dataclass(frozen=True)
class DailySummary:
    employee_name: str
    report_date: date
    entries: tuple[TimeEntry, ...]
    entry_minutes: tuple[int, ...]
    stats: DailyStats

    def as_dict(self) -> dict:
        return {
            "employee_name": self.employee_name,
            "report_date": self.report_date.isoformat(),
            "entries": [_entry_as_dict(e, m) for e, m in zip(self.entries, self.entry_minutes)],
            "stats": {
                "count": self.stats.count,
                "total_minutes": self.stats.total_minutes,
                "average_minutes": self.stats.average_minutes,
                "total_time": format_duration(self.stats.total_minutes),
                "average_time": format_duration(self.stats.average_minutes),
            },
        }


@dataclass(frozen=True)
class MonthlyStats:
    total_reports: int
    total_projects: int
    total_entries: int
    total_minutes: int
    average_minutes_per_project: int


@dataclass(frozen=True)
class MonthlySummary:
    employee_name: Optional[str]
    reports: tuple[DailyReport, ...]
    per_day: tuple[DayTotal, ...]
    per_project: tuple[ProjectAggregate, ...]
    stats: MonthlyStats
    date_range_label: str
    anomalies: tuple[DurationAnomaly, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict:
        reports = []
        for r, day in zip(self.reports, self.per_day):
            reports.append(
                {
                    "report_id": r.report_id,
                    "employee_id": r.employee_id,
                    "employee_name": r.employee_name,
                    "report_date": r.report_date.isoformat(),
                    "entry_count": day.entry_count,
                    "total_minutes": day.total_minutes,
                    "total_time": format_duration(day.total_minutes),
                    "entries": [_entry_as_dict(e) for e in r.entries],
                }
            )

        return {
            "employee_name": self.employee_name,
            "date_range_label": self.date_range_label,
            "reports": reports,
            "per_project": [
                {
                    "project_name": p.project_name,
                    "total_minutes": p.total_minutes,
                    "total_time": format_duration(p.total_minutes),
                    "first_date": p.first_date.isoformat(),
                    "last_date": p.last_date.isoformat(),
                    "start_date": p.start_date.isoformat(),
                    "end_date": p.end_date.isoformat(),
                    "status": p.status.value,
                }
                for p in self.per_project
            ],
            "stats": {
                "total_reports": self.stats.total_reports,
                "total_projects": self.stats.total_projects,
                "total_entries": self.stats.total_entries,
                "total_minutes": self.stats.total_minutes,
                "total_time": format_duration(self.stats.total_minutes),
                "average_minutes_per_project": self.stats.average_minutes_per_project,
                "average_time_per_project": format_duration(self.stats.average_minutes_per_project),
            },
            "anomalies": [
                {
                    "report_id": a.report_id,
                    "report_date": a.report_date.isoformat(),
                    "project_name": a.project_name,
                    "start_time": a.start_time,
                    "end_time": a.end_time,
                    "minutes": a.minutes,
                }
                for a in self.anomalies
            ],
        }


def _entry_as_dict(entry: TimeEntry, minutes: Optional[int] = None) -> dict:
    if minutes is None:
        minutes = max(duration_minutes(entry.start_time, entry.end_time), 0)
    return {
        "project_id": entry.project_id,
        "project_name": entry.project_name,
        "start_time": entry.start_time,
        "end_time": entry.end_time,
        "start_label": format_clock(entry.start_time),
        "end_label": format_clock(entry.end_time),
        "description": entry.description,
        "duration_minutes": minutes,
        "duration": format_duration(minutes),
    }


class ReportAssembler:
    """Builds the structures the API, CSV export and emails consume.

    Never performs I/O: callers hand in already-fetched reports and metadata.
    """

    def __init__(self, aggregator: Optional[DurationAggregator] = None):
        self._aggregator = aggregator or DurationAggregator()

    @property
    def aggregator(self) -> DurationAggregator:
        return self._aggregator

    def build_daily_summary(self, entries: Iterable[TimeEntry], employee_name: str, report_date: date) -> DailySummary:
        # "HH:MM" is fixed-width, so string order is time order.
        ordered = tuple(sorted(entries, key=lambda e: e.start_time))
        minutes = tuple(self._aggregator.entry_minutes(e) for e in ordered)
        total = sum(minutes)
        return DailySummary(
            employee_name=employee_name,
            report_date=report_date,
            entries=ordered,
            entry_minutes=minutes,
            stats=DailyStats(
                count=len(ordered),
                total_minutes=total,
                average_minutes=round_half_up(total, len(ordered)),
            ),
        )

    def build_monthly_summary(
        self,
        reports: Sequence[DailyReport],
        project_meta: Optional[Sequence[ProjectMeta]] = None,
        date_range: Optional[DateRange] = None,
        *,
        employee_name: Optional[str] = None,
    ) -> MonthlySummary:
        reports = tuple(reports)
        per_project = self._aggregator.per_project_totals(reports, project_meta)
        per_day = self._aggregator.per_day_totals(reports)
        date_range = date_range or DateRange()

        if employee_name is None and reports:
            employee_name = reports[0].employee_name

        return MonthlySummary(
            employee_name=employee_name,
            reports=reports,
            per_day=tuple(per_day),
            per_project=tuple(per_project),
            stats=MonthlyStats(
                total_reports=len(reports),
                total_projects=len(per_project),
                total_entries=sum(d.entry_count for d in per_day),
                total_minutes=self._aggregator.total_minutes(reports),
                average_minutes_per_project=self._aggregator.average_minutes_per_project(per_project),
            ),
            date_range_label=date_range_label(date_range.from_date, date_range.to_date),
            anomalies=tuple(self._aggregator.find_anomalies(reports)),
        )
