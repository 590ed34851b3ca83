from __future__ import annotations

from datetime import date

import pytest

from src.time_tracker.time_tracker.core.constants import ALL_TIME_LABEL
from src.time_tracker.time_tracker.reports.assembler import DateRange, ReportAssembler, date_range_label
from src.time_tracker.time_tracker.reports.model import DailyReport, ProjectMeta, TimeEntry


def _entry(project, start, end, description=""):
    return TimeEntry(project_name=project, start_time=start, end_time=end, description=description)


def _report(day, *entries, report_id=None):
    return DailyReport(
        report_id=report_id,
        employee_id="EMP001",
        employee_name="Asha Verma",
        report_date=date.fromisoformat(day),
        entries=tuple(entries),
    )


@pytest.mark.parametrize(
    "from_date,to_date,expected",
    [
        (date(2024, 1, 1), None, "from 2024-01-01 onwards"),
        (None, date(2024, 1, 31), "up to 2024-01-31"),
        (date(2024, 1, 1), date(2024, 1, 31), "from 2024-01-01 to 2024-01-31"),
        (None, None, ALL_TIME_LABEL),
    ],
)
def test_date_range_label(from_date, to_date, expected):
    assert date_range_label(from_date, to_date) == expected


def test_daily_summary_sorts_entries_and_computes_stats():
    entries = [
        _entry("Beta", "13:00", "14:15", "review"),
        _entry("Alpha", "09:00", "10:30", "standup + planning"),
        _entry("Gamma", "10:30", "11:00"),
    ]

    summary = ReportAssembler().build_daily_summary(entries, "Asha Verma", date(2024, 1, 10))

    assert [e.project_name for e in summary.entries] == ["Alpha", "Gamma", "Beta"]
    assert summary.entry_minutes == (90, 30, 75)
    assert summary.stats.count == 3
    assert summary.stats.total_minutes == 195
    assert summary.stats.average_minutes == 65


def test_daily_summary_as_dict_formats_durations_and_clock_labels():
    summary = ReportAssembler().build_daily_summary(
        [_entry("Alpha", "13:05", "14:45", "demo")], "Asha Verma", date(2024, 1, 10)
    )

    data = summary.as_dict()

    assert data["report_date"] == "2024-01-10"
    assert data["stats"]["total_time"] == "1h 40m"
    assert data["stats"]["average_time"] == "1h 40m"
    assert data["entries"][0]["start_label"] == "1:05 PM"
    assert data["entries"][0]["end_label"] == "2:45 PM"
    assert data["entries"][0]["duration"] == "1h 40m"
    assert data["entries"][0]["description"] == "demo"


def test_empty_daily_summary():
    summary = ReportAssembler().build_daily_summary([], "Asha Verma", date(2024, 1, 10))

    assert summary.stats.count == 0
    assert summary.stats.total_minutes == 0
    assert summary.stats.average_minutes == 0


def test_monthly_summary_stats_and_label():
    reports = [
        _report("2024-01-11", _entry("Gamma", "13:00", "14:30"), report_id=2),
        _report("2024-01-10", _entry("Gamma", "09:00", "10:00"), _entry("Delta", "10:00", "10:20"), report_id=1),
    ]
    meta = [ProjectMeta(project_name="Delta", start_date=date(2024, 1, 1), end_date=date(2024, 2, 1))]

    summary = ReportAssembler().build_monthly_summary(
        reports, meta, DateRange(from_date=date(2024, 1, 1)), employee_name="Asha Verma"
    )

    assert summary.date_range_label == "from 2024-01-01 onwards"
    assert summary.stats.total_reports == 2
    assert summary.stats.total_projects == 2
    assert summary.stats.total_entries == 3
    assert summary.stats.total_minutes == 170
    assert summary.stats.average_minutes_per_project == 85
    assert [p.project_name for p in summary.per_project] == ["Gamma", "Delta"]
    assert summary.anomalies == ()


def test_monthly_summary_as_dict_shape():
    reports = [_report("2024-01-10", _entry("Alpha", "09:00", "10:30"), _entry("Alpha", "12:00", "11:00"), report_id=4)]

    data = ReportAssembler().build_monthly_summary(reports).as_dict()

    assert data["employee_name"] == "Asha Verma"
    assert data["date_range_label"] == ALL_TIME_LABEL
    [day] = data["reports"]
    assert day["report_id"] == 4
    assert day["entry_count"] == 2
    assert day["total_time"] == "1h 30m"
    assert [e["duration_minutes"] for e in day["entries"]] == [90, 0]
    assert data["per_project"][0] == {
        "project_name": "Alpha",
        "total_minutes": 90,
        "total_time": "1h 30m",
        "first_date": "2024-01-10",
        "last_date": "2024-01-10",
        "start_date": "2024-01-10",
        "end_date": "2024-01-10",
        "status": "active",
    }
    assert data["stats"]["average_time_per_project"] == "1h 30m"
    assert data["anomalies"] == [
        {
            "report_id": 4,
            "report_date": "2024-01-10",
            "project_name": "Alpha",
            "start_time": "12:00",
            "end_time": "11:00",
            "minutes": -60,
        }
    ]


def test_monthly_summary_without_reports():
    summary = ReportAssembler().build_monthly_summary([])

    assert summary.employee_name is None
    assert summary.per_project == ()
    assert summary.stats.total_minutes == 0
    assert summary.stats.average_minutes_per_project == 0
