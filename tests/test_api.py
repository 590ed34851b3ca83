from __future__ import annotations

from datetime import date

from src.time_tracker.time_tracker.reports.model import TimeEntry


def _entries():
    return [
        {"project_name": "Alpha", "start_time": "09:00", "end_time": "10:30", "description": "planning"},
        {"project_name": "Beta", "start_time": "10:30", "end_time": "11:00"},
    ]


def test_health(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Server is running!"}


def test_unknown_route_is_json(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_employee_crud(client):
    resp = client.post("/api/employees", json={"employee_id": "EMP003", "employee_name": "Priya Nair"})
    assert resp.status_code == 201
    assert resp.get_json()["message"] == "Employee added successfully"

    dup = client.post("/api/employees", json={"employee_id": "EMP003", "employee_name": "Priya Nair"})
    assert dup.status_code == 409
    assert dup.get_json() == {"success": False, "error": "Employee ID already exists"}

    listed = client.get("/api/employees").get_json()["employees"]
    assert [e["employee_id"] for e in listed] == ["EMP001", "EMP003", "EMP002"]

    assert client.delete("/api/employees/EMP003").status_code == 200
    assert client.delete("/api/employees/EMP003").status_code == 404


def test_add_employee_requires_json_body(client):
    resp = client.post("/api/employees", data="nope", content_type="text/plain")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Request body must be a JSON object"


def test_project_lifecycle(client):
    created = client.post(
        "/api/projects",
        json={"employee_id": "EMP001", "project_name": "Apollo", "start_date": "2024-01-01", "end_date": "2024-03-31"},
    )
    assert created.status_code == 201
    project_id = created.get_json()["id"]

    [project] = client.get("/api/projects?employee_id=EMP001").get_json()["projects"]
    assert project == {
        "id": project_id,
        "employee_id": "EMP001",
        "project_name": "Apollo",
        "start_date": "2024-01-01",
        "end_date": "2024-03-31",
        "status": "active",
    }

    resp = client.patch(f"/api/projects/{project_id}/status", json={"status": "completed"})
    assert resp.get_json()["status"] == "completed"

    bad = client.put(
        f"/api/projects/{project_id}",
        json={"project_name": "Apollo", "start_date": "2024-05-01", "end_date": "2024-01-01"},
    )
    assert bad.status_code == 400

    deleted = client.delete(f"/api/projects/{project_id}")
    assert deleted.get_json()["deleted_entries"] == 0
    assert client.delete(f"/api/projects/{project_id}").status_code == 404


def test_daily_summary_preview(client, reports):
    resp = client.post(
        "/api/daily-summary",
        json={"employee_name": "Asha Verma", "date": "2024-01-10", "entries": list(reversed(_entries()))},
    )

    assert resp.status_code == 200
    summary = resp.get_json()["summary"]
    assert [e["project_name"] for e in summary["entries"]] == ["Alpha", "Beta"]
    assert summary["stats"]["total_time"] == "2h 0m"
    assert summary["stats"]["average_time"] == "1h 0m"
    assert reports.reports == {}


def test_generate_report(client, mailer):
    resp = client.post(
        "/api/generate-report",
        json={
            "employee_id": "EMP001",
            "date": "2024-01-10",
            "entries": _entries(),
            "additional_email": "lead@example.com",
        },
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Daily report sent successfully to HR manager and lead@example.com"
    assert body["summary"]["stats"]["total_minutes"] == 120
    assert mailer.sent[0]["to"] == ["hr@example.com", "lead@example.com"]

    again = client.post("/api/generate-report", json={"employee_id": "EMP001", "date": "2024-01-10", "entries": []})
    assert again.status_code == 409


def test_generate_report_without_entries(client, mailer):
    resp = client.post("/api/generate-report", json={"employee_id": "EMP001", "date": "2024-01-10", "entries": []})

    assert resp.status_code == 201
    assert resp.get_json()["message"] == "Report saved (no entries provided)"
    assert mailer.sent == []


def test_generate_report_rejects_inverted_entry(client, reports):
    resp = client.post(
        "/api/generate-report",
        json={
            "employee_id": "EMP001",
            "date": "2024-01-10",
            "entries": [{"project_name": "Alpha", "start_time": "14:00", "end_time": "13:00"}],
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Entry 1: end time must be after start time"
    assert reports.reports == {}


def test_generate_report_mail_failure_returns_report_id(failing_container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.time_tracker.time_tracker.main import create_app

    client = create_app(failing_container).test_client()
    resp = client.post("/api/generate-report", json={"employee_id": "EMP001", "date": "2024-01-10", "entries": _entries()})

    assert resp.status_code == 502
    body = resp.get_json()
    assert body["success"] is False
    assert body["report_id"] == 1


def _seed(reports):
    reports.add("EMP001", "Asha Verma", date(2024, 1, 10), TimeEntry("Gamma", "09:00", "10:00", "kickoff"))
    reports.add("EMP001", "Asha Verma", date(2024, 1, 11), TimeEntry("Gamma", "13:00", "14:30"))


def test_monthly_report(client, reports):
    _seed(reports)

    resp = client.get("/api/monthly-report?employee_id=EMP001&from_date=2024-01-01")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["date_range_label"] == "from 2024-01-01 onwards"
    assert [r["report_date"] for r in body["reports"]] == ["2024-01-11", "2024-01-10"]
    assert body["per_project"][0]["total_minutes"] == 150
    assert body["stats"]["total_time"] == "2h 30m"


def test_monthly_report_empty_and_invalid(client):
    empty = client.get("/api/monthly-report?employee_id=EMP001").get_json()
    assert empty["reports"] == []
    assert empty["message"] == "No reports found for the selected criteria"

    assert client.get("/api/monthly-report?employee_id=EMP404").status_code == 404
    assert client.get("/api/monthly-report").status_code == 400
    assert client.get("/api/monthly-report?employee_id=EMP001&from_date=2024-02-01&to_date=2024-01-01").status_code == 400


def test_monthly_report_export_csv(client, reports):
    _seed(reports)

    resp = client.get("/api/monthly-report/export?employee_id=EMP001")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "time_report_EMP001.csv" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == (
        "report_date,employee_id,employee_name,project_name,start_time,end_time,duration_minutes,duration,description"
    )
    assert lines[1] == "2024-01-11,EMP001,Asha Verma,Gamma,13:00,14:30,90,1h 30m,"
    assert lines[2] == "2024-01-10,EMP001,Asha Verma,Gamma,09:00,10:00,60,1h 0m,kickoff"


def test_send_monthly_report(client, reports, mailer):
    _seed(reports)

    resp = client.post("/api/send-monthly-report", json={"employee_id": "EMP001"})

    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Monthly report sent to hr@example.com"
    assert mailer.sent[0]["subject"] == "Monthly Time Report - Asha Verma (All Time)"

    none = client.post("/api/send-monthly-report", json={"employee_id": "EMP002"})
    assert none.status_code == 400
