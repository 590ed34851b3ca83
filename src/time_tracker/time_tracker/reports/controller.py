from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container
from ..reports.service import ReportService

EXPORT_FIELDS = [
    "report_date",
    "employee_id",
    "employee_name",
    "project_name",
    "start_time",
    "end_time",
    "duration_minutes",
    "duration",
    "description",
]


def register(app: Flask, container: Container) -> None:
    def _monthly_filters() -> dict:
        return {
            "employee_id": request.args.get("employee_id", ""),
            "from_date": request.args.get("from_date"),
            "to_date": request.args.get("to_date"),
        }

    def _write_report_csv(*, rows: list[dict], filename: str):
        """Write entry rows to a CSV download (BOM so Excel picks UTF-8)."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"message": "Server is running!"})

    @app.route("/api/daily-summary", methods=["POST"], endpoint="daily_summary")
    @api_errors("Failed to build daily summary")
    def daily_summary():
        data = json_body()
        summary = container.report_service.preview_daily(
            employee_name=data.get("employee_name", ""),
            report_date=data.get("date"),
            entries=data.get("entries"),
        )
        return jsonify({"success": True, "summary": summary.as_dict()})

    @app.route("/api/generate-report", methods=["POST"], endpoint="generate_report")
    @api_errors("Internal server error")
    def generate_report():
        data = json_body()
        result = container.report_service.submit_daily_report(
            employee_id=data.get("employee_id", ""),
            report_date=data.get("date"),
            entries=data.get("entries"),
            additional_email=data.get("additional_email"),
        )

        if not result.emailed:
            message = "Report saved (no entries provided)"
        elif len(result.recipients) > 1:
            message = f"Daily report sent successfully to HR manager and {result.recipients[-1]}"
        else:
            message = "Daily report sent successfully to HR manager"

        return jsonify(
            {
                "success": True,
                "message": message,
                "report_id": result.report_id,
                "summary": result.summary.as_dict(),
            }
        ), 201

    @app.route("/api/monthly-report", methods=["GET"], endpoint="monthly_report")
    @api_errors("Failed to fetch reports")
    def monthly_report():
        summary = container.report_service.monthly_summary(**_monthly_filters())
        payload = {"success": True, **summary.as_dict()}
        if not summary.reports:
            payload["message"] = "No reports found for the selected criteria"
        return jsonify(payload)

    @app.route("/api/monthly-report/export", methods=["GET"], endpoint="monthly_report_export")
    @api_errors("Failed to export reports")
    def monthly_report_export():
        filters = _monthly_filters()
        summary = container.report_service.monthly_summary(**filters)
        filename = f"time_report_{filters['employee_id'].strip()}.csv"
        return _write_report_csv(rows=ReportService.export_rows(summary), filename=filename)

    @app.route("/api/send-monthly-report", methods=["POST"], endpoint="send_monthly_report")
    @api_errors("Failed to send report")
    def send_monthly_report():
        data = json_body()
        result = container.report_service.send_monthly_report(
            employee_id=data.get("employee_id", ""),
            from_date=data.get("from_date"),
            to_date=data.get("to_date"),
            additional_email=data.get("additional_email"),
        )
        return jsonify(
            {
                "success": True,
                "message": f"Monthly report sent to {', '.join(result.recipients)}",
                "stats": result.summary.as_dict()["stats"],
            }
        )
