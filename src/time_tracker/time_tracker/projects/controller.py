from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects", methods=["GET"], endpoint="list_projects")
    @api_errors("Failed to fetch projects")
    def list_projects():
        projects = container.project_service.list_for_employee(request.args.get("employee_id", ""))
        return jsonify({"success": True, "projects": [p.as_dict() for p in projects]})

    @app.route("/api/projects", methods=["POST"], endpoint="create_project")
    @api_errors("Failed to add project")
    def create_project():
        data = json_body()
        project_id = container.project_service.create_project(
            employee_id=data.get("employee_id", ""),
            project_name=data.get("project_name", ""),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )
        return jsonify({"success": True, "message": "Project added", "id": project_id}), 201

    @app.route("/api/projects/<int:project_id>", methods=["PUT"], endpoint="update_project")
    @api_errors("Failed to update project")
    def update_project(project_id: int):
        data = json_body()
        container.project_service.update_project(
            project_id=project_id,
            project_name=data.get("project_name", ""),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )
        return jsonify({"success": True, "message": "Project updated successfully"})

    @app.route("/api/projects/<int:project_id>/status", methods=["PATCH"], endpoint="update_project_status")
    @api_errors("Failed to update status")
    def update_project_status(project_id: int):
        status = container.project_service.update_status(project_id=project_id, status=json_body().get("status", ""))
        return jsonify({"success": True, "message": "Status updated", "status": status.value})

    @app.route("/api/projects/<int:project_id>", methods=["DELETE"], endpoint="delete_project")
    @api_errors("Failed to delete project")
    def delete_project(project_id: int):
        deleted_entries = container.project_service.delete_project(project_id)
        return jsonify(
            {"success": True, "message": "Project deleted successfully", "deleted_entries": deleted_entries}
        )
