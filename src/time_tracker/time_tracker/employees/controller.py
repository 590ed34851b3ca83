from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @api_errors("Failed to fetch employees")
    def list_employees():
        employees = container.employee_service.list_employees()
        return jsonify({"success": True, "employees": [e.as_dict() for e in employees]})

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @api_errors("Failed to add employee")
    def add_employee():
        data = json_body()
        row_id = container.employee_service.add_employee(
            employee_id=data.get("employee_id", ""),
            employee_name=data.get("employee_name", ""),
        )
        return jsonify({"success": True, "message": "Employee added successfully", "id": row_id}), 201

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @api_errors("Failed to delete employee")
    def delete_employee(employee_id: str):
        container.employee_service.delete_employee(employee_id)
        return jsonify({"success": True, "message": "Employee deleted successfully"})
