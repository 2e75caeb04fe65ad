from __future__ import annotations

from flask import Flask, jsonify

from ..common.validators import require_date
from ..common.web import admin_required, current_actor, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @admin_required
    def create_employee():
        data = json_body()
        joined = data.get("date_of_joining")
        employee_id = container.directory.onboard(
            current_actor(),
            user_id=data.get("user_id"),
            base_salary=data.get("base_salary", 0),
            department_id=data.get("department_id"),
            designation=data.get("designation"),
            date_of_joining=require_date(joined, "date_of_joining") if joined else None,
        )
        return jsonify({"message": "Employee profile created successfully", "employee_id": employee_id})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_deactivate")
    @admin_required
    def deactivate_employee(employee_id: int):
        container.directory.deactivate(current_actor(), employee_id)
        return jsonify({"message": "Employee deactivated successfully (soft delete)"})
