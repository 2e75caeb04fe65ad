from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_actor, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    @admin_required
    def generate():
        data = json_body()
        generated = container.payroll_engine.generate_for_employee(
            current_actor(),
            data.get("employee_id"),
            data.get("month"),
            data.get("year"),
        )
        return jsonify({"message": "Payroll generated successfully", **generated.to_dict()})

    @app.route("/api/payroll/generate-all", methods=["POST"], endpoint="payroll_generate_all")
    @admin_required
    def generate_all():
        data = json_body()
        result = container.payroll_engine.generate_for_all_active(current_actor(), data.get("month"), data.get("year"))
        return jsonify({"message": "Payroll generated for all employees", **result.to_dict()})

    @app.route("/api/payroll/my", methods=["GET"], endpoint="payroll_my")
    @login_required
    def my_payroll():
        employee = container.directory.resolve_active_employee(current_actor().principal_id)
        records = container.payroll_engine.history(employee.employee_id)
        return jsonify({"payroll": [r.to_dict() for r in records]})

    @app.route("/api/payroll/all", methods=["GET"], endpoint="payroll_all")
    @admin_required
    def all_payroll():
        records = container.payroll_engine.all_records(current_actor())
        return jsonify({"payroll": [r.to_dict() for r in records]})

    @app.route("/api/payroll/history/<int:employee_id>", methods=["GET"], endpoint="payroll_history")
    @admin_required
    def payroll_history(employee_id: int):
        records = container.payroll_engine.history_of(current_actor(), employee_id)
        return jsonify({"payroll_history": [r.to_dict() for r in records]})
