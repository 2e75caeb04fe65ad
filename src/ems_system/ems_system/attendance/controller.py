from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _employee_id() -> int:
        return container.directory.resolve_active_employee(current_actor().principal_id).employee_id

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def check_in():
        container.attendance_ledger.check_in(_employee_id())
        return jsonify({"message": "Check-in successful"})

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def check_out():
        total_hours = container.attendance_ledger.check_out(_employee_id())
        return jsonify({"message": "Check-out successful", "total_hours": float(total_hours)})

    @app.route("/api/attendance/status-today", methods=["GET"], endpoint="attendance_status_today")
    @login_required
    def status_today():
        return jsonify(container.attendance_ledger.status(_employee_id()).to_dict())

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history():
        employee_id = _employee_id()
        records = container.attendance_ledger.history(
            employee_id,
            month=request.args.get("month") or None,
            year=request.args.get("year") or None,
        )
        return jsonify(
            {
                "employee_id": employee_id,
                "count": len(records),
                "records": [r.to_dict() for r in records],
            }
        )

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def summary():
        summary = container.attendance_ledger.monthly_summary(
            _employee_id(),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify(summary.to_dict())
