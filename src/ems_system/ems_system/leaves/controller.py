from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_actor, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _employee_id() -> int:
        return container.directory.resolve_active_employee(current_actor().principal_id).employee_id

    @app.route("/api/leaves/apply", methods=["POST"], endpoint="leaves_apply")
    @login_required
    def apply_leave():
        data = json_body()
        leave_id = container.leave_ledger.apply_leave(
            _employee_id(),
            leave_type_id=data.get("leave_type_id"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            reason=data.get("reason"),
        )
        return jsonify({"message": "Leave applied successfully", "leave_id": leave_id})

    @app.route("/api/leaves/approve/<int:leave_id>", methods=["PUT"], endpoint="leaves_decide")
    @admin_required
    def decide_leave(leave_id: int):
        data = json_body()
        decision = container.leave_ledger.decide(current_actor(), leave_id, data.get("status"))
        return jsonify({"message": f"Leave {decision.status.value} successfully", **decision.to_dict()})

    @app.route("/api/leaves/reject/<int:leave_id>", methods=["PUT"], endpoint="leaves_reject")
    @admin_required
    def reject_leave(leave_id: int):
        decision = container.leave_ledger.reject(current_actor(), leave_id)
        return jsonify({"message": "Leave rejected successfully", **decision.to_dict()})

    @app.route("/api/leaves/all", methods=["GET"], endpoint="leaves_all")
    @login_required
    def all_leaves():
        actor = current_actor()
        employee_id = None if actor.is_admin else _employee_id()
        rows = container.leave_ledger.list_leaves(
            actor,
            employee_id=employee_id,
            status=request.args.get("status") or None,
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/leaves/balance", methods=["GET"], endpoint="leaves_balance")
    @login_required
    def balance():
        return jsonify([b.to_dict() for b in container.leave_ledger.balance(_employee_id())])
