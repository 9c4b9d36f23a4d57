from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.session_guard import admin_required, current_user_id, login_required
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from .model import LeaveRequest


def leave_to_json(lr: LeaveRequest) -> dict:
    return {
        "id": lr.request_id,
        "employee_id": lr.employee_id,
        "leave_type": lr.leave_type,
        "start_date": lr.start_date.isoformat(),
        "end_date": lr.end_date.isoformat(),
        "reason": lr.reason,
        "status": lr.status.value,
        "request_date": lr.request_date.isoformat(),
        "decided_by": lr.decided_by,
        "decided_at": lr.decided_at.isoformat() if lr.decided_at else None,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    @app.route("/api/leave-requests", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        body = request.get_json(silent=True) or {}
        lr = svc.submit_leave(
            employee_id=current_user_id(),
            leave_type=body.get("leave_type") or "",
            start_date=parse_iso_date(body.get("start_date") or ""),
            end_date=parse_iso_date(body.get("end_date") or ""),
            reason=body.get("reason") or "",
        )
        return jsonify(leave_to_json(lr)), 201

    @app.route("/api/leave-requests/my", methods=["GET"], endpoint="my_leave")
    @login_required
    def my_leave():
        return jsonify([leave_to_json(lr) for lr in svc.list_my_leave(current_user_id())])

    @app.route("/api/leave-requests/all", methods=["GET"], endpoint="all_leave")
    @admin_required
    def all_leave():
        status = request.args.get("status")
        try:
            status_filter = RequestStatus(status) if status else None
        except ValueError:
            raise ValidationError(f"Unknown leave status: {status!r}")
        return jsonify([leave_to_json(lr) for lr in svc.list_all_leave(status=status_filter)])

    @app.route("/api/leave-requests/<int:request_id>/approve", methods=["PUT"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        return jsonify(leave_to_json(svc.approve_leave(request_id=request_id, admin_id=current_user_id())))

    @app.route("/api/leave-requests/<int:request_id>/reject", methods=["PUT"], endpoint="reject_leave")
    @admin_required
    def reject_leave(request_id: int):
        return jsonify(leave_to_json(svc.reject_leave(request_id=request_id, admin_id=current_user_id())))

    @app.route("/api/leave-requests/<int:request_id>", methods=["DELETE"], endpoint="delete_leave")
    @admin_required
    def delete_leave(request_id: int):
        if not svc.delete_leave(request_id):
            return jsonify({"error": f"Leave request not found with ID: {request_id}"}), 404
        return "", 204
