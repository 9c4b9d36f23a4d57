from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_clock_time, parse_iso_date
from ..common.session_guard import admin_required, current_user_id, is_admin, login_required
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def record_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "employee_id": r.employee_id,
        "date": r.work_date.isoformat(),
        "clock_in": r.clock_in.strftime("%H:%M:%S") if r.clock_in else None,
        "clock_out": r.clock_out.strftime("%H:%M:%S") if r.clock_out else None,
        "status": r.status.value,
        "remarks": r.remarks,
    }


def _parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        body = request.get_json(silent=True) or {}
        record = svc.clock_in(
            current_user_id(),
            clock_in=parse_clock_time(body.get("clock_in")),
            remarks=body.get("remarks"),
        )
        return jsonify(record_to_json(record)), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @login_required
    def update_attendance(attendance_id: int):
        body = request.get_json(silent=True) or {}
        if is_admin() and "status" in body:
            record = svc.admin_update_record(
                attendance_id,
                clock_in=parse_clock_time(body.get("clock_in")),
                clock_out=parse_clock_time(body.get("clock_out")),
                status=_parse_status(body.get("status")),
                remarks=body.get("remarks"),
            )
        else:
            record = svc.clock_out(
                attendance_id,
                acting_user_id=current_user_id(),
                is_admin=is_admin(),
                clock_out=parse_clock_time(body.get("clock_out")),
                remarks=body.get("remarks"),
            )
        return jsonify(record_to_json(record))

    @app.route("/api/attendance/my", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        limit = request.args.get("limit", type=int)
        return jsonify([record_to_json(r) for r in svc.list_for_employee(current_user_id(), limit=limit)])

    @app.route("/api/attendance/all", methods=["GET"], endpoint="all_attendance")
    @admin_required
    def all_attendance():
        day = request.args.get("date")
        records = svc.list_all(
            work_date=parse_iso_date(day) if day else None,
            limit=request.args.get("limit", type=int),
        )
        return jsonify([record_to_json(r) for r in records])

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="employee_attendance")
    @admin_required
    def employee_attendance(employee_id: int):
        limit = request.args.get("limit", type=int)
        return jsonify([record_to_json(r) for r in svc.list_for_employee(employee_id, limit=limit)])

    @app.route("/api/attendance/employee/<int:employee_id>/range", methods=["GET"], endpoint="attendance_range")
    @admin_required
    def attendance_range(employee_id: int):
        start = parse_iso_date(request.args.get("start_date", ""))
        end = parse_iso_date(request.args.get("end_date", ""))
        return jsonify([record_to_json(r) for r in svc.list_for_employee_between(employee_id, start, end)])

    @app.route("/api/attendance/admin/overview", methods=["GET"], endpoint="attendance_overview")
    @admin_required
    def attendance_overview():
        return jsonify(container.overview_service.get_attendance_overview().as_dict())

    @app.route("/api/attendance/admin/close-day", methods=["POST"], endpoint="close_day")
    @admin_required
    def close_day():
        created = container.absence_closer.run_daily_absence_closure()
        return jsonify({"absent_records_created": created})

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @admin_required
    def delete_attendance(attendance_id: int):
        if not svc.delete_record(attendance_id):
            return jsonify({"error": f"Attendance record not found with ID: {attendance_id}"}), 404
        return "", 204
