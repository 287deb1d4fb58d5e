from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date, today_local
from ..common.web import current_user_id, handle_errors, json_body, login_required
from ..container import Container
from ..core.enums import MarkingMethod


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    stats = container.stats_service

    def _query_date():
        value = request.args.get("date")
        return parse_iso_date(value) if value else today_local()

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @handle_errors("Failed to fetch attendance")
    def list_attendance():
        records = attendance.list_for_date(_query_date(), class_name=request.args.get("className"))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @handle_errors("Failed to fetch attendance stats")
    def attendance_stats():
        result = stats.daily_stats(
            _query_date(),
            class_name=request.args.get("className"),
            section=request.args.get("section"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="student_attendance")
    @handle_errors("Failed to fetch student attendance")
    def student_attendance(student_id: str):
        result = stats.student_attendance(
            student_id,
            date_from=parse_optional_date(request.args.get("from")),
            date_to=parse_optional_date(request.args.get("to")),
        )
        return jsonify({"history": [r.to_dict() for r in result.history], "percentage": result.percentage})

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    @handle_errors("Failed to mark attendance")
    def mark_attendance():
        result = attendance.mark(MarkingMethod.MANUAL, json_body(), marked_by=current_user_id())
        return jsonify(result.record.to_dict()), 201

    @app.route("/api/attendance/<attendance_id>", methods=["PATCH"], endpoint="update_attendance")
    @login_required
    @handle_errors("Failed to update attendance")
    def update_attendance(attendance_id: str):
        return jsonify(attendance.update_attendance(attendance_id, json_body()).to_dict())

    @app.route("/api/attendance/qr", methods=["POST"], endpoint="mark_attendance_qr")
    @login_required
    @handle_errors("Invalid QR code or failed to mark attendance")
    def mark_attendance_qr():
        result = attendance.mark(MarkingMethod.QR, json_body(), marked_by=current_user_id())
        return jsonify({"success": True, "message": "Attendance marked successfully", **result.to_dict()})

    @app.route("/api/attendance/face", methods=["POST"], endpoint="mark_attendance_face")
    @login_required
    @handle_errors("Face recognition failed")
    def mark_attendance_face():
        result = attendance.mark(MarkingMethod.FACE, json_body(), marked_by=current_user_id())
        return jsonify({"success": True, "message": "Attendance marked via face recognition", **result.to_dict()})
