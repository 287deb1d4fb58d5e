from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.web import handle_errors, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @handle_errors("Failed to fetch students")
    def list_students():
        rows = students.list_students(
            class_name=request.args.get("className"),
            section=request.args.get("section"),
        )
        return jsonify([s.to_dict() for s in rows])

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="get_student")
    @handle_errors("Failed to fetch student")
    def get_student(student_id: str):
        return jsonify(students.get_student(student_id).to_dict())

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @login_required
    @handle_errors("Failed to create student")
    def create_student():
        student = students.create_student(json_body())
        return jsonify(student.to_dict()), 201

    @app.route("/api/students/<student_id>", methods=["PUT", "PATCH"], endpoint="update_student")
    @login_required
    @handle_errors("Failed to update student")
    def update_student(student_id: str):
        return jsonify(students.update_student(student_id, json_body()).to_dict())

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @login_required
    @handle_errors("Failed to delete student")
    def delete_student(student_id: str):
        students.delete_student(student_id)
        return jsonify({"success": True, "message": "Student deleted successfully"})

    @app.route("/api/students/bulk-upload", methods=["POST"], endpoint="bulk_upload_students")
    @login_required
    @handle_errors("Failed to process file")
    def bulk_upload_students():
        file = request.files.get("file")
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")

        created = students.import_spreadsheet(file.stream, file.filename)
        return jsonify(
            {
                "message": f"Successfully imported {len(created)} students",
                "students": [s.to_dict() for s in created],
            }
        )

    @app.route("/api/students/<student_id>/qr", methods=["GET"], endpoint="student_qr_image")
    @handle_errors("Failed to generate QR code")
    def student_qr_image(student_id: str):
        png = students.qr_png(student_id)
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"student-{student_id}-qr.png")
