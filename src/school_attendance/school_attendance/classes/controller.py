from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, handle_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @handle_errors("Failed to fetch classes")
    def list_classes():
        teacher_id = request.args.get("teacherId")
        if teacher_id:
            classes = container.class_service.list_for_teacher(teacher_id)
        else:
            classes = container.class_service.list_classes()
        return jsonify([c.to_dict() for c in classes])

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @admin_required
    @handle_errors("Failed to create class")
    def create_class():
        school_class = container.class_service.create_class(current_role=current_role(), data=json_body())
        return jsonify(school_class.to_dict()), 201
