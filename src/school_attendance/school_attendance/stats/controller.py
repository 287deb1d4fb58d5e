from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import today_local
from ..common.web import handle_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @handle_errors("Failed to fetch dashboard stats")
    def dashboard_stats():
        return jsonify(container.stats_service.dashboard(today_local()))

    @app.route("/api/parent-portal", methods=["POST"], endpoint="parent_portal")
    @handle_errors("Invalid admission number")
    def parent_portal():
        data = json_body()
        return jsonify(container.stats_service.parent_summary(data.get("admissionNo"), today=today_local()))
