from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.web import current_user_id, handle_errors, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/reports/generate", methods=["POST"], endpoint="generate_report")
    @login_required
    @handle_errors("Failed to generate report")
    def generate_report():
        report, exported = reports.generate(json_body(), created_by=current_user_id())
        if exported is None:
            return jsonify([row.to_dict() for row in report.rows])

        return send_file(
            io.BytesIO(exported.content),
            mimetype=exported.mimetype,
            as_attachment=True,
            download_name=exported.filename,
        )

    @app.route("/api/reports", methods=["GET"], endpoint="list_reports")
    @login_required
    @handle_errors("Failed to fetch reports")
    def list_reports():
        mine = request.args.get("mine") in {"1", "true", "yes"}
        saved = reports.list_saved(created_by=current_user_id() if mine else None)
        return jsonify([r.to_dict() for r in saved])
