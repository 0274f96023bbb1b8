from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.controller import login_required
from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response
from ..core.exceptions import DomainError


def register(app: Flask, container) -> None:
    @app.route("/api/reports/sync", methods=["POST"], endpoint="api_reports_sync")
    @login_required
    def api_reports_sync():
        data = request.get_json(silent=True) or {}
        class_ids = data.get("classIds")
        if class_ids is not None and (
            not isinstance(class_ids, list) or not all(isinstance(c, str) and c.strip() for c in class_ids)
        ):
            return jsonify({"success": False, "message": "classIds must be a list of class ids"}), 400
        try:
            summary = container.reconciliation_engine.run(class_ids)
        except DomainError as e:
            return error_response(e)
        body = summary.to_dict()
        body["message"] = f"Reports saved: {summary.succeeded} succeeded, {summary.failed} failed"
        return jsonify(body)

    @app.route("/api/reports/overview", methods=["GET"], endpoint="api_reports_overview")
    @login_required
    def api_reports_overview():
        today_arg = request.args.get("today")
        try:
            today = parse_iso_date(today_arg) if today_arg else None
        except ValueError:
            return jsonify({"success": False, "message": "today must be YYYY-MM-DD"}), 400

        try:
            overview = container.report_reader.overview(today=today, class_id=request.args.get("classId"))
        except DomainError as e:
            return error_response(e)
        return jsonify(overview.to_dict())
