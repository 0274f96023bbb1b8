from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.controller import current_user, login_required
from ..common.http import error_response
from ..core.exceptions import DomainError
from ..reports.stats import summarize_events
from .model import Location


def register(app: Flask, container) -> None:
    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    @login_required
    def api_scan():
        """Scanned QR text in; confirmed (201) or queued for sync (202)."""
        data = request.get_json(silent=True) or {}
        text = str(data.get("data") or data.get("qr_code") or "")
        if not text.strip():
            return jsonify({"success": False, "message": "QR code cannot be empty"}), 400

        try:
            result = container.scan_service.record_scan(
                text,
                current_user(),
                location=Location.from_mapping(data.get("location")),
            )
        except DomainError as e:
            return error_response(e)

        body = {"success": True, **result.to_dict()}
        if result.pending_sync:
            body["message"] = (
                "Cannot connect to attendance server. Your attendance was saved locally "
                "but is not synchronized yet."
            )
            return jsonify(body), 202
        body["message"] = "Attendance recorded"
        return jsonify(body), 201

    @app.route("/api/records", methods=["GET"], endpoint="api_records")
    @login_required
    def api_records():
        return jsonify([e.to_dict() for e in container.outbox.entries()])

    @app.route("/api/records", methods=["DELETE"], endpoint="api_records_clear")
    @login_required
    def api_records_clear():
        container.outbox.clear()
        return jsonify({"success": True})

    @app.route("/api/records/stats", methods=["GET"], endpoint="api_records_stats")
    @login_required
    def api_records_stats():
        user = current_user()
        try:
            events = container.attendance_repo.list_for_student(user.user_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(summarize_events(events).to_dict())
