from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..auth.controller import login_required
from .codec import build_payload, render_qr_png


def register(app: Flask, container) -> None:
    @app.route("/api/classes/<class_id>/qr", methods=["GET"], endpoint="api_class_qr")
    @login_required
    def api_class_qr(class_id: str):
        subject_code = (request.args.get("subjectCode") or "").strip()
        if not subject_code:
            return jsonify({"success": False, "message": "subjectCode is required"}), 400

        text = build_payload(
            class_id=class_id,
            subject_code=subject_code,
            year_section=(request.args.get("yearSection") or "").strip(),
            secure_key=container.secure_key,
        )
        if request.args.get("format") == "json":
            return Response(text, mimetype="application/json")
        return Response(render_qr_png(text), mimetype="image/png")
