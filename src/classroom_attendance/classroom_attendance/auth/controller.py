from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from .model import CurrentUser


def current_user() -> Optional[CurrentUser]:
    data = session.get("user")
    if not isinstance(data, dict):
        return None
    return CurrentUser.from_mapping(data)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return jsonify({"success": False, "message": "Please log in to continue."}), 401
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container) -> None:
    @app.route("/api/session", methods=["PUT"], endpoint="session_open")
    def session_open():
        """Adopt a token issued by the login service for this device."""
        data = request.get_json(silent=True) or {}
        token = str(data.get("token") or "").strip()
        user = CurrentUser.from_mapping(data.get("user") or {})
        if not token or user is None:
            return jsonify({"success": False, "message": "token and user are required"}), 400

        container.credentials.set_token(token)
        container.api_client.attach_credentials()
        session["user"] = {"userId": user.user_id, "firstName": user.first_name, "lastName": user.last_name}
        return jsonify({"success": True})

    @app.route("/api/session", methods=["DELETE"], endpoint="session_close")
    def session_close():
        container.api_client.invalidate()
        session.clear()
        return jsonify({"success": True})
