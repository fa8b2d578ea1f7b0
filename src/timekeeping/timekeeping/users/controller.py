from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_text, require_non_empty
from ..container import Container
from .http_user_repository import user_to_payload


def register(app: Flask, container: Container) -> None:
    hr = container.hr_system

    @app.route("/api/session", methods=["POST"], endpoint="api_session_start")
    def start_session():
        data = request.get_json(silent=True) or {}
        user_id = require_non_empty(str(data.get("userId") or ""), "userId")
        user = hr.start_session(user_id, token=optional_text(data.get("token")))
        return jsonify({"user": user_to_payload(user)}), 201

    @app.route("/api/session", methods=["GET"], endpoint="api_session_current")
    def current_session():
        return jsonify({"user": user_to_payload(hr.current_user())})

    @app.route("/api/session", methods=["DELETE"], endpoint="api_session_end")
    def end_session():
        hr.logout()
        return "", 204
