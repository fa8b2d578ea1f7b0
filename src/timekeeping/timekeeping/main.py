from __future__ import annotations

import importlib
import logging
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .attendance.geolocation import GeolocationProvider
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    DomainError,
    GeolocationError,
    LateReasonRequiredError,
    TransportError,
    ValidationError,
)
from .leave.controller import register as register_leaves
from .sync.controller import register as register_sync
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(LateReasonRequiredError)
    def late_reason_required(e: LateReasonRequiredError):
        return jsonify({"error": "late_reason_required", "message": str(e), "deadline": e.deadline.isoformat()}), 409

    @app.errorhandler(ValidationError)
    def validation_error(e: ValidationError):
        return jsonify({"error": "validation_error", "message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def authentication_error(e: AuthenticationError):
        return jsonify({"error": "unauthenticated", "message": str(e)}), 401

    @app.errorhandler(GeolocationError)
    def geolocation_error(e: GeolocationError):
        return jsonify({"error": "location_required", "message": str(e)}), 422

    @app.errorhandler(TransportError)
    def transport_error(e: TransportError):
        logger.warning("Transport error reached the HTTP layer: %s", e)
        return jsonify({"error": "server_unavailable", "message": str(e)}), 503

    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        return jsonify({"error": "domain_error", "message": str(e)}), 400


def create_app(
    *,
    http_session: Optional[requests.Session] = None,
    geolocation: Optional[GeolocationProvider] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if app.config["DEBUG"]:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    api_base_url = getattr(settings, "API_BASE_URL")
    logger.info("settings=%s api=%s", settings_module, api_base_url)

    container = build_container(
        api_base_url=api_base_url,
        http_timeout=float(getattr(settings, "HTTP_TIMEOUT", 15)),
        cache_dir=getattr(settings, "CACHE_DIR", None),
        geolocation_timeout=float(getattr(settings, "GEOLOCATION_TIMEOUT", 8)),
        clock_interval=float(getattr(settings, "CLOCK_INTERVAL", 1)),
        http_session=http_session,
        geolocation=geolocation,
    )
    app.extensions["timekeeping"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_sync(app, container)
    register_leaves(app, container)

    if getattr(settings, "SYNC_ON_STARTUP", False):
        container.coordinator.reload()
    if getattr(settings, "START_CLOCK", False):
        container.clock.start()

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["timekeeping"]
