from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import clean_date_str, parse_iso_date
from ..container import Container
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from .http_leave_repository import request_to_payload


def _enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(str(value).upper())
    except ValueError as e:
        raise ValidationError(f"Invalid {field_name}: {value}") from e


def _date(value, field_name: str):
    if value in (None, ""):
        return None
    cleaned = clean_date_str(value)
    if not cleaned:
        raise ValidationError(f"Invalid {field_name}: {value}")
    return parse_iso_date(cleaned)


def register(app: Flask, container: Container) -> None:
    hr = container.hr_system

    @app.route("/api/leaves", methods=["POST"], endpoint="api_leave_apply")
    def apply_leave():
        data = request.get_json(silent=True) or {}
        created = hr.apply_leave(
            leave_type=_enum(LeaveType, data.get("type") or LeaveType.CASUAL.value, "type"),
            start_date=_date(data.get("startDate"), "startDate"),
            end_date=_date(data.get("endDate"), "endDate"),
            reason=data.get("reason"),
        )
        if created is None:
            return jsonify({"error": "sync_failed"}), 503
        return jsonify(request_to_payload(created)), 201

    @app.route("/api/leaves/<request_id>/status", methods=["POST"], endpoint="api_leave_status")
    def update_status(request_id: str):
        data = request.get_json(silent=True) or {}
        status = _enum(LeaveStatus, data.get("status"), "status")
        processed_by = data.get("processedBy") or hr.current_user().id
        updated = hr.update_leave_status(request_id, status, processed_by=processed_by)
        if updated is None:
            return jsonify({"error": "not_found_or_sync_failed"}), 404
        return jsonify(request_to_payload(updated))
