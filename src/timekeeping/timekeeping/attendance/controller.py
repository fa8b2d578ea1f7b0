from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_seconds
from ..common.validators import optional_float, optional_text
from ..container import Container
from ..core.enums import ClockAction
from .http_attendance_repository import record_to_payload
from .model import ClockResult, Coordinates


def _result_json(result: ClockResult):
    body = {
        "action": result.action.value,
        "record": record_to_payload(result.record) if result.record else None,
    }
    # Write never reached the server; the UI keeps its last good state.
    status = 503 if result.action == ClockAction.SKIPPED else 200
    return jsonify(body), status


def _coordinates(data: dict):
    lat = optional_float(data.get("latitude"))
    lng = optional_float(data.get("longitude"))
    if lat is None or lng is None:
        return None
    return Coordinates(latitude=lat, longitude=lng)


def register(app: Flask, container: Container) -> None:
    hr = container.hr_system

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    def clock_in():
        data = request.get_json(silent=True) or {}
        result = hr.check_in(
            location=optional_text(data.get("location")),
            late_reason=optional_text(data.get("lateReason")),
            coordinates=_coordinates(data),
        )
        return _result_json(result)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    def clock_out():
        return _result_json(hr.check_out())

    @app.route("/api/attendance/late-check", methods=["GET"], endpoint="api_late_check")
    def late_check():
        return jsonify({"lateReasonRequired": hr.requires_late_reason()})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    def today():
        track = hr.daily_track()
        return jsonify(
            {
                "date": track.work_date.isoformat(),
                "state": track.state.value,
                "seconds": track.seconds,
                "display": track.display,
                "openRecord": record_to_payload(track.open_record) if track.open_record else None,
            }
        )

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    def history():
        limit = request.args.get("limit", default=30, type=int)
        records = hr.history(limit=max(1, limit))
        return jsonify(
            [
                {**record_to_payload(r), "workedDisplay": format_seconds(r.accumulated_time)}
                for r in records
            ]
        )
