from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import clean_date_str, format_time, parse_iso_date, parse_time_str
from ..common.http_client import ApiClient
from ..common.validators import optional_float, optional_text
from ..core.constants import CHECK_IN_PLACEHOLDER
from .model import AttendanceRecord
from .repository import AttendanceRepository


def new_record_id() -> str:
    return uuid.uuid4().hex[:9]


def _as_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def record_from_payload(raw: Mapping[str, Any]) -> AttendanceRecord:
    """Read boundary: every stored "no value" sentinel becomes None here and nowhere else."""
    check_in = parse_time_str(raw.get("checkIn"))
    work_date = clean_date_str(raw.get("date"))
    return AttendanceRecord(
        id=str(raw.get("id") or new_record_id()),
        user_id=str(raw.get("userId", "")),
        work_date=parse_iso_date(work_date) if work_date else None,
        check_in=check_in,
        last_clock_in=parse_time_str(raw.get("lastClockIn")) or check_in,
        check_out=parse_time_str(raw.get("checkOut")),
        accumulated_time=_as_int(raw.get("accumulatedTime")),
        break_time=_as_int(raw.get("breakTime")),
        location=optional_text(raw.get("location")),
        latitude=optional_float(raw.get("latitude")),
        longitude=optional_float(raw.get("longitude")),
        late_reason=optional_text(raw.get("lateReason") or raw.get("late_reason")),
    )


def record_to_payload(rec: AttendanceRecord) -> dict:
    check_in = format_time(rec.check_in) or CHECK_IN_PLACEHOLDER
    return {
        "id": rec.id,
        "userId": rec.user_id,
        "date": rec.work_date.isoformat() if rec.work_date else None,
        "checkIn": check_in,
        "checkOut": format_time(rec.check_out),
        "accumulatedTime": int(rec.accumulated_time or 0),
        "breakTime": int(rec.break_time or 0),
        "location": rec.location,
        "latitude": rec.latitude,
        "longitude": rec.longitude,
        "lastClockIn": format_time(rec.last_clock_in) or check_in,
        "lateReason": rec.late_reason,
    }


def records_from_payload(data: Optional[Sequence[Mapping[str, Any]]]) -> list[AttendanceRecord]:
    if not isinstance(data, list):
        return []
    return [record_from_payload(r) for r in data if isinstance(r, Mapping)]


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def fetch_all(self) -> Sequence[AttendanceRecord]:
        data = self._client.get_json("/attendance", context="getAttendance", strict=True)
        return records_from_payload(data)

    def replace_all(self, records: Sequence[AttendanceRecord]) -> None:
        payload = {"attendance": [record_to_payload(r) for r in records]}
        self._client.post_json("/attendance/bulk", payload, context="saveAttendance")
