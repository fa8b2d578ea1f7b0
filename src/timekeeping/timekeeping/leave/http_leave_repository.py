from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import clean_date_str, parse_iso_date
from ..common.http_client import ApiClient
from ..common.validators import optional_float, optional_text
from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository


def _date(value: Any):
    cleaned = clean_date_str(value)
    return parse_iso_date(cleaned) if cleaned else None


def request_from_payload(raw: Mapping[str, Any]) -> Optional[LeaveRequest]:
    start = _date(raw.get("startDate"))
    end = _date(raw.get("endDate")) or start
    if start is None:
        return None
    try:
        leave_type = LeaveType(str(raw.get("type", LeaveType.CASUAL.value)).upper())
    except ValueError:
        leave_type = LeaveType.CASUAL
    try:
        status = LeaveStatus(str(raw.get("status", LeaveStatus.PENDING.value)).upper())
    except ValueError:
        status = LeaveStatus.PENDING
    return LeaveRequest(
        id=str(raw.get("id", "")),
        user_id=str(raw.get("userId", "")),
        user_name=str(raw.get("userName") or ""),
        type=leave_type,
        start_date=start,
        end_date=end,
        reason=str(raw.get("reason") or ""),
        status=status,
        applied_date=_date(raw.get("appliedDate")) or start,
        processed_by=optional_text(raw.get("processedBy")),
        processed_date=_date(raw.get("processedDate")),
    )


def request_to_payload(r: LeaveRequest) -> dict:
    return {
        "id": r.id,
        "userId": r.user_id,
        "userName": r.user_name,
        "type": r.type.value,
        "startDate": r.start_date.isoformat(),
        "endDate": r.end_date.isoformat(),
        "reason": r.reason,
        "status": r.status.value,
        "appliedDate": r.applied_date.isoformat(),
        "processedBy": r.processed_by,
        "processedDate": r.processed_date.isoformat() if r.processed_date else None,
    }


def balance_from_payload(raw: Mapping[str, Any]) -> Optional[LeaveBalance]:
    try:
        leave_type = LeaveType(str(raw.get("type", "")).upper())
    except ValueError:
        return None
    return LeaveBalance(
        user_id=str(raw.get("userId", "")),
        type=leave_type,
        total=optional_float(raw.get("total")) or 0.0,
        used=optional_float(raw.get("used")) or 0.0,
    )


def balance_to_payload(b: LeaveBalance) -> dict:
    return {"userId": b.user_id, "type": b.type.value, "total": b.total, "used": b.used}


def requests_from_payload(data: Any) -> list[LeaveRequest]:
    if not isinstance(data, list):
        return []
    parsed = (request_from_payload(r) for r in data if isinstance(r, Mapping))
    return [r for r in parsed if r is not None]


def balances_from_payload(data: Any) -> list[LeaveBalance]:
    if not isinstance(data, list):
        return []
    parsed = (balance_from_payload(b) for b in data if isinstance(b, Mapping))
    return [b for b in parsed if b is not None]


class HttpLeaveRepository(LeaveRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def fetch_requests(self) -> Sequence[LeaveRequest]:
        return requests_from_payload(self._client.get_json("/leaves", context="getLeaves", strict=True))

    def replace_requests(self, requests: Sequence[LeaveRequest]) -> None:
        payload = {"leaves": [request_to_payload(r) for r in requests]}
        self._client.post_json("/leaves/bulk", payload, context="saveLeaves")

    def fetch_balances(self) -> Sequence[LeaveBalance]:
        return balances_from_payload(self._client.get_json("/leave-balances", context="getBalances", strict=True))

    def replace_balances(self, balances: Sequence[LeaveBalance]) -> None:
        payload = {"balances": [balance_to_payload(b) for b in balances]}
        self._client.post_json("/leave-balances/bulk", payload, context="saveBalances")
