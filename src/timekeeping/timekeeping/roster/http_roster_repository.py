from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.datetime_utils import clean_date_str, parse_iso_date
from ..common.http_client import ApiClient
from .model import RosterAssignment
from .repository import RosterRepository


def assignment_from_payload(raw: Mapping[str, Any]) -> RosterAssignment | None:
    work_date = clean_date_str(raw.get("date"))
    if not work_date or raw.get("userId") is None or not raw.get("shiftId"):
        return None
    return RosterAssignment(
        id=str(raw.get("id") or f"{raw.get('userId')}_{work_date}"),
        user_id=str(raw["userId"]),
        work_date=parse_iso_date(work_date),
        shift_id=str(raw["shiftId"]),
    )


def assignment_to_payload(a: RosterAssignment) -> dict:
    return {"id": a.id, "userId": a.user_id, "date": a.work_date.isoformat(), "shiftId": a.shift_id}


def assignments_from_payload(data: Any) -> list[RosterAssignment]:
    if not isinstance(data, list):
        return []
    parsed = (assignment_from_payload(r) for r in data if isinstance(r, Mapping))
    return [a for a in parsed if a is not None]


class HttpRosterRepository(RosterRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def fetch_all(self) -> Sequence[RosterAssignment]:
        return assignments_from_payload(self._client.get_json("/rosters", context="getRosters"))

    def replace_all(self, assignments: Sequence[RosterAssignment]) -> None:
        payload = {"rosters": [assignment_to_payload(a) for a in assignments]}
        self._client.post_json("/rosters/bulk", payload, context="saveRosters")
