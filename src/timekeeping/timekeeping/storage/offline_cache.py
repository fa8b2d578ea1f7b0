from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..attendance.http_attendance_repository import record_to_payload, records_from_payload
from ..common.datetime_utils import now_utc
from ..core.constants import CACHE_KEY
from ..leave.http_leave_repository import (
    balance_to_payload,
    balances_from_payload,
    request_to_payload,
    requests_from_payload,
)
from ..roster.http_roster_repository import assignment_to_payload, assignments_from_payload
from ..sync.state import AppState
from ..system.http_system_repository import (
    config_from_payload,
    config_to_payload,
    holiday_to_payload,
    holidays_from_payload,
)
from ..system.model import DEFAULT_CONFIG
from ..users.http_user_repository import user_to_payload, users_from_payload
from .local_store import LocalStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedSnapshot:
    state: AppState
    timestamp: Optional[datetime]


class OfflineCache:
    """Last-known-good snapshot of every collection in one local slot.

    Stored in the same wire shape the HR API serves, so a cache written by one
    version reads back through the normal payload codecs.
    """

    def __init__(self, store: LocalStore, *, key: str = CACHE_KEY):
        self._store = store
        self._key = key

    def save(self, state: AppState, *, timestamp: Optional[datetime] = None) -> None:
        stamp = timestamp or now_utc()
        self._store.set(
            self._key,
            {
                "employees": [user_to_payload(u) for u in state.employees],
                "attendances": [record_to_payload(r) for r in state.attendances],
                "leaveRequests": [request_to_payload(r) for r in state.leave_requests],
                "leaveBalances": [balance_to_payload(b) for b in state.leave_balances],
                "holidays": [holiday_to_payload(h) for h in state.holidays],
                "rosters": [assignment_to_payload(a) for a in state.roster],
                "systemConfig": config_to_payload(state.config),
                "timestamp": stamp.isoformat(),
            },
        )

    def load(self) -> Optional[CachedSnapshot]:
        raw = self._store.get(self._key)
        if not isinstance(raw, Mapping):
            return None
        state = AppState(
            employees=tuple(users_from_payload(raw.get("employees"))),
            attendances=tuple(records_from_payload(raw.get("attendances"))),
            leave_requests=tuple(requests_from_payload(raw.get("leaveRequests"))),
            leave_balances=tuple(balances_from_payload(raw.get("leaveBalances"))),
            holidays=tuple(h for h in holidays_from_payload(raw.get("holidays")) if not h.frozen),
            roster=tuple(assignments_from_payload(raw.get("rosters"))),
            config=config_from_payload(raw.get("systemConfig")) or DEFAULT_CONFIG,
        )
        return CachedSnapshot(state=state, timestamp=_parse_timestamp(raw.get("timestamp")))

    def clear(self) -> None:
        self._store.remove(self._key)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        logger.warning("Offline cache has an unreadable timestamp: %r", value)
        return None
