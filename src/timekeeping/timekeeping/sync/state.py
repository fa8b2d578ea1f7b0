from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..leave.model import LeaveBalance, LeaveRequest
from ..roster.model import RosterAssignment
from ..system.model import DEFAULT_CONFIG, Holiday, SystemConfig
from ..users.model import User


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of every collection the app renders.

    Replaced wholesale by the sync coordinator; readers never see a
    half-applied reload.
    """

    employees: tuple[User, ...] = ()
    attendances: tuple[AttendanceRecord, ...] = ()
    leave_requests: tuple[LeaveRequest, ...] = ()
    leave_balances: tuple[LeaveBalance, ...] = ()
    holidays: tuple[Holiday, ...] = ()
    roster: tuple[RosterAssignment, ...] = ()
    config: SystemConfig = field(default=DEFAULT_CONFIG)
    current_user: Optional[User] = None
    is_offline: bool = False
    is_syncing: bool = False
    is_loading: bool = True
    last_synced_at: Optional[datetime] = None

    def employee(self, user_id: object) -> Optional[User]:
        for u in self.employees:
            if str(u.id) == str(user_id):
                return u
        return None
