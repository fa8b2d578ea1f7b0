from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    user_id: str
    user_name: str
    type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    applied_date: date
    processed_by: Optional[str] = None
    processed_date: Optional[date] = None

    @property
    def days(self) -> int:
        """Inclusive calendar-day count."""
        return abs((self.end_date - self.start_date).days) + 1


@dataclass(frozen=True)
class LeaveBalance:
    user_id: str
    type: LeaveType
    total: float
    used: float = 0
