from __future__ import annotations

from datetime import datetime
from typing import Optional

from .base import AttendanceStrategy, CheckinDecision


class OnTimeStrategy(AttendanceStrategy):
    """First clock-in of the day within the grace period."""

    def decide_checkin(
        self, *, now: datetime, deadline: Optional[datetime], late_reason: Optional[str]
    ) -> CheckinDecision:
        return CheckinDecision(is_late=False)
