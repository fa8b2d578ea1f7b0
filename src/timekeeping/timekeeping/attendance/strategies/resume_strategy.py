from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.validators import optional_text
from .base import AttendanceStrategy, CheckinDecision


class ResumeStrategy(AttendanceStrategy):
    """Clock-in after a break. Never late; a reason, if given, replaces the stored one."""

    def decide_checkin(
        self, *, now: datetime, deadline: Optional[datetime], late_reason: Optional[str]
    ) -> CheckinDecision:
        return CheckinDecision(is_late=False, late_reason=optional_text(late_reason))
