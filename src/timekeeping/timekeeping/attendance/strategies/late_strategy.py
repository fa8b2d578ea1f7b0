from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.validators import optional_text
from ...core.exceptions import LateReasonRequiredError
from .base import AttendanceStrategy, CheckinDecision


class LateStrategy(AttendanceStrategy):
    """First clock-in after the grace deadline: a reason is mandatory."""

    requires_reason = True

    def decide_checkin(
        self, *, now: datetime, deadline: Optional[datetime], late_reason: Optional[str]
    ) -> CheckinDecision:
        reason = optional_text(late_reason)
        if not reason:
            raise LateReasonRequiredError(deadline or now)
        return CheckinDecision(is_late=True, late_reason=reason)
