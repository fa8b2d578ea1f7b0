from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CheckinDecision:
    is_late: bool
    late_reason: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a clock-in is classified."""

    requires_reason = False

    @abstractmethod
    def decide_checkin(
        self, *, now: datetime, deadline: Optional[datetime], late_reason: Optional[str]
    ) -> CheckinDecision:
        raise NotImplementedError
