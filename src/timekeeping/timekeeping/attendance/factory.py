from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.resume_strategy import ResumeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    @staticmethod
    def grace_deadline(*, today: date, shift_start: time, grace_minutes: int) -> datetime:
        return datetime.combine(today, shift_start) + timedelta(minutes=max(0, int(grace_minutes)))

    def for_checkin(
        self,
        *,
        now: datetime,
        today: date,
        shift_start: Optional[time],
        grace_minutes: int,
        resuming: bool = False,
    ) -> AttendanceStrategy:
        if resuming:
            return ResumeStrategy()
        if not shift_start:
            return OnTimeStrategy()

        deadline = self.grace_deadline(today=today, shift_start=shift_start, grace_minutes=grace_minutes)
        if now <= deadline:
            return OnTimeStrategy()
        return LateStrategy()
