from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import parse_time_on_date
from ..core.enums import ClockAction, ClockState


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one organization-local day.

    A day may hold several work sessions; each resume mutates this same record.
    `accumulated_time` covers closed sessions only (seconds).
    """

    id: str
    user_id: str
    work_date: Optional[date]
    check_in: Optional[time]
    last_clock_in: Optional[time] = None
    check_out: Optional[time] = None
    accumulated_time: int = 0
    break_time: int = 0
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    late_reason: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    @property
    def session_start(self) -> Optional[datetime]:
        return parse_time_on_date(self.work_date, self.last_clock_in or self.check_in)

    def belongs_to(self, user_id: object) -> bool:
        return str(self.user_id) == str(user_id)


@dataclass(frozen=True)
class ClockResult:
    action: ClockAction
    record: Optional[AttendanceRecord] = None

    @property
    def changed(self) -> bool:
        return self.action in {ClockAction.STARTED, ClockAction.RESUMED, ClockAction.CLOSED}


@dataclass(frozen=True)
class DailyTrack:
    """Read-model for the live "daily track" widget. Never persisted."""

    work_date: date
    state: ClockState
    seconds: int
    display: str
    open_record: Optional[AttendanceRecord] = None
