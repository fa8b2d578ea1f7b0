from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import (
    company_now,
    elapsed_seconds,
    format_seconds,
    parse_time_on_date,
    parse_time_str,
)
from ..common.validators import work_location
from ..core.constants import DEFAULT_GEOLOCATION_TIMEOUT, DEFAULT_HISTORY_LIMIT
from ..core.enums import ClockAction, ClockState, SchedulingMode
from ..core.exceptions import GeolocationError
from ..roster.model import RosterAssignment
from ..roster.service import RosterService
from ..system.model import SystemConfig
from ..users.model import User
from .factory import AttendanceStrategyFactory
from .geolocation import GeolocationProvider, capture_position
from .http_attendance_repository import new_record_id
from .model import AttendanceRecord, ClockResult, Coordinates, DailyTrack
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59)


def _wall_time(now: datetime) -> time:
    # 00:00:00 is the "unset" marker on the wire; never stamp it.
    t = now.time().replace(microsecond=0)
    return t if t != time(0, 0) else time(0, 0, 1)


def _sort_key(r: AttendanceRecord):
    return (r.work_date or date.min, r.last_clock_in or r.check_in or time.min)


def find_open_record(records: Iterable[AttendanceRecord], user_id: object) -> Optional[AttendanceRecord]:
    """The user's open record across all dates (latest one if the data holds several)."""
    open_records = [r for r in records if r.belongs_to(user_id) and r.is_open]
    return max(open_records, key=_sort_key) if open_records else None


def find_today_record(
    records: Iterable[AttendanceRecord], user_id: object, today: date
) -> Optional[AttendanceRecord]:
    for r in records:
        if r.belongs_to(user_id) and r.work_date == today:
            return r
    return None


def clock_state(records: Iterable[AttendanceRecord], user_id: object, today: date) -> ClockState:
    todays = [r for r in records if r.belongs_to(user_id) and r.work_date == today]
    if not todays:
        return ClockState.NOT_STARTED
    if any(r.is_open for r in todays):
        return ClockState.ACTIVE
    return ClockState.CLOSED_CAN_RESUME


def daily_seconds(records: Iterable[AttendanceRecord], user_id: object, today: date, now: datetime) -> int:
    """Closed-session time for today plus the live part of today's open session."""
    total = 0
    for r in records:
        if not r.belongs_to(user_id) or r.work_date != today:
            continue
        total += r.accumulated_time or 0
        if r.is_open:
            total += elapsed_seconds(r.session_start, now)
    return total


def daily_track(records: Sequence[AttendanceRecord], user_id: object, now: datetime) -> DailyTrack:
    today = now.date()
    seconds = daily_seconds(records, user_id, today, now)
    open_today = next(
        (r for r in records if r.belongs_to(user_id) and r.work_date == today and r.is_open), None
    )
    return DailyTrack(
        work_date=today,
        state=clock_state(records, user_id, today),
        seconds=seconds,
        display=format_seconds(seconds),
        open_record=open_today,
    )


def history(
    records: Iterable[AttendanceRecord], user_id: object, *, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[AttendanceRecord]:
    items = [r for r in records if r.belongs_to(user_id)]
    items.sort(key=lambda r: (r.work_date or date.min, r.check_in or time.min), reverse=True)
    return items[:limit]


class AttendanceService:
    """Clock-in/clock-out state machine over a full-collection remote store.

    Every command reads the latest collection, mutates one record in memory
    and pushes the whole list back. There is no concurrency token: two writers
    racing on replace_all means last writer wins.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        roster_service: RosterService | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        geolocation: GeolocationProvider | None = None,
        geolocation_timeout: float = DEFAULT_GEOLOCATION_TIMEOUT,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._attendance = attendance
        self._roster = roster_service or RosterService()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._geolocation = geolocation
        self._geolocation_timeout = float(geolocation_timeout)
        self._new_id = id_factory

    def effective_shift_start(
        self,
        *,
        user: User,
        work_date: date,
        config: SystemConfig,
        roster: Iterable[RosterAssignment] = (),
    ) -> Optional[time]:
        """Roster assignment (weekly-roster mode only), then the user's shift, then the company default."""
        if config.scheduling_mode == SchedulingMode.WEEKLY_ROSTER:
            rostered = self._roster.shift_start_for(roster, user_id=user.id, work_date=work_date)
            if rostered:
                return rostered
        return parse_time_str(user.shift_start) or parse_time_str(config.work_start_time)

    def grace_deadline(
        self,
        *,
        user: User,
        work_date: date,
        config: SystemConfig,
        roster: Iterable[RosterAssignment] = (),
    ) -> Optional[datetime]:
        start = self.effective_shift_start(user=user, work_date=work_date, config=config, roster=roster)
        if start is None:
            return None
        return self._factory.grace_deadline(
            today=work_date, shift_start=start, grace_minutes=config.grace_period_minutes
        )

    def requires_late_reason(
        self,
        *,
        user: User,
        config: SystemConfig,
        roster: Iterable[RosterAssignment] = (),
        records: Optional[Iterable[AttendanceRecord]] = None,
        now: datetime | None = None,
    ) -> bool:
        """Whether a clock-in right now must carry a late reason (UI pre-check)."""
        now = now or company_now(config.timezone)
        today = now.date()
        if records is None:
            records = self._attendance.fetch_all()
        resuming = find_today_record(records, user.id, today) is not None
        start = None if resuming else self.effective_shift_start(
            user=user, work_date=today, config=config, roster=roster
        )
        strategy = self._factory.for_checkin(
            now=now,
            today=today,
            shift_start=start,
            grace_minutes=config.grace_period_minutes,
            resuming=resuming,
        )
        return strategy.requires_reason

    def clock_in(
        self,
        *,
        user: User,
        config: SystemConfig,
        roster: Iterable[RosterAssignment] = (),
        location: Optional[str] = None,
        late_reason: Optional[str] = None,
        coordinates: Optional[Coordinates] = None,
        now: datetime | None = None,
    ) -> ClockResult:
        location = work_location(location)
        now = (now or company_now(config.timezone)).replace(microsecond=0)
        today = now.date()
        records = list(self._attendance.fetch_all())

        open_idx = self._index_of_open(records, user.id)
        if open_idx is not None and records[open_idx].work_date == today:
            return ClockResult(ClockAction.ALREADY_ACTIVE, records[open_idx])

        today_idx = self._index_of_today(records, user.id, today)
        resuming = today_idx is not None

        start = None if resuming else self.effective_shift_start(
            user=user, work_date=today, config=config, roster=roster
        )
        deadline = (
            self._factory.grace_deadline(today=today, shift_start=start, grace_minutes=config.grace_period_minutes)
            if start
            else None
        )
        strategy = self._factory.for_checkin(
            now=now,
            today=today,
            shift_start=start,
            grace_minutes=config.grace_period_minutes,
            resuming=resuming,
        )
        decision = strategy.decide_checkin(now=now, deadline=deadline, late_reason=late_reason)

        position = coordinates or self._capture_position()
        stamp = _wall_time(now)

        if open_idx is not None:
            records[open_idx] = self._close_stale(records[open_idx])

        if resuming:
            existing = records[today_idx]
            gap = elapsed_seconds(parse_time_on_date(existing.work_date, existing.check_out), now)
            updated = replace(
                existing,
                check_out=None,
                last_clock_in=stamp,
                break_time=(existing.break_time or 0) + gap,
                location=location or existing.location,
                latitude=position.latitude,
                longitude=position.longitude,
                late_reason=decision.late_reason or existing.late_reason,
            )
            records[today_idx] = updated
            action = ClockAction.RESUMED
        else:
            updated = AttendanceRecord(
                id=self._new_id(),
                user_id=str(user.id),
                work_date=today,
                check_in=stamp,
                last_clock_in=stamp,
                check_out=None,
                accumulated_time=0,
                break_time=0,
                location=location,
                latitude=position.latitude,
                longitude=position.longitude,
                late_reason=decision.late_reason,
            )
            records.insert(0, updated)
            action = ClockAction.STARTED

        self._attendance.replace_all(records)
        logger.info("Clock-in %s user=%s date=%s at %s", action.value, user.id, today, stamp)
        return ClockResult(action, updated)

    def clock_out(self, *, user: User, config: SystemConfig, now: datetime | None = None) -> ClockResult:
        now = (now or company_now(config.timezone)).replace(microsecond=0)
        records = list(self._attendance.fetch_all())

        # Any date: the organization day may have rolled over since check-in.
        idx = self._index_of_open(records, user.id)
        if idx is None:
            return ClockResult(ClockAction.NOTHING_OPEN)

        record = records[idx]
        diff = elapsed_seconds(record.session_start, now)
        updated = replace(
            record,
            check_out=_wall_time(now),
            accumulated_time=(record.accumulated_time or 0) + diff,
        )
        records[idx] = updated
        self._attendance.replace_all(records)
        logger.info("Clock-out user=%s date=%s session=%ss", user.id, record.work_date, diff)
        return ClockResult(ClockAction.CLOSED, updated)

    def _capture_position(self) -> Coordinates:
        if self._geolocation is None:
            raise GeolocationError("Location access is required for verified attendance")
        return capture_position(self._geolocation, timeout=self._geolocation_timeout)

    @staticmethod
    def _close_stale(record: AttendanceRecord) -> AttendanceRecord:
        """Close a session left open on an earlier day at the end of that day."""
        end = parse_time_on_date(record.work_date, END_OF_DAY)
        logger.warning("Closing stale session user=%s date=%s at end of day", record.user_id, record.work_date)
        return replace(
            record,
            check_out=END_OF_DAY,
            accumulated_time=(record.accumulated_time or 0) + elapsed_seconds(record.session_start, end),
        )

    @staticmethod
    def _index_of_open(records: Sequence[AttendanceRecord], user_id: object) -> Optional[int]:
        target = find_open_record(records, user_id)
        if target is None:
            return None
        return next(i for i, r in enumerate(records) if r is target)

    @staticmethod
    def _index_of_today(records: Sequence[AttendanceRecord], user_id: object, today: date) -> Optional[int]:
        for i, r in enumerate(records):
            if r.belongs_to(user_id) and r.work_date == today:
                return i
        return None
