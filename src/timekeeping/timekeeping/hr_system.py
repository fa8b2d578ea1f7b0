from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, TypeVar

from .attendance.model import AttendanceRecord, ClockResult, Coordinates, DailyTrack
from .attendance.service import AttendanceService, daily_track, history
from .clock.company_clock import CompanyClock
from .core.constants import DEFAULT_HISTORY_LIMIT
from .core.enums import ClockAction, LeaveStatus, LeaveType
from .core.exceptions import AuthenticationError, TransportError
from .leave.model import LeaveRequest
from .leave.service import LeaveService
from .sync.coordinator import SyncCoordinator
from .sync.state import AppState
from .users.model import SessionInfo, User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HRSystem:
    """Command facade over the sync coordinator and the domain services.

    Every write runs as: mark syncing, remote read-modify-write, forced
    reload. Transport failures are logged and the last good snapshot stays in
    place; validation and geolocation errors go back to the caller.
    """

    def __init__(
        self,
        *,
        coordinator: SyncCoordinator,
        attendance: AttendanceService,
        leave: LeaveService,
        clock: CompanyClock,
    ):
        self._sync = coordinator
        self._attendance = attendance
        self._leave = leave
        self._clock = clock

    @property
    def state(self) -> AppState:
        return self._sync.state

    def reload(self, force: bool = False) -> bool:
        return self._sync.reload(force=force)

    def current_user(self) -> User:
        user = self._sync.state.current_user
        if user is None:
            raise AuthenticationError("No active session")
        return user

    def _run(self, label: str, command: Callable[[], T], fallback: T) -> T:
        with self._sync.syncing():
            try:
                result = command()
            except TransportError as e:
                logger.error("%s failed: %s", label, e)
                result = fallback
            self._sync.reload(force=True)
        return result

    # Attendance

    def requires_late_reason(self) -> bool:
        state = self._sync.state
        return self._attendance.requires_late_reason(
            user=self.current_user(),
            config=state.config,
            roster=state.roster,
            records=state.attendances,
            now=self._clock.now(),
        )

    def check_in(
        self,
        *,
        location: Optional[str] = None,
        late_reason: Optional[str] = None,
        coordinates: Optional[Coordinates] = None,
    ) -> ClockResult:
        user = self.current_user()
        state = self._sync.state
        return self._run(
            "Check-in",
            lambda: self._attendance.clock_in(
                user=user,
                config=state.config,
                roster=state.roster,
                location=location,
                late_reason=late_reason,
                coordinates=coordinates,
                now=self._clock.now(),
            ),
            ClockResult(ClockAction.SKIPPED),
        )

    def check_out(self) -> ClockResult:
        user = self.current_user()
        state = self._sync.state
        return self._run(
            "Check-out",
            lambda: self._attendance.clock_out(user=user, config=state.config, now=self._clock.now()),
            ClockResult(ClockAction.SKIPPED),
        )

    def daily_track(self) -> DailyTrack:
        return daily_track(self._sync.state.attendances, self.current_user().id, self._clock.now())

    def history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AttendanceRecord]:
        return history(self._sync.state.attendances, self.current_user().id, limit=limit)

    # Leave

    def apply_leave(
        self,
        *,
        leave_type: LeaveType = LeaveType.CASUAL,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        user = self.current_user()
        return self._run(
            "Apply leave",
            lambda: self._leave.apply_leave(
                user=user,
                today=self._clock.today(),
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
            ),
            None,
        )

    def update_leave_status(
        self, request_id: str, status: LeaveStatus, processed_by: Optional[str] = None
    ) -> Optional[LeaveRequest]:
        state = self._sync.state
        return self._run(
            "Update leave status",
            lambda: self._leave.update_leave_status(
                request_id,
                status,
                today=self._clock.today(),
                processed_by=processed_by,
                users=state.employees,
                config=state.config,
            ),
            None,
        )

    # Session

    def start_session(self, user_id: str, token: Optional[str] = None) -> User:
        """Bind the session to a known employee. Credentials are verified by the HR API, not here."""
        user = self._sync.state.employee(user_id)
        if user is None:
            raise AuthenticationError(f"Unknown user: {user_id}")
        self._sync.set_current_user(SessionInfo(user=user, token=token))
        logger.info("Session started for user=%s", user.id)
        self._sync.reload(force=True)
        return self._sync.state.current_user or user

    def logout(self) -> None:
        self._sync.set_current_user(None)
        logger.info("Session cleared")
