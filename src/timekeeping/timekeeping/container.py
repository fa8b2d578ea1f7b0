from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .attendance.factory import AttendanceStrategyFactory
from .attendance.geolocation import GeolocationProvider
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import AttendanceService
from .clock.company_clock import CompanyClock
from .common.http_client import ApiClient
from .core.constants import DEFAULT_CLOCK_INTERVAL, DEFAULT_GEOLOCATION_TIMEOUT, DEFAULT_HTTP_TIMEOUT
from .hr_system import HRSystem
from .leave.http_leave_repository import HttpLeaveRepository
from .leave.service import LeaveService
from .roster.http_roster_repository import HttpRosterRepository
from .roster.service import RosterService
from .storage.local_store import LocalStore, MemoryStore
from .storage.offline_cache import OfflineCache
from .storage.session_store import SessionStore
from .sync.coordinator import SyncCoordinator
from .system.http_system_repository import HttpSystemRepository
from .users.http_user_repository import HttpUserRepository


@dataclass(frozen=True)
class Container:
    client: ApiClient
    sessions: SessionStore
    cache: OfflineCache

    users_repo: HttpUserRepository
    attendance_repo: HttpAttendanceRepository
    leave_repo: HttpLeaveRepository
    system_repo: HttpSystemRepository
    roster_repo: HttpRosterRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    coordinator: SyncCoordinator
    clock: CompanyClock
    hr_system: HRSystem


def build_container(
    *,
    api_base_url: str,
    http_timeout: float = DEFAULT_HTTP_TIMEOUT,
    cache_dir: Optional[str] = None,
    geolocation_timeout: float = DEFAULT_GEOLOCATION_TIMEOUT,
    clock_interval: float = DEFAULT_CLOCK_INTERVAL,
    http_session: Optional[requests.Session] = None,
    geolocation: Optional[GeolocationProvider] = None,
) -> Container:
    store = LocalStore(cache_dir) if cache_dir else MemoryStore()
    sessions = SessionStore(store)
    cache = OfflineCache(store)

    # The 401 handler needs the coordinator, which needs the client.
    holder: dict = {}

    def on_session_expired() -> None:
        coordinator = holder.get("coordinator")
        if coordinator is not None:
            coordinator.set_current_user(None)
        else:
            sessions.clear()

    client = ApiClient(
        api_base_url,
        session=http_session,
        timeout=http_timeout,
        token_provider=sessions.token,
        on_session_expired=on_session_expired,
    )

    users_repo = HttpUserRepository(client)
    attendance_repo = HttpAttendanceRepository(client)
    leave_repo = HttpLeaveRepository(client)
    system_repo = HttpSystemRepository(client)
    roster_repo = HttpRosterRepository(client)

    attendance_service = AttendanceService(
        attendance_repo,
        roster_service=RosterService(),
        strategy_factory=AttendanceStrategyFactory(),
        geolocation=geolocation,
        geolocation_timeout=geolocation_timeout,
    )
    leave_service = LeaveService(leave_repo)

    coordinator = SyncCoordinator(
        users=users_repo,
        attendance=attendance_repo,
        leave=leave_repo,
        system=system_repo,
        roster=roster_repo,
        cache=cache,
        sessions=sessions,
        client=client,
        today_provider=lambda: clock.today(),
    )
    holder["coordinator"] = coordinator

    clock = CompanyClock(lambda: coordinator.state.config.timezone, interval=clock_interval)
    hr_system = HRSystem(
        coordinator=coordinator,
        attendance=attendance_service,
        leave=leave_service,
        clock=clock,
    )

    return Container(
        client=client,
        sessions=sessions,
        cache=cache,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        system_repo=system_repo,
        roster_repo=roster_repo,
        attendance_service=attendance_service,
        leave_service=leave_service,
        coordinator=coordinator,
        clock=clock,
        hr_system=hr_system,
    )
