from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from typing import Callable, Iterator, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import company_now, now_utc
from ..common.http_client import ApiClient
from ..core.exceptions import TransportError
from ..leave.repository import LeaveRepository
from ..leave.service import ensure_default_balances
from ..roster.repository import RosterRepository
from ..storage.offline_cache import OfflineCache
from ..storage.session_store import SessionStore
from ..system.model import DEFAULT_CONFIG
from ..system.repository import SystemRepository
from ..users.model import SessionInfo
from ..users.repository import UserRepository
from .seed import seed_state
from .state import AppState

logger = logging.getLogger(__name__)


class SyncCoordinator:
    """Owns the in-memory snapshot and keeps it in step with the HR API.

    A reload probes health, fetches every collection in parallel and swaps in
    a fresh AppState. Any failure flips to offline mode and hydrates from the
    local cache, or from the bundled seed data when nothing is cached.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        attendance: AttendanceRepository,
        leave: LeaveRepository,
        system: SystemRepository,
        roster: RosterRepository,
        cache: OfflineCache,
        sessions: SessionStore,
        client: Optional[ApiClient] = None,
        today_provider: Optional[Callable[[], date]] = None,
        max_workers: int = 7,
    ):
        self._users = users
        self._attendance = attendance
        self._leave = leave
        self._system = system
        self._roster = roster
        self._cache = cache
        self._sessions = sessions
        self._client = client
        self._today = today_provider or self._organization_today
        self._max_workers = max_workers

        self._reload_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._syncing_depth = 0
        self._state = AppState()

    @property
    def state(self) -> AppState:
        return self._state

    def _organization_today(self) -> date:
        return company_now(self._state.config.timezone).date()

    def _swap(self, **changes) -> AppState:
        with self._state_lock:
            self._state = replace(self._state, **changes)
            return self._state

    @contextmanager
    def syncing(self) -> Iterator[None]:
        with self._state_lock:
            self._syncing_depth += 1
            self._state = replace(self._state, is_syncing=True)
        try:
            yield
        finally:
            with self._state_lock:
                self._syncing_depth -= 1
                if self._syncing_depth == 0:
                    self._state = replace(self._state, is_syncing=False)

    def reload(self, force: bool = False) -> bool:
        """Refresh the snapshot. Returns False when skipped because a reload is in flight.

        A forced reload waits for the in-flight one and then runs, so it
        always observes writes made before it was requested.
        """
        if not self._reload_lock.acquire(blocking=force):
            logger.debug("Reload already in progress; skipping")
            return False
        try:
            with self.syncing():
                try:
                    fresh = self._fetch_remote()
                except Exception as e:
                    logger.warning("Sync failed, operating in local/cache mode: %s", e)
                    self._load_offline()
                else:
                    self._commit_online(fresh)
        finally:
            self._swap(is_loading=False)
            self._reload_lock.release()
        return True

    def set_current_user(self, session: Optional[SessionInfo]) -> None:
        if session is None:
            self._sessions.clear()
            self._swap(current_user=None)
            return
        self._sessions.save(session)
        self._swap(current_user=session.user)

    def _fetch_remote(self) -> AppState:
        if self._client is not None:
            self._client.reset_availability()
        if not self._system.check_health():
            raise TransportError("Server reporting offline status")

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="sync") as pool:
            f_users = pool.submit(self._users.fetch_all)
            f_attendance = pool.submit(self._attendance.fetch_all)
            f_leaves = pool.submit(self._leave.fetch_requests)
            f_balances = pool.submit(self._leave.fetch_balances)
            f_holidays = pool.submit(self._system.fetch_holidays)
            f_config = pool.submit(self._system.fetch_config)
            f_roster = pool.submit(self._roster.fetch_all)

            users = tuple(f_users.result())
            attendances = tuple(f_attendance.result())
            leaves = tuple(f_leaves.result())
            balances = f_balances.result()
            holidays = f_holidays.result()
            config = f_config.result() or DEFAULT_CONFIG
            roster = tuple(f_roster.result())

        # Soft-failed reads come back empty; don't let them masquerade as data.
        if self._client is not None and self._client.unavailable:
            raise TransportError("One or more collections could not be fetched")

        return AppState(
            employees=users,
            attendances=attendances,
            leave_requests=leaves,
            leave_balances=tuple(ensure_default_balances(users, balances, config)),
            holidays=tuple(h for h in holidays if not h.frozen),
            roster=roster,
            config=config,
        )

    def _commit_online(self, fresh: AppState) -> None:
        stamp = now_utc()
        current_user = self._restore_session(fresh, refresh=True)
        self._swap(
            employees=fresh.employees,
            attendances=fresh.attendances,
            leave_requests=fresh.leave_requests,
            leave_balances=fresh.leave_balances,
            holidays=fresh.holidays,
            roster=fresh.roster,
            config=fresh.config,
            current_user=current_user,
            is_offline=False,
            last_synced_at=stamp,
        )
        try:
            self._cache.save(fresh, timestamp=stamp)
        except OSError as e:
            logger.warning("Could not persist offline cache: %s", e)
        logger.info(
            "Synced %d employees, %d attendance records", len(fresh.employees), len(fresh.attendances)
        )

    def _load_offline(self) -> None:
        cached = self._cache.load()
        if cached is not None:
            source, stamp = cached.state, cached.timestamp
            logger.info("Hydrated from offline cache (captured %s)", stamp)
        else:
            source, stamp = seed_state(self._today()), None
            logger.info("No offline cache; loaded bundled seed data")

        self._swap(
            employees=source.employees,
            attendances=source.attendances,
            leave_requests=source.leave_requests,
            leave_balances=source.leave_balances,
            holidays=tuple(h for h in source.holidays if not h.frozen),
            roster=source.roster,
            config=source.config,
            current_user=self._restore_session(source, refresh=False),
            is_offline=True,
            last_synced_at=stamp,
        )

    def _restore_session(self, source: AppState, *, refresh: bool):
        session = self._sessions.load()
        if session is None:
            return self._state.current_user
        fresh_user = source.employee(session.user.id)
        if fresh_user is None:
            return self._state.current_user
        if refresh:
            self._sessions.save(SessionInfo(user=fresh_user, token=session.token))
        return fresh_user
