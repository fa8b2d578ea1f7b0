from __future__ import annotations

import threading

import pytest

from timekeeping.container import build_container
from timekeeping.core.enums import LeaveType
from timekeeping.users.model import SessionInfo, User


def _seed_api(fake_api):
    fake_api.collections["/users"] = [
        {"id": "1", "name": "Sarah Chen", "email": "sarah.c@nexushr.com", "role": "ADMIN", "password": "x"},
        {"id": "3", "name": "Emily Davis-Ray", "email": "emily.d@nexushr.com", "shiftStart": "08:30"},
    ]
    fake_api.collections["/attendance"] = [
        {"id": "a1", "userId": "3", "date": "2024-06-10", "checkIn": "08:31:00", "checkOut": "17:00:00",
         "accumulatedTime": 30540},
    ]
    fake_api.collections["/leave-balances"] = [{"userId": "1", "type": "CASUAL", "total": 5, "used": 2}]
    fake_api.collections["/holidays"] = [
        {"id": "h1", "name": "Diwali", "date": "2024-11-01", "frzInd": False},
        {"id": "h2", "name": "Old", "date": "2024-01-01", "frzInd": 1},
    ]
    fake_api.collections["/config"] = {"timezone": "UTC+5:30 (IST)", "defaultAnnualLeave": 18}


@pytest.fixture
def container(fake_api, base_url):
    _seed_api(fake_api)
    return build_container(api_base_url=base_url, http_session=fake_api)


def test_online_reload_normalizes_and_caches(container):
    coordinator = container.coordinator

    assert coordinator.reload() is True

    state = coordinator.state
    assert state.is_offline is False
    assert state.is_loading is False
    assert state.is_syncing is False
    assert [u.id for u in state.employees] == ["1", "3"]
    assert "password" not in state.employees[0].extra
    assert state.attendances[0].accumulated_time == 30540
    assert [h.id for h in state.holidays] == ["h1"]
    assert state.config.default_annual_leave == 18
    assert state.last_synced_at is not None

    balances = {(b.user_id, b.type): b for b in state.leave_balances}
    assert len(balances) == 6
    assert balances[("1", LeaveType.CASUAL)].total == 5
    assert balances[("1", LeaveType.CASUAL)].used == 2
    assert balances[("3", LeaveType.EARNED)].total == 18
    assert balances[("3", LeaveType.SICK)].total == 12

    cached = container.cache.load()
    assert cached is not None
    assert cached.timestamp == state.last_synced_at


def test_health_failure_without_cache_loads_seed(container, fake_api):
    fake_api.healthy = False

    container.coordinator.reload()

    state = container.coordinator.state
    assert state.is_offline is True
    assert len(state.employees) == 6
    assert {r.id for r in state.leave_requests} == {"lr_manoj", "lr1", "lr2", "lr3"}
    assert state.attendances == ()
    # Nothing beyond the probe was fetched.
    assert [path for _, path, _ in fake_api.calls] == ["/health"]


def test_health_failure_with_cache_hydrates_from_cache(container, fake_api):
    container.coordinator.reload()
    synced_at = container.coordinator.state.last_synced_at

    fake_api.healthy = False
    container.coordinator.reload()

    state = container.coordinator.state
    assert state.is_offline is True
    assert [u.id for u in state.employees] == ["1", "3"]
    assert state.attendances[0].id == "a1"
    assert state.last_synced_at == synced_at


def test_failed_collection_fetch_goes_offline(container, fake_api, stub_response):
    fake_api.overrides["/leaves"] = stub_response(500, {"message": "boom"})

    container.coordinator.reload()

    assert container.coordinator.state.is_offline is True
    assert len(container.coordinator.state.employees) == 6


def test_server_unreachable_goes_offline(container, fake_api):
    fake_api.unreachable = True

    container.coordinator.reload()

    assert container.coordinator.state.is_offline is True


def test_session_restored_with_fresh_profile(container):
    stale = User(id="3", name="Emily Davis", email="emily.d@nexushr.com")
    container.sessions.save(SessionInfo(user=stale, token="t-1"))

    container.coordinator.reload()

    current = container.coordinator.state.current_user
    assert current.name == "Emily Davis-Ray"
    assert current.shift_start == "08:30"
    stored = container.sessions.load()
    assert stored.user.name == "Emily Davis-Ray"
    assert stored.token == "t-1"


def test_session_restored_offline_from_seed(container, fake_api):
    container.sessions.save(SessionInfo(user=User(id="5", name="Lily", email="lily.z@nexushr.com")))
    fake_api.healthy = False

    container.coordinator.reload()

    assert container.coordinator.state.current_user.name == "Lily Zhang"


def test_session_for_unknown_user_is_not_restored(container):
    container.sessions.save(SessionInfo(user=User(id="99", name="Ghost", email="g@nexushr.com")))

    container.coordinator.reload()

    assert container.coordinator.state.current_user is None


def test_concurrent_reload_is_skipped_unless_forced(container, fake_api):
    entered = threading.Event()
    release = threading.Event()
    original_get = fake_api.get

    def slow_get(url, headers=None, timeout=None):
        if url.endswith("/health") and not entered.is_set():
            entered.set()
            release.wait(5)
        return original_get(url, headers=headers, timeout=timeout)

    fake_api.get = slow_get
    first = threading.Thread(target=container.coordinator.reload)
    first.start()
    try:
        assert entered.wait(5)
        assert container.coordinator.state.is_syncing is True
        assert container.coordinator.reload() is False
    finally:
        release.set()
        first.join(5)

    assert container.coordinator.reload(force=True) is True
    assert container.coordinator.state.is_syncing is False


def test_default_today_follows_organization_timezone(container, fake_api, monkeypatch):
    from datetime import date, datetime

    from timekeeping.common import datetime_utils
    from timekeeping.sync.coordinator import SyncCoordinator

    # 20:00 UTC is already the next day at UTC+5:30.
    monkeypatch.setattr(datetime_utils, "now_utc", lambda: datetime(2024, 6, 10, 20, 0))
    coordinator = SyncCoordinator(
        users=container.users_repo,
        attendance=container.attendance_repo,
        leave=container.leave_repo,
        system=container.system_repo,
        roster=container.roster_repo,
        cache=container.cache,
        sessions=container.sessions,
        client=container.client,
    )
    fake_api.healthy = False

    coordinator.reload()

    seeded = {r.id: r for r in coordinator.state.leave_requests}
    assert seeded["lr_manoj"].start_date == date(2024, 6, 11)
