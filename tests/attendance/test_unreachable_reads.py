from __future__ import annotations

from datetime import date, datetime

import pytest
import requests

from timekeeping.attendance.http_attendance_repository import HttpAttendanceRepository
from timekeeping.attendance.model import Coordinates
from timekeeping.attendance.service import AttendanceService
from timekeeping.common.http_client import ApiClient
from timekeeping.core.enums import LeaveType
from timekeeping.core.exceptions import TransportError
from timekeeping.leave.http_leave_repository import HttpLeaveRepository
from timekeeping.leave.service import LeaveService
from timekeeping.system.model import SystemConfig
from timekeeping.users.model import User

CONFIG = SystemConfig(timezone="UTC+0:00", work_start_time="09:00", grace_period_minutes=15)
EMILY = User(id="3", name="Emily Davis", email="emily.d@nexushr.com")
GPS = Coordinates(latitude=12.97, longitude=77.59)


def _stored_day(n):
    return [
        {"id": f"a{i}", "userId": str(i), "date": "2024-06-09", "checkIn": "09:00:00",
         "checkOut": "17:00:00", "accumulatedTime": 28800}
        for i in range(n)
    ]


def _drop_next_get(monkeypatch, fake_api, suffix):
    """The next GET whose URL ends with `suffix` fails at the network level."""
    original_get = fake_api.get
    pending = {"left": 1}

    def flaky_get(url, headers=None, timeout=None):
        if pending["left"] and url.endswith(suffix):
            pending["left"] -= 1
            raise requests.ConnectionError("connection reset by peer")
        return original_get(url, headers=headers, timeout=timeout)

    monkeypatch.setattr(fake_api, "get", flaky_get)


@pytest.fixture
def service(fake_api, base_url):
    return AttendanceService(HttpAttendanceRepository(ApiClient(base_url, session=fake_api)))


def _posts(fake_api):
    return [path for method, path, _ in fake_api.calls if method == "POST"]


def test_clock_in_after_dropped_read_leaves_server_untouched(monkeypatch, fake_api, service):
    fake_api.collections["/attendance"] = _stored_day(50)
    _drop_next_get(monkeypatch, fake_api, "/attendance")

    with pytest.raises(TransportError):
        service.clock_in(user=EMILY, config=CONFIG, location="Office", coordinates=GPS,
                         now=datetime(2024, 6, 10, 8, 50))

    assert len(fake_api.collections["/attendance"]) == 50
    assert _posts(fake_api) == []

    # Next attempt reads the real collection and appends to it.
    service.clock_in(user=EMILY, config=CONFIG, location="Office", coordinates=GPS,
                     now=datetime(2024, 6, 10, 8, 51))
    assert len(fake_api.collections["/attendance"]) == 51


def test_clock_out_after_dropped_read_does_not_report_nothing_open(monkeypatch, fake_api, service):
    fake_api.collections["/attendance"] = [
        {"id": "open", "userId": "3", "date": "2024-06-10", "checkIn": "09:00:00", "checkOut": None},
    ]
    _drop_next_get(monkeypatch, fake_api, "/attendance")

    with pytest.raises(TransportError):
        service.clock_out(user=EMILY, config=CONFIG, now=datetime(2024, 6, 10, 17, 0))

    assert fake_api.collections["/attendance"][0]["checkOut"] is None
    assert _posts(fake_api) == []


def test_apply_leave_after_dropped_read_keeps_existing_requests(monkeypatch, fake_api, base_url):
    fake_api.collections["/leaves"] = [
        {"id": "lr1", "userId": "5", "type": "SICK", "startDate": "2024-06-01", "endDate": "2024-06-02",
         "status": "APPROVED"},
    ]
    _drop_next_get(monkeypatch, fake_api, "/leaves")
    leave = LeaveService(HttpLeaveRepository(ApiClient(base_url, session=fake_api)))

    with pytest.raises(TransportError):
        leave.apply_leave(user=EMILY, today=date(2024, 6, 10), leave_type=LeaveType.CASUAL)

    assert [r["id"] for r in fake_api.collections["/leaves"]] == ["lr1"]
