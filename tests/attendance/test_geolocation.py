from __future__ import annotations

import threading
from datetime import date, datetime, time

import pytest

from timekeeping.attendance.geolocation import FixedPositionProvider, capture_position
from timekeeping.attendance.model import Coordinates
from timekeeping.attendance.service import AttendanceService
from timekeeping.core.exceptions import GeolocationError
from timekeeping.system.model import SystemConfig
from timekeeping.users.model import User


class HangingProvider:
    def __init__(self):
        self.release = threading.Event()

    def get_current_position(self, *, timeout, high_accuracy=True):
        self.release.wait(5)
        return Coordinates(0.0, 0.0)


class MemoryAttendance:
    def __init__(self):
        self.records = []

    def fetch_all(self):
        return list(self.records)

    def replace_all(self, records):
        self.records = list(records)


def test_fixed_provider_returns_position():
    pos = capture_position(FixedPositionProvider(Coordinates(1.5, 2.5)), timeout=1)
    assert pos == Coordinates(1.5, 2.5)


def test_denied_position_raises():
    with pytest.raises(GeolocationError):
        capture_position(FixedPositionProvider(None), timeout=1)


def test_slow_provider_times_out():
    provider = HangingProvider()
    try:
        with pytest.raises(GeolocationError, match="Timed out"):
            capture_position(provider, timeout=0.05)
    finally:
        provider.release.set()


def test_service_uses_provider_when_request_has_no_coordinates():
    repo = MemoryAttendance()
    svc = AttendanceService(repo, geolocation=FixedPositionProvider(Coordinates(12.0, 77.0)))
    user = User(id="1", name="A", email="a@nexushr.com", shift_start="09:00")

    result = svc.clock_in(user=user, config=SystemConfig(timezone="UTC+0"), now=datetime.combine(date(2024, 1, 2), time(9, 0)))

    assert (result.record.latitude, result.record.longitude) == (12.0, 77.0)
