from __future__ import annotations

import threading
from datetime import datetime

from timekeeping.clock import company_clock
from timekeeping.clock.company_clock import CompanyClock


def test_now_follows_configured_offset(monkeypatch):
    monkeypatch.setattr(company_clock, "company_now", lambda tz: datetime(2024, 6, 10, 23, 59, 59) if tz else None)
    clock = CompanyClock(lambda: "UTC+5:30 (IST)")

    assert clock.today_str() == "2024-06-10"


def test_timezone_is_read_on_every_call():
    zone = {"tz": "UTC+0"}
    clock = CompanyClock(lambda: zone["tz"])

    utc_hour = clock.now().hour
    zone["tz"] = "UTC+12"
    shifted = clock.now().hour

    assert (utc_hour + 12) % 24 == shifted or (utc_hour + 13) % 24 == shifted


def test_tick_notifies_listeners_and_survives_failures():
    clock = CompanyClock(lambda: "UTC+0")
    seen = []

    def broken(now):
        raise RuntimeError("listener bug")

    clock.subscribe(broken)
    unsubscribe = clock.subscribe(seen.append)

    now = clock.tick()
    assert seen == [now]
    assert clock.last_tick == now

    unsubscribe()
    clock.tick()
    assert len(seen) == 1


def test_background_thread_ticks_until_stopped():
    clock = CompanyClock(lambda: "UTC+0", interval=0.01)
    ticked = threading.Event()
    clock.subscribe(lambda now: ticked.set())

    clock.start()
    try:
        assert ticked.wait(2)
        assert clock.running
    finally:
        clock.stop()

    assert not clock.running
