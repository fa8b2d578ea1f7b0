from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import company_now
from ..core.constants import DEFAULT_CLOCK_INTERVAL

logger = logging.getLogger(__name__)

Listener = Callable[[datetime], None]


class CompanyClock:
    """Organization wall-clock, recomputed on a background tick.

    `timezone_provider` is read on every call so a config reload takes effect
    on the next tick without restarting the clock.
    """

    def __init__(self, timezone_provider: Callable[[], Optional[str]], *, interval: float = DEFAULT_CLOCK_INTERVAL):
        self._timezone_provider = timezone_provider
        self._interval = float(interval)
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        return company_now(self._timezone_provider())

    def today(self) -> date:
        return self.now().date()

    def today_str(self) -> str:
        return self.today().isoformat()

    @property
    def last_tick(self) -> Optional[datetime]:
        return self._last

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a tick listener. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def tick(self) -> datetime:
        now = self.now()
        self._last = now
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(now)
            except Exception:
                logger.exception("Clock listener %r failed", listener)
        return now

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="company-clock", daemon=True)
        self._thread.start()
        logger.debug("Company clock started (interval=%.2fs)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout if timeout is not None else self._interval * 2)

    def _run(self) -> None:
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self._interval)
