from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional, Protocol

from ..core.exceptions import GeolocationError
from .model import Coordinates

logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    def get_current_position(self, *, timeout: float, high_accuracy: bool = True) -> Coordinates:
        """Return the device position or raise GeolocationError (denied/unavailable)."""
        raise NotImplementedError


class FixedPositionProvider:
    """Position reported by the client with the request; None means the client denied access."""

    def __init__(self, coordinates: Optional[Coordinates]):
        self._coordinates = coordinates

    def get_current_position(self, *, timeout: float, high_accuracy: bool = True) -> Coordinates:
        if self._coordinates is None:
            raise GeolocationError("Location access is required for verified attendance")
        return self._coordinates


def capture_position(provider: GeolocationProvider, *, timeout: float) -> Coordinates:
    """Ask the provider for a position, giving up after `timeout` seconds."""
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="geolocation")
    try:
        future = pool.submit(provider.get_current_position, timeout=timeout, high_accuracy=True)
        return future.result(timeout=timeout)
    except FutureTimeout as e:
        logger.warning("Geolocation timed out after %.1fs", timeout)
        raise GeolocationError("Timed out while acquiring location") from e
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
