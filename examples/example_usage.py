"""Example: drive the timekeeping engine directly (no Flask).

Controllers are a thin layer; the clock-in/clock-out rules live in the services.
"""

import importlib
import logging

from config import get_settings_module

from timekeeping.attendance.model import Coordinates
from timekeeping.container import build_container


def main():
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_base_url=settings.API_BASE_URL, cache_dir=settings.CACHE_DIR)

    hr = container.hr_system
    hr.reload()
    print("offline:", hr.state.is_offline, "employees:", len(hr.state.employees))

    hr.start_session("3")
    if hr.requires_late_reason():
        result = hr.check_in(late_reason="Traffic", coordinates=Coordinates(12.97, 77.59))
    else:
        result = hr.check_in(coordinates=Coordinates(12.97, 77.59))
    print(result.action.value, hr.daily_track().display)


if __name__ == "__main__":
    main()
