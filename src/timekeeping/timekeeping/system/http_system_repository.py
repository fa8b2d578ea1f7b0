from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import clean_date_str, parse_iso_date
from ..common.http_client import ApiClient
from ..core.enums import SchedulingMode
from .model import DEFAULT_CONFIG, Holiday, SystemConfig
from .repository import SystemRepository

_CONFIG_KEYS = {
    "companyName": "company_name",
    "companyDomain": "company_domain",
    "timezone": "timezone",
    "workStartTime": "work_start_time",
    "workEndTime": "work_end_time",
    "gracePeriodMinutes": "grace_period_minutes",
    "defaultAnnualLeave": "default_annual_leave",
    "defaultSickLeave": "default_sick_leave",
    "defaultCasualLeave": "default_casual_leave",
    "currency": "currency",
    "schedulingMode": "scheduling_mode",
}
_INT_FIELDS = {"grace_period_minutes", "default_annual_leave", "default_sick_leave", "default_casual_leave"}


def config_from_payload(raw: Any) -> Optional[SystemConfig]:
    """Unknown or malformed keys fall back to DEFAULT_CONFIG values."""
    if not isinstance(raw, Mapping):
        return None
    values = asdict(DEFAULT_CONFIG)
    for wire_key, field_name in _CONFIG_KEYS.items():
        value = raw.get(wire_key)
        if value is None or value == "":
            continue
        if field_name in _INT_FIELDS:
            try:
                value = max(0, int(value))
            except (TypeError, ValueError, OverflowError):
                continue
        elif field_name == "scheduling_mode":
            try:
                value = SchedulingMode(str(value).upper())
            except ValueError:
                continue
        else:
            value = str(value)
        values[field_name] = value
    return SystemConfig(**values)


def config_to_payload(config: SystemConfig) -> dict:
    values = asdict(config)
    payload = {wire_key: values[field_name] for wire_key, field_name in _CONFIG_KEYS.items()}
    payload["schedulingMode"] = config.scheduling_mode.value
    return payload


def holiday_from_payload(raw: Mapping[str, Any]) -> Holiday:
    day = clean_date_str(raw.get("date"))
    frz = raw.get("frzInd")
    return Holiday(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        holiday_date=parse_iso_date(day) if day else None,
        description=raw.get("description") or None,
        frozen=frz is True or frz == 1 or frz == "1",
    )


def holiday_to_payload(h: Holiday) -> dict:
    return {
        "id": h.id,
        "name": h.name,
        "date": h.holiday_date.isoformat() if h.holiday_date else None,
        "description": h.description,
        "frzInd": h.frozen,
    }


def holidays_from_payload(data: Any) -> list[Holiday]:
    if not isinstance(data, list):
        return []
    return [holiday_from_payload(h) for h in data if isinstance(h, Mapping)]


class HttpSystemRepository(SystemRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def check_health(self) -> bool:
        return self._client.check_health()

    def fetch_config(self) -> Optional[SystemConfig]:
        return config_from_payload(self._client.get_json("/config", context="getConfig"))

    def fetch_holidays(self) -> Sequence[Holiday]:
        return holidays_from_payload(self._client.get_json("/holidays", context="getHolidays"))
