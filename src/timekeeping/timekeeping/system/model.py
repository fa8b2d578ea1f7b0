from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_GRACE_MINUTES
from ..core.enums import SchedulingMode


@dataclass(frozen=True)
class SystemConfig:
    """Organization-wide settings served by the HR API."""

    company_name: str = "NexusHR Systems"
    company_domain: str = "nexushr.com"
    timezone: str = "UTC+5:30 (IST)"
    work_start_time: str = "10:00"
    work_end_time: str = "19:00"
    grace_period_minutes: int = DEFAULT_GRACE_MINUTES
    default_annual_leave: int = 21
    default_sick_leave: int = 12
    default_casual_leave: int = 10
    currency: str = "INR"
    scheduling_mode: SchedulingMode = SchedulingMode.FIXED_SHIFT


DEFAULT_CONFIG = SystemConfig()


@dataclass(frozen=True)
class Holiday:
    id: str
    name: str
    holiday_date: Optional[date]
    description: Optional[str] = None
    frozen: bool = False
