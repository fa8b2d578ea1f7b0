from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    HR = "HR"
    ADMIN = "ADMIN"


class SchedulingMode(str, Enum):
    """How the effective shift of a day is chosen."""

    FIXED_SHIFT = "FIXED_SHIFT"
    WEEKLY_ROSTER = "WEEKLY_ROSTER"


class WorkLocation(str, Enum):
    OFFICE = "Office"
    HOME = "Home"
    CLIENT_SITE = "Client Site"


class ClockState(str, Enum):
    """Per-user state within one organization-local day."""

    NOT_STARTED = "NOT_STARTED"
    ACTIVE = "ACTIVE"
    CLOSED_CAN_RESUME = "CLOSED_CAN_RESUME"


class ClockAction(str, Enum):
    """Outcome of a clock-in/clock-out command."""

    STARTED = "STARTED"
    RESUMED = "RESUMED"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    CLOSED = "CLOSED"
    NOTHING_OPEN = "NOTHING_OPEN"
    SKIPPED = "SKIPPED"


class LeaveType(str, Enum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    EARNED = "EARNED"
    MATERNITY = "MATERNITY"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
