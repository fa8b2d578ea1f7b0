"""Bundled demo dataset used when the HR API is unreachable and nothing is cached."""

from __future__ import annotations

from datetime import date

from ..core.enums import LeaveStatus, LeaveType, UserRole
from ..leave.model import LeaveRequest
from ..system.model import DEFAULT_CONFIG
from ..users.model import User
from .state import AppState

SEED_USERS: tuple[User, ...] = (
    User(
        id="1", employee_id="NEX-1001", name="Sarah Chen", email="sarah.c@nexushr.com",
        role=UserRole.ADMIN, department="Executive", join_date="2022-01-15",
        shift_start="09:00", shift_end="18:00",
    ),
    User(
        id="2", employee_id="NEX-1002", name="James Wilson", email="james.w@nexushr.com",
        role=UserRole.MANAGER, department="Engineering", manager_id="1", join_date="2022-03-20",
        shift_start="10:00", shift_end="19:00",
    ),
    User(
        id="3", employee_id="NEX-1003", name="Emily Davis", email="emily.d@nexushr.com",
        role=UserRole.EMPLOYEE, department="Engineering", manager_id="2", join_date="2023-06-10",
        shift_start="08:30", shift_end="17:30",
    ),
    User(
        id="4", employee_id="NEX-1004", name="Marcus Thorne", email="marcus.t@nexushr.com",
        role=UserRole.HR, department="People & Culture", manager_id="1", join_date="2023-01-05",
        shift_start="09:00", shift_end="18:00",
    ),
    User(
        id="5", employee_id="NEX-1005", name="Lily Zhang", email="lily.z@nexushr.com",
        role=UserRole.EMPLOYEE, department="Engineering", manager_id="2", join_date="2024-02-15",
        shift_start="11:00", shift_end="20:00",
    ),
    User(
        id="6", employee_id="NEX-1006", name="Manoj Kumar", email="manoj.k@nexushr.com",
        role=UserRole.EMPLOYEE, department="IT", manager_id="2", join_date="2023-11-12",
        shift_start="09:30", shift_end="18:30",
    ),
)


def seed_leave_requests(today: date) -> tuple[LeaveRequest, ...]:
    return (
        LeaveRequest(
            id="lr_manoj", user_id="6", user_name="Manoj Kumar", type=LeaveType.CASUAL,
            start_date=today, end_date=today, reason="Personal errands",
            status=LeaveStatus.APPROVED, applied_date=today,
        ),
        LeaveRequest(
            id="lr1", user_id="3", user_name="Emily Davis", type=LeaveType.CASUAL,
            start_date=date(2024, 5, 20), end_date=date(2024, 5, 21), reason="Family event",
            status=LeaveStatus.APPROVED, applied_date=date(2024, 5, 15),
        ),
        LeaveRequest(
            id="lr2", user_id="3", user_name="Emily Davis", type=LeaveType.SICK,
            start_date=date(2024, 6, 1), end_date=date(2024, 6, 2), reason="Fever",
            status=LeaveStatus.PENDING, applied_date=date(2024, 5, 28),
        ),
        LeaveRequest(
            id="lr3", user_id="5", user_name="Lily Zhang", type=LeaveType.CASUAL,
            start_date=date(2024, 7, 10), end_date=date(2024, 7, 12), reason="Travel plans",
            status=LeaveStatus.PENDING, applied_date=date(2024, 6, 1),
        ),
    )


def seed_state(today: date) -> AppState:
    return AppState(
        employees=SEED_USERS,
        leave_requests=seed_leave_requests(today),
        config=DEFAULT_CONFIG,
    )
