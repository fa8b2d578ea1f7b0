from __future__ import annotations

from datetime import date

from timekeeping.core.enums import LeaveStatus, LeaveType, SchedulingMode, UserRole
from timekeeping.leave.http_leave_repository import balances_from_payload, requests_from_payload
from timekeeping.roster.http_roster_repository import assignments_from_payload
from timekeeping.system.http_system_repository import config_from_payload, holidays_from_payload
from timekeeping.system.model import DEFAULT_CONFIG
from timekeeping.users.http_user_repository import user_from_payload, user_to_payload


def test_config_falls_back_per_field():
    config = config_from_payload(
        {"companyName": "Acme", "gracePeriodMinutes": "-4", "defaultSickLeave": "lots", "schedulingMode": "weekly_roster"}
    )
    assert config.company_name == "Acme"
    assert config.grace_period_minutes == 0
    assert config.default_sick_leave == DEFAULT_CONFIG.default_sick_leave
    assert config.scheduling_mode == SchedulingMode.WEEKLY_ROSTER
    assert config_from_payload(None) is None
    assert config_from_payload({"gracePeriodMinutes": float("inf")}).grace_period_minutes == DEFAULT_CONFIG.grace_period_minutes


def test_holiday_frozen_flag_variants():
    holidays = holidays_from_payload(
        [
            {"id": "1", "name": "A", "date": "2024-01-26", "frzInd": True},
            {"id": "2", "name": "B", "date": "2024-08-15", "frzInd": "1"},
            {"id": "3", "name": "C", "date": "2024-10-02", "frzInd": 0},
        ]
    )
    assert [h.frozen for h in holidays] == [True, True, False]
    assert holidays[2].holiday_date == date(2024, 10, 2)


def test_user_payload_drops_password_and_keeps_unknown_fields():
    user = user_from_payload(
        {"id": 7, "name": "Ana", "email": "ana@nexushr.com", "role": "hr", "password": "secret",
         "avatar": "https://example.invalid/a.png"}
    )
    assert user.id == "7"
    assert user.role == UserRole.HR
    assert "password" not in user.extra

    payload = user_to_payload(user)
    assert payload["avatar"] == "https://example.invalid/a.png"
    assert "password" not in payload


def test_leave_payloads_skip_unusable_rows():
    requests = requests_from_payload(
        [
            {"id": "l1", "userId": "3", "type": "sick", "startDate": "2024-06-01", "status": "approved"},
            {"id": "l2", "userId": "3", "type": "CASUAL"},
        ]
    )
    assert len(requests) == 1
    assert requests[0].end_date == date(2024, 6, 1)
    assert requests[0].type == LeaveType.SICK
    assert requests[0].status == LeaveStatus.APPROVED
    assert requests[0].days == 1

    balances = balances_from_payload([{"userId": "3", "type": "EARNED", "total": 21}, {"userId": "3", "type": "??"}])
    assert [(b.type, b.total, b.used) for b in balances] == [(LeaveType.EARNED, 21.0, 0.0)]

    odd = balances_from_payload([{"userId": "3", "type": "SICK", "total": "twelve", "used": float("inf")}])
    assert [(b.total, b.used) for b in odd] == [(0.0, 0.0)]


def test_roster_payload_requires_date_user_and_shift():
    assignments = assignments_from_payload(
        [
            {"userId": "3", "date": "2024-06-10", "shiftId": "morn"},
            {"userId": "3", "date": "", "shiftId": "eve"},
            {"date": "2024-06-11", "shiftId": "eve"},
        ]
    )
    assert len(assignments) == 1
    assert assignments[0].id == "3_2024-06-10"
    assert assignments[0].work_date == date(2024, 6, 10)
