from __future__ import annotations

from datetime import date

import pytest

from timekeeping.core.enums import LeaveStatus, LeaveType
from timekeeping.core.exceptions import ValidationError
from timekeeping.leave.model import LeaveBalance, LeaveRequest
from timekeeping.leave.service import LeaveService, ensure_default_balances, recompute_used
from timekeeping.system.model import SystemConfig
from timekeeping.users.model import User

TODAY = date(2024, 6, 10)
EMILY = User(id="3", name="Emily Davis", email="emily.d@nexushr.com")


class FakeLeaveRepo:
    def __init__(self, requests=(), balances=()):
        self.requests = list(requests)
        self.balances = list(balances)

    def fetch_requests(self):
        return list(self.requests)

    def replace_requests(self, requests):
        self.requests = list(requests)

    def fetch_balances(self):
        return list(self.balances)

    def replace_balances(self, balances):
        self.balances = list(balances)


def _request(rid, status, start, end, leave_type=LeaveType.CASUAL):
    return LeaveRequest(
        id=rid, user_id="3", user_name="Emily Davis", type=leave_type, start_date=start, end_date=end,
        reason="", status=status, applied_date=start,
    )


def test_apply_leave_prepends_pending_request():
    repo = FakeLeaveRepo(requests=[_request("old", LeaveStatus.APPROVED, TODAY, TODAY)])
    svc = LeaveService(repo, id_factory=lambda: "new")

    created = svc.apply_leave(user=EMILY, today=TODAY, leave_type=LeaveType.SICK,
                              start_date=date(2024, 6, 12), reason="  Flu ")

    assert created.status == LeaveStatus.PENDING
    assert created.end_date == date(2024, 6, 12)
    assert created.reason == "Flu"
    assert [r.id for r in repo.requests] == ["new", "old"]


def test_apply_leave_rejects_inverted_range():
    svc = LeaveService(FakeLeaveRepo())
    with pytest.raises(ValidationError):
        svc.apply_leave(user=EMILY, today=TODAY, start_date=date(2024, 6, 12), end_date=date(2024, 6, 11))


def test_approval_recomputes_used_days_inclusively():
    repo = FakeLeaveRepo(
        requests=[
            _request("a", LeaveStatus.APPROVED, date(2024, 5, 20), date(2024, 5, 21)),
            _request("b", LeaveStatus.PENDING, date(2024, 7, 10), date(2024, 7, 12)),
        ],
        balances=[LeaveBalance(user_id="3", type=LeaveType.CASUAL, total=10, used=0)],
    )
    svc = LeaveService(repo)

    updated = svc.update_leave_status("b", LeaveStatus.APPROVED, today=TODAY, processed_by="2")

    assert updated.status == LeaveStatus.APPROVED
    assert updated.processed_by == "2"
    assert updated.processed_date == TODAY
    assert repo.balances[0].used == 5


def test_revoking_approval_gives_days_back():
    repo = FakeLeaveRepo(
        requests=[_request("a", LeaveStatus.APPROVED, date(2024, 5, 20), date(2024, 5, 21))],
        balances=[LeaveBalance(user_id="3", type=LeaveType.CASUAL, total=10, used=2)],
    )

    LeaveService(repo).update_leave_status("a", LeaveStatus.REJECTED, today=TODAY)

    assert repo.balances[0].used == 0


def test_unknown_request_is_reported_as_none():
    repo = FakeLeaveRepo()
    assert LeaveService(repo).update_leave_status("nope", LeaveStatus.APPROVED, today=TODAY) is None


def test_default_balances_follow_config():
    config = SystemConfig(default_annual_leave=20, default_sick_leave=7, default_casual_leave=3)
    existing = [LeaveBalance(user_id="3", type=LeaveType.SICK, total=1, used=1)]

    result = ensure_default_balances([EMILY], existing, config)

    by_type = {b.type: b for b in result}
    assert by_type[LeaveType.SICK].total == 1
    assert by_type[LeaveType.EARNED].total == 20
    assert by_type[LeaveType.CASUAL].total == 3
    assert len(result) == 3


def test_recompute_used_only_counts_matching_type():
    requests = [_request("s", LeaveStatus.APPROVED, TODAY, TODAY, leave_type=LeaveType.SICK)]
    balances = [LeaveBalance(user_id="3", type=LeaveType.CASUAL, total=10, used=4)]
    assert recompute_used(balances, requests)[0].used == 0
