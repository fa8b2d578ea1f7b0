from __future__ import annotations

from typing import Protocol, Sequence

from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    def fetch_requests(self) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def replace_requests(self, requests: Sequence[LeaveRequest]) -> None:
        raise NotImplementedError

    def fetch_balances(self) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def replace_balances(self, balances: Sequence[LeaveBalance]) -> None:
        raise NotImplementedError
