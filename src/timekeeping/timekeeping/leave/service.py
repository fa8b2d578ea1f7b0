from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.http_attendance_repository import new_record_id
from ..common.validators import optional_text
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..system.model import SystemConfig
from ..users.model import User
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

# Leave types every employee gets a balance row for.
BALANCED_TYPES = (LeaveType.EARNED, LeaveType.SICK, LeaveType.CASUAL)


def default_allowance(config: SystemConfig, leave_type: LeaveType) -> int:
    if leave_type == LeaveType.EARNED:
        return config.default_annual_leave
    if leave_type == LeaveType.SICK:
        return config.default_sick_leave
    return config.default_casual_leave


def ensure_default_balances(
    users: Iterable[User], balances: Iterable[LeaveBalance], config: SystemConfig
) -> list[LeaveBalance]:
    """Append a zero-used balance for every (employee, type) pair the server lacks."""
    result = list(balances)
    present = {(str(b.user_id), b.type) for b in result}
    for user in users:
        for leave_type in BALANCED_TYPES:
            if (str(user.id), leave_type) in present:
                continue
            result.append(
                LeaveBalance(user_id=str(user.id), type=leave_type, total=default_allowance(config, leave_type))
            )
            present.add((str(user.id), leave_type))
    return result


def recompute_used(balances: Iterable[LeaveBalance], requests: Sequence[LeaveRequest]) -> list[LeaveBalance]:
    """Rebuild `used` from the approved history (inclusive day counts)."""
    out = []
    for bal in balances:
        used = sum(
            r.days
            for r in requests
            if str(r.user_id) == str(bal.user_id) and r.type == bal.type and r.status == LeaveStatus.APPROVED
        )
        out.append(replace(bal, used=used))
    return out


class LeaveService:
    def __init__(self, leave: LeaveRepository, *, id_factory: Callable[[], str] = new_record_id):
        self._leave = leave
        self._new_id = id_factory

    def apply_leave(
        self,
        *,
        user: User,
        today: date,
        leave_type: LeaveType = LeaveType.CASUAL,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        start = start_date or today
        end = end_date or start
        if end < start:
            raise ValidationError("Leave end date cannot be before its start date")

        request = LeaveRequest(
            id=self._new_id(),
            user_id=str(user.id),
            user_name=user.name,
            type=leave_type,
            start_date=start,
            end_date=end,
            reason=optional_text(reason) or "",
            status=LeaveStatus.PENDING,
            applied_date=today,
        )
        current = list(self._leave.fetch_requests())
        self._leave.replace_requests([request, *current])
        logger.info("Leave %s applied user=%s %s..%s", request.id, user.id, start, end)
        return request

    def update_leave_status(
        self,
        request_id: str,
        status: LeaveStatus,
        *,
        today: date,
        processed_by: Optional[str] = None,
        users: Iterable[User] = (),
        config: Optional[SystemConfig] = None,
    ) -> Optional[LeaveRequest]:
        """Returns the updated request, or None when the id is unknown.

        With `config`, employees missing a balance row get one from the
        configured allowances before used days are recomputed.
        """
        requests = list(self._leave.fetch_requests())
        idx = next((i for i, r in enumerate(requests) if r.id == str(request_id)), None)
        if idx is None:
            logger.warning("Leave request %s not found", request_id)
            return None

        previous = requests[idx]
        updated = replace(previous, status=status, processed_by=optional_text(processed_by), processed_date=today)
        requests[idx] = updated
        self._leave.replace_requests(requests)

        # Approval granted or revoked: balances derived from the approved history change.
        if LeaveStatus.APPROVED in (status, previous.status):
            balances = list(self._leave.fetch_balances())
            if config is not None:
                balances = ensure_default_balances(users, balances, config)
            balances = recompute_used(balances, requests)
            self._leave.replace_balances(balances)

        logger.info("Leave %s -> %s by %s", request_id, status.value, processed_by)
        return updated
