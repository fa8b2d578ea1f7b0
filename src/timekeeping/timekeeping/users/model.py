from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import UserRole


@dataclass(frozen=True)
class User:
    """Domain entity: employee as returned by the HR API.

    Only the fields this package reads are typed; the rest of the remote
    payload rides along in `extra` so a full-collection replace never drops it.
    """

    id: str
    name: str
    email: str
    role: UserRole = UserRole.EMPLOYEE
    employee_id: Optional[str] = None
    department: Optional[str] = None
    manager_id: Optional[str] = None
    shift_start: Optional[str] = None
    shift_end: Optional[str] = None
    join_date: Optional[str] = None
    dob: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class SessionInfo:
    """What we persist locally for the authenticated user."""

    user: User
    token: Optional[str] = None
