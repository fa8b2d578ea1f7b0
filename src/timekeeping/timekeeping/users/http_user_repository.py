from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.datetime_utils import clean_date_str
from ..common.http_client import ApiClient
from ..common.validators import optional_text
from ..core.enums import UserRole
from .model import User
from .repository import UserRepository

_TYPED_KEYS = {
    "id", "name", "email", "role", "employeeId", "department", "managerId",
    "shiftStart", "shiftEnd", "joinDate", "dob",
}


def _role(value: Any) -> UserRole:
    try:
        return UserRole(str(value).upper())
    except ValueError:
        return UserRole.EMPLOYEE


def user_from_payload(raw: Mapping[str, Any]) -> User:
    return User(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        email=str(raw.get("email") or ""),
        role=_role(raw.get("role")),
        employee_id=optional_text(raw.get("employeeId")),
        department=optional_text(raw.get("department")),
        manager_id=optional_text(raw.get("managerId")),
        shift_start=optional_text(raw.get("shiftStart")),
        shift_end=optional_text(raw.get("shiftEnd")),
        join_date=clean_date_str(raw.get("joinDate")),
        dob=clean_date_str(raw.get("dob")),
        extra={k: v for k, v in raw.items() if k not in _TYPED_KEYS and k != "password"},
    )


def user_to_payload(user: User) -> dict:
    return {
        **dict(user.extra),
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "employeeId": user.employee_id,
        "department": user.department,
        "managerId": user.manager_id,
        "shiftStart": user.shift_start,
        "shiftEnd": user.shift_end,
        "joinDate": user.join_date,
        "dob": user.dob,
    }


def users_from_payload(data: Any) -> list[User]:
    if not isinstance(data, list):
        return []
    return [user_from_payload(u) for u in data if isinstance(u, Mapping)]


class HttpUserRepository(UserRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def fetch_all(self) -> Sequence[User]:
        return users_from_payload(self._client.get_json("/users", context="getUsers"))

    def replace_all(self, users: Sequence[User]) -> None:
        payload = {"users": [user_to_payload(u) for u in users]}
        self._client.post_json("/users/bulk", payload, context="saveUsers")
