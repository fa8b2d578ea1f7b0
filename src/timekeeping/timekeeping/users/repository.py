from __future__ import annotations

from typing import Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    def fetch_all(self) -> Sequence[User]:
        raise NotImplementedError

    def replace_all(self, users: Sequence[User]) -> None:
        raise NotImplementedError
