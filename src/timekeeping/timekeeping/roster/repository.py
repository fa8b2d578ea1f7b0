from __future__ import annotations

from typing import Protocol, Sequence

from .model import RosterAssignment


class RosterRepository(Protocol):
    def fetch_all(self) -> Sequence[RosterAssignment]:
        raise NotImplementedError

    def replace_all(self, assignments: Sequence[RosterAssignment]) -> None:
        raise NotImplementedError
