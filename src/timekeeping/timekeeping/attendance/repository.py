from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Remote attendance collection. Full-collection replace, no per-record update."""

    def fetch_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_all(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError
