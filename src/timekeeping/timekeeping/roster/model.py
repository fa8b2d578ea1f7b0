from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class ShiftTemplate:
    """Domain entity: named shift a roster can assign. `start_time` is None for days off."""

    id: str
    name: str
    start_time: Optional[time]
    end_time: Optional[time]


@dataclass(frozen=True)
class RosterAssignment:
    id: str
    user_id: str
    work_date: date
    shift_id: str
