from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional

from .model import RosterAssignment, ShiftTemplate

SHIFT_TEMPLATES: tuple[ShiftTemplate, ...] = (
    ShiftTemplate(id="off", name="Day Off", start_time=None, end_time=None),
    ShiftTemplate(id="gen", name="General", start_time=time(10, 0), end_time=time(19, 0)),
    ShiftTemplate(id="morn", name="Morning", start_time=time(6, 0), end_time=time(15, 0)),
    ShiftTemplate(id="eve", name="Evening", start_time=time(14, 0), end_time=time(23, 0)),
    ShiftTemplate(id="night", name="Night", start_time=time(22, 0), end_time=time(7, 0)),
)


class RosterService:
    """Resolves weekly-roster assignments to shift templates."""

    def __init__(self, templates: Iterable[ShiftTemplate] = SHIFT_TEMPLATES):
        self._templates = {t.id: t for t in templates}

    def template(self, shift_id: str) -> Optional[ShiftTemplate]:
        return self._templates.get(str(shift_id))

    @staticmethod
    def find_assignment(
        assignments: Iterable[RosterAssignment], *, user_id: object, work_date: date
    ) -> Optional[RosterAssignment]:
        for a in assignments:
            if str(a.user_id) == str(user_id) and a.work_date == work_date:
                return a
        return None

    def shift_start_for(
        self, assignments: Iterable[RosterAssignment], *, user_id: object, work_date: date
    ) -> Optional[time]:
        """Rostered start for the day, or None when unassigned or a day off."""
        a = self.find_assignment(assignments, user_id=user_id, work_date=work_date)
        if not a:
            return None
        tpl = self.template(a.shift_id)
        return tpl.start_time if tpl else None
