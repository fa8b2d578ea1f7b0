from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Holiday, SystemConfig


class SystemRepository(Protocol):
    def check_health(self) -> bool:
        raise NotImplementedError

    def fetch_config(self) -> Optional[SystemConfig]:
        raise NotImplementedError

    def fetch_holidays(self) -> Sequence[Holiday]:
        raise NotImplementedError
