from __future__ import annotations

import math
from typing import Optional

from ..core.enums import WorkLocation
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip text input; blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def optional_float(value: object) -> Optional[float]:
    """Finite float or None; NaN and infinities count as missing."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def work_location(value: Optional[str]) -> Optional[str]:
    """Canonical WorkLocation value, matched case-insensitively. Blank is None."""
    text = optional_text(value)
    if text is None:
        return None
    for location in WorkLocation:
        if location.value.lower() == text.lower():
            return location.value
    allowed = ", ".join(loc.value for loc in WorkLocation)
    raise ValidationError(f"Unknown work location '{text}' (expected one of: {allowed})")
