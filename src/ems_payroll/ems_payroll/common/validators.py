from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.constants import MAX_HOURS_PER_DAY
from ..core.enums import Role, WorkLogStatus
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def _to_finite(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def require_non_negative(value: Any, field_name: str) -> float:
    number = _to_finite(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return number


def require_hours(value: Any) -> float:
    """Hours worked on a single day must lie in (0, 24]."""
    hours = _to_finite(value, "Hours worked")
    if hours <= 0 or hours > MAX_HOURS_PER_DAY:
        raise ValidationError(f"Hours worked must be greater than 0 and at most {MAX_HOURS_PER_DAY:g}")
    return hours


def parse_role(value: Optional[str], *, default: Role = Role.EMPLOYEE) -> Role:
    if value is None or not str(value).strip():
        return default
    raw = str(value).strip().upper()
    if raw.startswith("ROLE_"):
        raw = raw[len("ROLE_"):]
    try:
        return Role(raw)
    except ValueError:
        raise ValidationError(f"Unknown role: {value}")


def parse_status(value: Optional[str]) -> WorkLogStatus:
    raw = require_non_empty(value, "Status").upper()
    try:
        return WorkLogStatus(raw)
    except ValueError:
        raise ValidationError(f"Unknown status: {value}")


def parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    raw = str(value or "").strip().lower()
    if raw in {"true", "1", "yes"}:
        return True
    if raw in {"false", "0", "no"}:
        return False
    raise ValidationError(f"{field_name} must be true or false")


def parse_int(value: Any, field_name: str, *, default: Optional[int] = None) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
