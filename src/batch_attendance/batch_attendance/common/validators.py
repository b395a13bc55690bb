from __future__ import annotations

from ..core.enums import AttendanceStatus, Session
from ..core.exceptions import InvalidSession, InvalidStatus, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def normalize_regno(value: str) -> str:
    """Registration numbers are keys: trimmed and uppercased."""
    return require_non_empty(value, "regno").upper()


def normalize_batch_id(value: str) -> str:
    return require_non_empty(value, "batchId").upper()


def parse_session(value: str) -> Session:
    try:
        return Session(str(value or "").strip().upper())
    except ValueError:
        raise InvalidSession(f"Session must be FN or AN, got {value!r}") from None


def parse_status(value: str) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or "").strip())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise InvalidStatus(f"Status must be one of {allowed}, got {value!r}") from None
