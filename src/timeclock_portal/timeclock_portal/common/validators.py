from __future__ import annotations

from typing import Any, Optional, Union

from ..core.enums import WorkLocation
from ..core.exceptions import ValidationError


def _text(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    value = _text(value, field_name).strip()
    if not value:
        raise ValidationError(f"{field_name} is required")
    return value


def optional_text(value: Optional[str], field_name: str = "Value") -> Optional[str]:
    if value is None:
        return None
    value = _text(value, field_name).strip()
    return value or None


def require_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; JSON true/false is never an id
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None


def parse_location(value: Union[str, WorkLocation, None]) -> WorkLocation:
    """Case-insensitive ``office`` / ``remote`` / ``hybrid``."""

    if isinstance(value, WorkLocation):
        return value
    allowed = ", ".join(loc.value for loc in WorkLocation)
    if not isinstance(value, str):
        raise ValidationError(f"Location must be one of: {allowed} (got {value!r})")
    try:
        return WorkLocation(value.strip().lower())
    except ValueError:
        raise ValidationError(f"Location must be one of: {allowed} (got {value!r})") from None


def looks_like_email(value: str) -> bool:
    """Shallow check: something before '@', and a dot inside the domain part.

    Deliberately lenient, no RFC parsing.
    """

    local, sep, domain = value.partition("@")
    if not sep or not local or "@" in domain:
        return False
    if any(ch.isspace() for ch in value):
        return False
    name, dot, tld = domain.rpartition(".")
    return bool(dot and name and tld)


def require_email(value: Optional[str], field_name: str = "Email") -> Optional[str]:
    value = optional_text(value, field_name)
    if value is None:
        return None
    if not looks_like_email(value):
        raise ValidationError(f"{field_name} is not a valid email address: {value!r}")
    return value
