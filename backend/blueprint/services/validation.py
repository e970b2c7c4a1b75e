# backend/blueprint/services/validation.py
import enum
from typing import Optional, Type, TypeVar

from ..errors import ValidationError

E = TypeVar("E", bound=enum.Enum)


def coerce_enum(enum_cls: Type[E], value, field: str) -> E:
    """Build an enum member from a member or raw value, rejecting unknown values"""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field} must be one of: {allowed} (got {value!r})") from None


def require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} can't be blank")
    return value
