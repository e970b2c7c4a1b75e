# backend/blueprint/models/base.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_values(enum_cls) -> list[str]:
    """Persist enum values ("rolled_back") rather than member names"""
    return [member.value for member in enum_cls]
