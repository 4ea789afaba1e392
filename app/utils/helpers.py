"""Small shared helpers: UTC time handling and ledger reference ids."""
import secrets
import string
from datetime import datetime, timezone
from typing import Optional

_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite hands these back) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def generate_reference(prefix: str, length: int) -> str:
    """
    Ledger reference like MPESA-7KQ2M9XA.

    >>> generate_reference("ADMIN", 6)  # doctest: +SKIP
    'ADMIN-Q3ZP0D'
    """
    suffix = "".join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(length))
    return f"{prefix}-{suffix}"
