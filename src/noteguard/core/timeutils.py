"""Time helpers shared by the expiration checks."""

from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite round-trips) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(instant: Optional[datetime], now: datetime) -> bool:
    """Expiration predicate used by every read path and by the sweep.

    Mirrors the SQL form ``instant IS NOT NULL AND instant <= now``.
    """
    if instant is None:
        return False
    return ensure_utc(instant) <= ensure_utc(now)
