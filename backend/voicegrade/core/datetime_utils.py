"""
Timestamps are stored as ISO 8601 strings with offset, e.g. 2026-01-31T10:43:03-05:00.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def local_now() -> datetime:
    """Timezone-aware current time in the server's local zone."""
    return datetime.now(timezone.utc).astimezone()


def now_iso() -> str:
    """Column default for created_at / updated_at."""
    return local_now().isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp; naive values are taken as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_older_than(value: Optional[str], minutes: int) -> bool:
    """True if the stored timestamp lies more than `minutes` in the past."""
    stamp = parse_timestamp(value)
    return stamp is not None and local_now() - stamp > timedelta(minutes=minutes)
