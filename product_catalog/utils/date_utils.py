from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """Timestamp for a mutation that must not sort before the previous one.

    Args:
        previous: Timestamp currently stored on the record, if any

    Returns:
        utcnow(), or previous when the clock has stepped backwards
    """
    now = utcnow()
    if previous is not None and previous > now:
        return previous
    return now
