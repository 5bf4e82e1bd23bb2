"""
Timezone utilities.

All timestamps stored in gym documents are timezone-aware UTC. These
helpers keep comparisons (edit windows, photo upload dates) consistent
regardless of whether a value came from the clock or was parsed back
from a stored document.
"""

from datetime import datetime

import pytz

UTC_TZ = pytz.UTC


def utc_now() -> datetime:
    """Get current time in UTC (timezone-aware)."""
    return datetime.now(UTC_TZ)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive datetimes are assumed to already be in UTC (older documents and
    some database drivers drop the offset).
    """
    if dt.tzinfo is None:
        return UTC_TZ.localize(dt)
    return dt.astimezone(UTC_TZ)
