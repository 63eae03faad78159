"""
Timezone utilities for the SlotSwap platform.

Slot instants are stored and compared in UTC. Some backends (SQLite) hand
back naive datetimes, so everything is normalized before comparison.
"""

from datetime import datetime

import pytz


def to_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC value.

    Naive values are taken to already be UTC.
    """
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def is_valid_range(start: datetime, end: datetime) -> bool:
    """True when ``end`` is strictly after ``start``."""
    return to_utc(end) > to_utc(start)
