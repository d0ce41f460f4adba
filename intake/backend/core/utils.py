"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_millis() -> int:
    """Current wall-clock time in whole milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
