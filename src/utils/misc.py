"""Time and formatting utilities used across the project."""

from __future__ import annotations

import datetime
import time
from typing import Optional


def time_s() -> float:
    """Return the current wall-clock time in seconds as a float."""

    return time.time()


def time_iso8601() -> str:
    """Return the current UTC time formatted as ``YYYY-MM-DDTHH:MM:SS.fffZ``."""

    dt = datetime.datetime.now(datetime.timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def time_rfc3339(dt: Optional[datetime.datetime] = None) -> str:
    """Format ``dt`` (default: now) as a second-precision UTC RFC-3339 string.

    :param dt: Aware or naive datetime; naive values are taken as UTC.
    :return: String such as ``2021-09-01T12:34:56Z``.
    """

    if dt is None:
        dt = datetime.datetime.now(datetime.timezone.utc)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
