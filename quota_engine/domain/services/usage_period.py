from __future__ import annotations

from datetime import datetime, timezone


def usage_period(now: datetime) -> str:
    """Calendar month (UTC) that a usage counter belongs to, as ``YYYY-MM``."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{now.year:04d}-{now.month:02d}"
