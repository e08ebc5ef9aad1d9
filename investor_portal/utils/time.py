"""Clock utilities (UTC)."""

import time
from datetime import datetime, timezone


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
