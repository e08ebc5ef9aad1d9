"""
In-process magic-link token store.

Only valid for a single process: every worker has its own map. Use the Redis
store when the app runs behind more than one worker.
"""

from __future__ import annotations

import logging
import secrets
from typing import Callable, Dict, Optional

from investor_portal.domain.models import MagicLinkRecord
from investor_portal.utils.time import now_ms

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class InMemoryMagicLinkStore:
    backend = "memory"

    def __init__(self, ttl_seconds: int = 15 * 60, clock: Callable[[], int] = now_ms):
        self.ttl_ms = ttl_seconds * 1000
        self._clock = clock
        self._records: Dict[str, MagicLinkRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def _purge_expired(self, now: int) -> None:
        expired = [token for token, record in self._records.items() if record.is_expired(now)]
        for token in expired:
            del self._records[token]
        if expired:
            logger.debug("Purged %s expired magic link(s)", len(expired))

    async def issue(self, email: str) -> str:
        now = self._clock()
        self._purge_expired(now)

        token = secrets.token_urlsafe(TOKEN_BYTES)
        self._records[token] = MagicLinkRecord(email=email, expires_at_ms=now + self.ttl_ms)
        return token

    async def consume(self, token: str) -> Optional[str]:
        # pop() before any await: no other request can observe the record
        record = self._records.pop(token, None)
        if record is None:
            return None
        if record.is_expired(self._clock()):
            return None
        return record.email
