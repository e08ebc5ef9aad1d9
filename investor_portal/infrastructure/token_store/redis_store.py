"""
Redis-backed magic-link token store for multi-worker deployments.
Issue uses SET with EX; consume uses GETDEL so only one caller wins.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from investor_portal.core.errors import IntegrationError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class RedisMagicLinkStore:
    backend = "redis"

    def __init__(self, url: str, ttl_seconds: int = 15 * 60, prefix: str = "magic:", client=None):
        self._client = client or redis.Redis.from_url(url, decode_responses=True)
        self._prefix = prefix
        self.ttl_seconds = ttl_seconds

    def _key(self, token: str) -> str:
        return f"{self._prefix}{token}"

    async def issue(self, email: str) -> str:
        token = secrets.token_urlsafe(TOKEN_BYTES)
        try:
            await self._client.set(self._key(token), email, ex=self.ttl_seconds)
        except RedisError as exc:
            raise IntegrationError("token_store", f"Unable to store magic link: {exc}") from exc
        return token

    async def consume(self, token: str) -> Optional[str]:
        try:
            value = await self._client.getdel(self._key(token))
        except RedisError as exc:
            raise IntegrationError("token_store", f"Unable to redeem magic link: {exc}") from exc
        return value or None

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except RedisError as exc:
            logger.debug("Redis close failed: %s", exc)
