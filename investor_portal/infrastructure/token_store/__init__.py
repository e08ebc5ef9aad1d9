"""
Magic-link token store factory (config-driven).
"""

from __future__ import annotations

from typing import Optional

from investor_portal.config import settings
from investor_portal.infrastructure.token_store.memory_store import InMemoryMagicLinkStore
from investor_portal.infrastructure.token_store.redis_store import RedisMagicLinkStore
from investor_portal.infrastructure.token_store.types import MagicLinkStore

_store: Optional[MagicLinkStore] = None


def build_token_store(backend: str) -> MagicLinkStore:
    backend = (backend or "memory").lower()
    if backend == "redis":
        return RedisMagicLinkStore(settings.REDIS_URL, ttl_seconds=settings.MAGIC_LINK_TTL_SECONDS)
    if backend == "memory":
        return InMemoryMagicLinkStore(ttl_seconds=settings.MAGIC_LINK_TTL_SECONDS)
    raise ValueError(f"Unknown TOKEN_STORE_BACKEND: {backend}")


def get_token_store() -> MagicLinkStore:
    """Process-wide store instance."""
    global _store
    if _store is None:
        _store = build_token_store(settings.TOKEN_STORE_BACKEND)
    return _store


async def close_token_store() -> None:
    global _store
    if isinstance(_store, RedisMagicLinkStore):
        await _store.close()
    _store = None


__all__ = [
    "InMemoryMagicLinkStore",
    "MagicLinkStore",
    "RedisMagicLinkStore",
    "build_token_store",
    "close_token_store",
    "get_token_store",
]
