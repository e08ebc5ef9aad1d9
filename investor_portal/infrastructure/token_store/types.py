"""
Magic-link token store interface.
"""

from __future__ import annotations

from typing import Optional, Protocol


class MagicLinkStore(Protocol):
    backend: str

    async def issue(self, email: str) -> str:
        ...

    async def consume(self, token: str) -> Optional[str]:
        ...
