"""
Bounded exponential backoff for outbound integration calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from investor_portal.core.errors import TransientIntegrationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    operation: Callable[[int], Awaitable[T]],
    retries: int = 2,
    base_delay: float = 0.2,
    factor: float = 2.0,
    retry_on: Tuple[Type[BaseException], ...] = (TransientIntegrationError,),
) -> T:
    """
    Run ``operation(attempt)`` up to ``retries + 1`` times.

    Only exceptions listed in ``retry_on`` trigger another attempt; the delay
    before attempt n+1 is ``base_delay * factor ** n``. The last error is
    re-raised once attempts are exhausted.
    """
    last_exc: Optional[BaseException] = None
    for attempt in range(retries + 1):
        try:
            return await operation(attempt + 1)
        except retry_on as exc:
            last_exc = exc
            if attempt == retries:
                break
            delay = base_delay * (factor ** attempt)
            logger.warning(
                "Transient failure on attempt %s/%s, retrying in %.2fs: %s",
                attempt + 1,
                retries + 1,
                delay,
                exc,
            )
            await asyncio.sleep(delay)
    assert last_exc is not None
    raise last_exc
