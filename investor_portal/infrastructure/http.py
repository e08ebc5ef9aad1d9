"""
Shared helpers for outbound HTTP integrations.
"""

from __future__ import annotations

import httpx

from investor_portal.core.errors import IntegrationError, TransientIntegrationError

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


def classify_response(service: str, response: httpx.Response, action: str) -> None:
    """Raise for a non-2xx response: transient for 429/5xx, fatal otherwise."""
    if response.is_success:
        return
    status = response.status_code
    if status in RETRYABLE_STATUS or status >= 500:
        raise TransientIntegrationError(service, f"{action} failed", status_code=status)
    raise IntegrationError(service, f"{action} rejected", status_code=status)


def classify_transport_error(service: str, exc: httpx.HTTPError, action: str) -> TransientIntegrationError:
    if isinstance(exc, httpx.TimeoutException):
        return TransientIntegrationError(service, f"{action} timed out")
    return TransientIntegrationError(service, f"{action} unreachable: {exc.__class__.__name__}")
