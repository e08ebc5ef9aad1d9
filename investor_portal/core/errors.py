"""
Error taxonomy shared by integrations and the login flow.
"""

from typing import Optional


class ConfigurationError(RuntimeError):
    """A required setting is missing at an integration boundary."""

    def __init__(self, name: str):
        super().__init__(f"{name} is not configured.")
        self.name = name


class IntegrationError(RuntimeError):
    """A named external dependency could not serve the request."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.service = service
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"[{self.service}] {base} (status {self.status_code})"
        return f"[{self.service}] {base}"


class TransientIntegrationError(IntegrationError):
    """Retryable failure: rate limiting, 5xx, timeouts, transport errors."""
