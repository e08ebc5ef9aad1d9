"""
Logging redaction helpers.
Redacts magic-link tokens, session cookies and API keys from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._~+/=]+)"), r"\1[REDACTED]"),
    # Magic link URLs: ...verify?token=<token>
    (re.compile(r"([?&]token=)([A-Za-z0-9\-\._~%]+)"), r"\1[REDACTED]"),
    # Session cookie header/value
    (re.compile(r"(jbv_session=)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # Signed JWTs anywhere in a message
    (re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "[REDACTED_JWT]"),
    # API keys / secrets in key=value form
    (re.compile(r"(?i)(api[_-]?key|secret)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    """Attach the filter to every root handler so child loggers are covered."""
    root = logging.getLogger()
    targets = [root, *root.handlers]
    for target in targets:
        if any(isinstance(existing, RedactingFilter) for existing in target.filters):
            continue
        target.addFilter(RedactingFilter())
