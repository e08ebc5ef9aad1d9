"""
DOMAIN MODELS — AUTHENTICATION

Magic-link records, session claims and investor profiles.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MagicLinkRecord:
    """
    A pending single-use login grant, owned by the token store.
    """
    email: str
    expires_at_ms: int

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expires_at_ms


@dataclass(frozen=True)
class SessionClaim:
    """
    Identity carried by a signed session cookie.
    `user_id` is always reproducible from `email`.
    """
    email: str
    user_id: str


@dataclass(frozen=True)
class UserProfile:
    user_id: str
    email: str
    name: str
    organization: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class FeeTerms:
    """Per-investor fee terms from the registry (fractions in [0, 1])."""
    record_found: bool
    management_fee_pct: Optional[float] = None
    carry_pct: Optional[float] = None

    @property
    def missing_management_fee(self) -> bool:
        return self.management_fee_pct is None

    @property
    def missing_carry(self) -> bool:
        return self.carry_pct is None
