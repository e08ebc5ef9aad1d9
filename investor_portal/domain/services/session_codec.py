"""
Session Token Codec
Signs and verifies the stateless session credential (HS256 JWT).
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt

from investor_portal.core.errors import ConfigurationError
from investor_portal.domain.models import SessionClaim
from investor_portal.domain.services.identity import derive_user_id, normalize_email
from investor_portal.utils.time import now_utc

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MIN_SECRET_BYTES = 32


class SessionTokenCodec:
    """
    Claims: {email, uid, iat, exp}. Nothing is stored server-side.
    """

    def __init__(self, secret: Optional[str], ttl_seconds: int = 60 * 60 * 24):
        if not secret:
            raise ConfigurationError("AUTH_SECRET")
        if len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ConfigurationError(f"AUTH_SECRET (minimum {MIN_SECRET_BYTES} bytes)")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def create_session_token(self, email: str) -> str:
        canonical = normalize_email(email)
        issued_at = now_utc()
        claims = {
            "email": canonical,
            "uid": derive_user_id(canonical),
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify_session_token(self, token: Optional[str]) -> Optional[SessionClaim]:
        """Return the claim, or None for any bad, expired or malformed token."""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            logger.warning("Session token rejected: %s", exc)
            return None

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            logger.warning("Session token rejected: missing email claim")
            return None

        canonical = normalize_email(email)
        user_id = derive_user_id(canonical)
        if payload.get("uid") != user_id:
            logger.warning("Session token rejected: user id does not match email")
            return None

        return SessionClaim(email=canonical, user_id=user_id)
