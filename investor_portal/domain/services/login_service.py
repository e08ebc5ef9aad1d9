"""
LOGIN SERVICE

Two-step magic-link login:
1. request: validate -> registry check -> issue token -> email the link
2. verify: consume token (single use) -> sign session credential

Every failure is classified here into a stable code; routes only map codes
to HTTP responses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import quote

from pydantic import BaseModel, EmailStr, ValidationError

from investor_portal.core.errors import ConfigurationError, IntegrationError
from investor_portal.domain.services.identity import derive_user_id, normalize_email
from investor_portal.domain.services.session_codec import SessionTokenCodec
from investor_portal.infrastructure.token_store import MagicLinkStore

logger = logging.getLogger(__name__)

VERIFY_PATH = "/api/auth/verify"


class InvestorRegistry(Protocol):
    def ensure_configured(self) -> None: ...

    async def is_authorized_email(self, email: str) -> bool: ...


class MagicLinkSender(Protocol):
    def ensure_configured(self) -> None: ...

    async def send_magic_link_email(self, to: str, magic_link: str) -> None: ...


class MagicLinkRequest(BaseModel):
    email: EmailStr


@dataclass(frozen=True)
class LoginOutcome:
    success: bool
    status_code: int
    code: Optional[str] = None
    message: Optional[str] = None

    def to_body(self) -> dict:
        if self.success:
            return {"success": True}
        return {"error": self.message, "code": self.code}


@dataclass(frozen=True)
class VerifyOutcome:
    status: str
    session_token: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


OK = LoginOutcome(success=True, status_code=200)
INVALID = LoginOutcome(False, 400, "invalid", "Invalid email")
UNAUTHORIZED = LoginOutcome(False, 403, "unauthorized", "Unauthorized email")
REGISTRY_UNAVAILABLE = LoginOutcome(
    False, 503, "registry_unavailable", "Investor registry is temporarily unavailable"
)
EMAIL_FAILED = LoginOutcome(False, 503, "email_failed", "Unable to send the login email right now")
MISCONFIGURED = LoginOutcome(False, 500, "config", "Login service misconfigured")
SERVER_ERROR = LoginOutcome(False, 500, "server", "Unable to process request")


def build_magic_link(origin: str, token: str) -> str:
    return f"{origin.rstrip('/')}{VERIFY_PATH}?token={quote(token, safe='')}"


def parse_email(payload) -> Optional[str]:
    """Canonical email from a request body, or None when invalid."""
    if not isinstance(payload, dict):
        return None
    raw = payload.get("email")
    if isinstance(raw, str):
        payload = {**payload, "email": raw.strip()}
    try:
        request = MagicLinkRequest.model_validate(payload)
    except ValidationError:
        return None
    return normalize_email(str(request.email))


class LoginService:

    def __init__(
        self,
        registry: InvestorRegistry,
        email_sender: MagicLinkSender,
        token_store: MagicLinkStore,
        codec_factory,
    ):
        self.registry = registry
        self.email_sender = email_sender
        self.token_store = token_store
        # Built lazily so a missing AUTH_SECRET surfaces per request, not at import
        self._codec_factory = codec_factory

    def _codec(self) -> SessionTokenCodec:
        return self._codec_factory()

    async def request_magic_link(self, payload, origin: str) -> LoginOutcome:
        email = parse_email(payload)
        if email is None:
            return INVALID

        user_ref = derive_user_id(email)
        try:
            self.registry.ensure_configured()
            self.email_sender.ensure_configured()

            if not await self.registry.is_authorized_email(email):
                logger.info("Magic link refused for unregistered user %s", user_ref)
                return UNAUTHORIZED

            token = await self.token_store.issue(email)
            await self.email_sender.send_magic_link_email(
                to=email,
                magic_link=build_magic_link(origin, token),
            )
        except ConfigurationError as exc:
            logger.error("Magic link request misconfigured: %s", exc)
            return MISCONFIGURED
        except IntegrationError as exc:
            logger.error("Magic link request failed: %s", exc)
            if exc.service == "registry":
                return REGISTRY_UNAVAILABLE
            if exc.service == "email":
                return EMAIL_FAILED
            return SERVER_ERROR
        except Exception:
            logger.exception("Unexpected error while processing magic link request")
            return SERVER_ERROR

        logger.info("Magic link sent to user %s", user_ref)
        return OK

    async def verify_magic_link(self, token: Optional[str]) -> VerifyOutcome:
        if not token:
            return VerifyOutcome(status="missing-token")

        try:
            email = await self.token_store.consume(token)
            if not email:
                logger.info("Magic link rejected: unknown, used or expired token")
                return VerifyOutcome(status="invalid-token")

            session_token = self._codec().create_session_token(email)
        except Exception:
            logger.exception("Failed to create session from magic link")
            return VerifyOutcome(status="invalid-token")

        logger.info("Session issued for user %s", derive_user_id(email))
        return VerifyOutcome(status="ok", session_token=session_token)
