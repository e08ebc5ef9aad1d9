"""
FastAPI dependency wiring.
Tests replace these through `app.dependency_overrides`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from investor_portal.config import settings
from investor_portal.domain.models import SessionClaim
from investor_portal.domain.services.fund_config import FundConfigEngine
from investor_portal.domain.services.login_service import LoginService
from investor_portal.domain.services.session_codec import SessionTokenCodec
from investor_portal.domain.services.user_directory import UserDirectory
from investor_portal.infrastructure.email.sendgrid_sender import SendGridEmailSender
from investor_portal.infrastructure.registry.airtable_registry import AirtableRegistry
from investor_portal.infrastructure.token_store import MagicLinkStore, get_token_store

CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


class SessionRequired(Exception):
    """Raised when a protected route has no usable session cookie."""

    def __init__(self, error: str):
        super().__init__(error)
        self.error = error


def get_registry() -> AirtableRegistry:
    return AirtableRegistry(
        api_key=settings.AIRTABLE_API_KEY,
        base_id=settings.AIRTABLE_BASE_ID,
        table_id=settings.AIRTABLE_TABLE_ID,
        api_url=settings.AIRTABLE_API_URL,
        timeout_seconds=settings.INTEGRATION_TIMEOUT_SECONDS,
        retries=settings.INTEGRATION_RETRIES,
        backoff_seconds=settings.INTEGRATION_BACKOFF_SECONDS,
    )


def get_email_sender() -> SendGridEmailSender:
    return SendGridEmailSender(
        api_key=settings.SENDGRID_API_KEY,
        from_email=settings.SENDGRID_FROM_EMAIL,
        from_name=settings.SENDGRID_FROM_NAME,
        api_url=settings.SENDGRID_API_URL,
        timeout_seconds=settings.INTEGRATION_TIMEOUT_SECONDS,
        retries=settings.INTEGRATION_RETRIES,
        backoff_seconds=settings.INTEGRATION_BACKOFF_SECONDS,
    )


def get_session_codec() -> SessionTokenCodec:
    return SessionTokenCodec(settings.AUTH_SECRET, ttl_seconds=settings.SESSION_TTL_SECONDS)


def get_magic_link_store() -> MagicLinkStore:
    return get_token_store()


def get_login_service(
    registry: AirtableRegistry = Depends(get_registry),
    email_sender: SendGridEmailSender = Depends(get_email_sender),
    token_store: MagicLinkStore = Depends(get_magic_link_store),
) -> LoginService:
    return LoginService(
        registry=registry,
        email_sender=email_sender,
        token_store=token_store,
        codec_factory=get_session_codec,
    )


@lru_cache(maxsize=1)
def get_user_directory() -> UserDirectory:
    return UserDirectory.from_json(settings.USER_DIRECTORY_JSON)


@lru_cache(maxsize=1)
def get_fund_config() -> FundConfigEngine:
    engine = FundConfigEngine(CONFIG_DIR)
    engine.load_all()
    return engine


def get_site_origin(request: Request) -> str:
    return (settings.SITE_URL or str(request.base_url)).rstrip("/")


def require_session(
    request: Request,
    codec: SessionTokenCodec = Depends(get_session_codec),
) -> SessionClaim:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise SessionRequired("not_authenticated")

    claim = codec.verify_session_token(token)
    if claim is None:
        raise SessionRequired("invalid_session")
    return claim
