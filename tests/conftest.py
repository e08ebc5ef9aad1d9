from typing import AsyncGenerator, Dict, List, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from investor_portal.api import dependencies
from investor_portal.core.errors import IntegrationError
from investor_portal.domain.models import FeeTerms
from investor_portal.domain.services.identity import normalize_email
from investor_portal.domain.services.login_service import LoginService
from investor_portal.domain.services.session_codec import SessionTokenCodec
from investor_portal.infrastructure.token_store import InMemoryMagicLinkStore
import investor_portal.main as app_main

TEST_SECRET = "unit-test-secret-0123456789abcdef-0123456789"
REGISTERED_EMAIL = "investor@example.com"


class FakeClock:
    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


class FakeRegistry:
    """In-memory stand-in for the Airtable registry."""

    def __init__(self, emails=(REGISTERED_EMAIL,), fees: Optional[Dict[str, FeeTerms]] = None):
        self.emails = {normalize_email(e) for e in emails}
        self.fees = fees or {}
        self.fail_with: Optional[Exception] = None
        self.lookups: List[str] = []

    def ensure_configured(self) -> None:
        return None

    async def is_authorized_email(self, email: str) -> bool:
        self.lookups.append(email)
        if self.fail_with:
            raise self.fail_with
        return normalize_email(email) in self.emails

    async def get_user_fees(self, email: str) -> FeeTerms:
        if self.fail_with:
            raise self.fail_with
        return self.fees.get(normalize_email(email), FeeTerms(record_found=False))


class FakeEmailSender:
    def __init__(self):
        self.sent: List[dict] = []
        self.fail_with: Optional[Exception] = None

    def ensure_configured(self) -> None:
        return None

    async def send_magic_link_email(self, to: str, magic_link: str) -> None:
        if self.fail_with:
            raise self.fail_with
        self.sent.append({"to": to, "magic_link": magic_link})


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def token_store(clock) -> InMemoryMagicLinkStore:
    return InMemoryMagicLinkStore(ttl_seconds=15 * 60, clock=clock)


@pytest.fixture()
def codec() -> SessionTokenCodec:
    return SessionTokenCodec(TEST_SECRET, ttl_seconds=60 * 60 * 24)


@pytest.fixture()
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture()
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture()
def login_service(registry, email_sender, token_store, codec) -> LoginService:
    return LoginService(
        registry=registry,
        email_sender=email_sender,
        token_store=token_store,
        codec_factory=lambda: codec,
    )


@pytest.fixture()
def registry_outage() -> IntegrationError:
    return IntegrationError("registry", "Registry lookup failed", status_code=503)


@pytest.fixture()
def app(login_service, registry, token_store, codec, monkeypatch) -> FastAPI:
    application = app_main.app
    monkeypatch.setattr(dependencies.settings, "SITE_URL", "https://portal.example.com")

    application.dependency_overrides[dependencies.get_login_service] = lambda: login_service
    application.dependency_overrides[dependencies.get_registry] = lambda: registry
    application.dependency_overrides[dependencies.get_magic_link_store] = lambda: token_store
    application.dependency_overrides[dependencies.get_session_codec] = lambda: codec

    yield application

    application.dependency_overrides.clear()


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://portal.example.com") as ac:
        yield ac
