"""
SendGrid transactional email sender.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from investor_portal.core.errors import ConfigurationError
from investor_portal.infrastructure.http import classify_response, classify_transport_error
from investor_portal.utils.retry import retry_async

logger = logging.getLogger(__name__)

SERVICE = "email"
SUBJECT = "Your secure access link"
EXPIRY_NOTE = "This link expires in 15 minutes and can be used once."


def build_magic_link_payload(to: str, magic_link: str, from_email: str, from_name: str) -> dict:
    html = (
        '<p style="font-size:16px; line-height:1.5;">Your secure login link:</p>'
        '<p style="font-size:16px; line-height:1.5;">'
        f'<a href="{magic_link}" style="color:#0ea5e9;">Access the {from_name} portal</a>'
        "</p>"
        f'<p style="font-size:14px; color:#64748b;">{EXPIRY_NOTE}</p>'
    )
    return {
        "personalizations": [{"to": [{"email": to}], "subject": SUBJECT}],
        "from": {"email": from_email, "name": from_name},
        "content": [
            {"type": "text/plain", "value": f"Your secure login link: {magic_link}\n\n{EXPIRY_NOTE}"},
            {"type": "text/html", "value": html},
        ],
    }


class SendGridEmailSender:

    def __init__(
        self,
        api_key: Optional[str],
        from_email: str,
        from_name: str = "JBV Capital",
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        timeout_seconds: float = 8.0,
        retries: int = 2,
        backoff_seconds: float = 0.2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.retries = retries
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError("SENDGRID_API_KEY")
        if not self.from_email:
            raise ConfigurationError("SENDGRID_FROM_EMAIL")

    async def send_magic_link_email(self, to: str, magic_link: str) -> None:
        self.ensure_configured()

        payload = build_magic_link_payload(to, magic_link, self.from_email, self.from_name)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async def attempt(n: int) -> None:
            try:
                async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                    response = await client.post(self.api_url, json=payload, headers=headers)
            except httpx.HTTPError as exc:
                raise classify_transport_error(SERVICE, exc, "Email send") from exc
            if not response.is_success:
                logger.error("SendGrid request failed (attempt %s): status %s", n, response.status_code)
            classify_response(SERVICE, response, "Email send")

        await retry_async(
            attempt,
            retries=self.retries,
            base_delay=self.backoff_seconds,
        )
