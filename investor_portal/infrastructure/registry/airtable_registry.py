"""
Airtable investor registry.
Authorisation lookups and per-investor fee terms.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from investor_portal.core.errors import ConfigurationError, IntegrationError
from investor_portal.domain.models import FeeTerms
from investor_portal.domain.services.identity import normalize_email
from investor_portal.infrastructure.http import classify_response, classify_transport_error
from investor_portal.utils.retry import retry_async

logger = logging.getLogger(__name__)

SERVICE = "registry"
EMAIL_FIELD = "Email"
MANAGEMENT_FEE_FIELD = "Management Fee"
CARRY_FIELD = "Carry"


def escape_formula_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _as_fraction(value) -> Optional[float]:
    """Registry rows hold either 0.05 or 5 for five percent."""
    if value is None or value == "":
        return None
    try:
        number = float(str(value).strip().rstrip("%"))
    except ValueError:
        return None
    return number / 100.0 if number > 1 else number


class AirtableRegistry:
    """
    Investor registry backed by one Airtable table.
    Errors: ConfigurationError before any call, IntegrationError after retries.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_id: Optional[str],
        table_id: Optional[str],
        api_url: str = "https://api.airtable.com/v0",
        timeout_seconds: float = 8.0,
        retries: int = 2,
        backoff_seconds: float = 0.2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_id = base_id
        self.table_id = table_id
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retries = retries
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError("AIRTABLE_API_KEY")
        if not self.base_id:
            raise ConfigurationError("AIRTABLE_BASE_ID")
        if not self.table_id:
            raise ConfigurationError("AIRTABLE_TABLE_ID")

    async def _find_record(self, email: str) -> Optional[dict]:
        self.ensure_configured()

        normalized = normalize_email(email)
        formula = f"LOWER(TRIM({{{EMAIL_FIELD}}}))='{escape_formula_value(normalized)}'"
        url = f"{self.api_url}/{self.base_id}/{self.table_id}"
        params = {"maxRecords": "1", "filterByFormula": formula}
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async def attempt(n: int) -> dict:
            try:
                async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                    response = await client.get(url, params=params, headers=headers)
            except httpx.HTTPError as exc:
                raise classify_transport_error(SERVICE, exc, "Registry lookup") from exc
            if not response.is_success:
                logger.error("Registry lookup failed (attempt %s): status %s", n, response.status_code)
            classify_response(SERVICE, response, "Registry lookup")
            try:
                return response.json()
            except ValueError as exc:
                raise IntegrationError(
                    SERVICE, "Registry returned an unreadable response", status_code=response.status_code
                ) from exc

        payload = await retry_async(
            attempt,
            retries=self.retries,
            base_delay=self.backoff_seconds,
        )
        records = payload.get("records") if isinstance(payload, dict) else None
        if isinstance(records, list) and records:
            return records[0]
        return None

    async def is_authorized_email(self, email: str) -> bool:
        return await self._find_record(email) is not None

    async def get_user_fees(self, email: str) -> FeeTerms:
        record = await self._find_record(email)
        if record is None:
            return FeeTerms(record_found=False)

        fields = record.get("fields") or {}
        return FeeTerms(
            record_found=True,
            management_fee_pct=_as_fraction(fields.get(MANAGEMENT_FEE_FIELD)),
            carry_pct=_as_fraction(fields.get(CARRY_FIELD)),
        )
