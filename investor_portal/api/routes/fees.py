"""
Investor fee terms (authenticated).
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from investor_portal.api.dependencies import get_registry, require_session
from investor_portal.core.errors import IntegrationError
from investor_portal.domain.models import SessionClaim
from investor_portal.infrastructure.registry.airtable_registry import AirtableRegistry

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_fees(
    claim: SessionClaim = Depends(require_session),
    registry: AirtableRegistry = Depends(get_registry),
):
    try:
        fees = await registry.get_user_fees(claim.email)
    except IntegrationError as exc:
        logger.error("Fee lookup failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content={"ok": False, "error": "Investor registry is temporarily unavailable", "code": "registry_unavailable"},
        )

    if not fees.record_found:
        return {"ok": True, "fees": None, "recordFound": False, "message": "no_fee_record"}

    return {
        "ok": True,
        "recordFound": True,
        "fees": {
            "recordFound": True,
            "managementFeePct": fees.management_fee_pct,
            "carryPct": fees.carry_pct,
        },
        "missingMgmt": fees.missing_management_fee,
        "missingCarry": fees.missing_carry,
    }
