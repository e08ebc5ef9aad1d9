"""
Magic-link Authentication Routes

Flow:
- POST /request-magic-link → registry check, token issued, link emailed
- GET  /verify?token=...   → token redeemed once, session cookie set
- POST /logout             → session cookie cleared
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from investor_portal.api.dependencies import get_login_service, get_site_origin
from investor_portal.config import settings
from investor_portal.domain.services.login_service import LoginService

logger = logging.getLogger(__name__)
router = APIRouter()


def _login_redirect(origin: str, status: str) -> RedirectResponse:
    return RedirectResponse(url=f"{origin}/login?status={status}", status_code=307)


@router.post("/request-magic-link")
async def request_magic_link(
    request: Request,
    service: LoginService = Depends(get_login_service),
):
    """
    Email a single-use login link to a registered investor.

    Error codes: invalid (400), unauthorized (403),
    registry_unavailable / email_failed (503), config / server (500).
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    outcome = await service.request_magic_link(payload, origin=get_site_origin(request))
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_body())


@router.get("/verify")
async def verify_magic_link(
    request: Request,
    token: Optional[str] = None,
    service: LoginService = Depends(get_login_service),
):
    origin = get_site_origin(request)
    outcome = await service.verify_magic_link(token)
    if not outcome.ok:
        return _login_redirect(origin, outcome.status)

    response = RedirectResponse(url=f"{origin}/", status_code=307)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=outcome.session_token,
        max_age=settings.SESSION_TTL_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return response


@router.post("/logout")
async def logout():
    response = JSONResponse(content={"success": True})
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return response
