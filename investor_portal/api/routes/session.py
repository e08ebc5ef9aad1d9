"""
Session identity route.
"""

from fastapi import APIRouter, Depends

from investor_portal.api.dependencies import get_user_directory, require_session
from investor_portal.domain.models import SessionClaim
from investor_portal.domain.services.user_directory import UserDirectory

router = APIRouter()


@router.get("/identity")
async def get_identity(
    claim: SessionClaim = Depends(require_session),
    directory: UserDirectory = Depends(get_user_directory),
):
    profile = directory.resolve_user_profile(email=claim.email, user_id=claim.user_id)
    return {
        "userId": profile.user_id,
        "email": profile.email,
        "profile": {
            "userId": profile.user_id,
            "email": profile.email,
            "name": profile.name,
            "organization": profile.organization,
            "role": profile.role,
        },
    }
