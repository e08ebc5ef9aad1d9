from fastapi import APIRouter, Depends

from investor_portal.api.dependencies import get_magic_link_store
from investor_portal.infrastructure.token_store import MagicLinkStore

router = APIRouter()


@router.get("/health")
async def health(store: MagicLinkStore = Depends(get_magic_link_store)):
    return {"status": "ok", "token_store": store.backend}
