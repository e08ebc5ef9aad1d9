"""
FastAPI Main Application
Investor portal API: magic-link login, sessions and scenario calculators
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from investor_portal.config import settings
from investor_portal.core.errors import ConfigurationError
from investor_portal.core.logging import get_logger, setup_logging
from investor_portal.api.dependencies import SessionRequired, get_fund_config, get_user_directory
from investor_portal.infrastructure.token_store import close_token_store, get_token_store
from investor_portal.api.routes import auth, fees, funds, health, scenarios, session

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Loads fund config and the token store; releases the store on shutdown
    """
    logger.info("=" * 60)
    logger.info("Starting investor portal (%s)", settings.APP_ENV)
    logger.info("=" * 60)

    fund_config = get_fund_config()
    logger.info("Fund models loaded: %s", ", ".join(fund_config.companies))

    store = get_token_store()
    logger.info("Magic link store: %s", store.backend)
    if store.backend == "memory":
        logger.warning("In-memory magic link store is only valid for a single worker process")

    logger.info("User directory entries: %s", len(get_user_directory()))
    if not settings.AUTH_SECRET:
        logger.warning("AUTH_SECRET is not set; logins will fail with a configuration error")

    yield

    logger.info("Shutting down investor portal...")
    await close_token_store()
    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="JBV Investor Portal",
    description="Magic-link investor access and return scenario calculators",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------------------------
# Exception handlers
# -------------------------------------------------------------------

@app.exception_handler(SessionRequired)
async def session_required_handler(request: Request, exc: SessionRequired):
    return JSONResponse(status_code=401, content={"ok": False, "error": exc.error})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Service misconfigured", "code": "config"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Unable to process request", "code": "server"})


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "JBV Investor Portal API",
        "version": "1.0.0",
        "docs": "/docs",
    }


app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(session.router, prefix="/api/session", tags=["Session"])
app.include_router(fees.router, prefix="/api/fees", tags=["Fees"])
app.include_router(scenarios.router, prefix="/api/scenarios", tags=["Scenarios"])
app.include_router(funds.router, prefix="/api/funds", tags=["Funds"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("investor_portal.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
