"""Engagement FastAPI application.

Serves campaign authoring and triggers, notification dispatch and reads,
recipient directory sync, and the live notification WebSocket. Every HTTP
request runs inside the engagement domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from engagement.config import get_setting
from engagement.domain import engagement
from engagement.utils.logging import add_context, clear_context

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the domain.toml overlay ("test", "production").
engagement.init()

from engagement.api import (  # noqa: E402
    campaign_router,
    notification_router,
    realtime_router,
    recipient_router,
)
from engagement.campaign.scheduler import CampaignScheduler  # noqa: E402

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the campaign scheduler alongside the web process when enabled."""
    scheduler = None
    if get_setting("scheduler_enabled"):
        scheduler = CampaignScheduler(engagement)
        scheduler.start()
        logger.info("In-process campaign scheduler enabled", interval=scheduler.interval)

    yield

    if scheduler is not None:
        scheduler.stop(timeout=5)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Engagement API",
    description="Campaign delivery and real-time notification fan-out",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the engagement domain context for each request."""
    add_context(method=request.method, path=request.url.path)
    try:
        with engagement.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(campaign_router)
app.include_router(notification_router)
app.include_router(recipient_router)
app.include_router(realtime_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    from engagement.realtime.registry import get_registry

    return JSONResponse(
        content={
            "status": "ok",
            "domain": engagement.name,
            "live_connections": get_registry().connection_count(),
        }
    )
