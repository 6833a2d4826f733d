"""Forum API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ForumError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and outbound channels initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: cleaner cleanup of the webhook client and engine
    - Frontend bundle mounted last so /api/* always wins over the SPA fallback
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import groups, health, jobs, threads, users, webhooks
from app.api.static import mount_frontend
from app.config import get_settings
from app.infrastructure.channels import close_channels, init_channels
from app.infrastructure.database import close_db, init_db
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_channels(settings)
    if not settings.whatsapp_webhook_url:
        logger.warning("WhatsApp webhook not configured; WhatsApp fan-out disabled")
    logger.info(f"Forum API started on port {settings.port}")
    yield
    await close_channels()
    await close_db()
    logger.info("Forum API shutting down")


app = FastAPI(title="Forum API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(groups.router)
app.include_router(threads.router)
app.include_router(webhooks.router)
app.include_router(jobs.router)

register_error_handlers(app)

# Built frontend, served when present
mount_frontend(app, settings.static_dir)


def run() -> None:
    """Console entry point: serve the API with uvicorn on PORT."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=get_settings().port)
