import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from taste.api import archetypes, badges, health, mirror, recommendations
from taste.core.config import settings, validate_config
from taste.core.database import create_all_tables
from taste.core.errors import (
    AppError,
    app_error_handler,
    http_error_handler,
    unhandled_exception_handler,
)
from taste.core.logging import configure_logging
from taste.core.middleware.request_id import RequestIdMiddleware
from taste.features.session.registry import close_sessions

configure_logging(settings.ENV)
validate_config(strict=getattr(settings, "CONFIG_STRICT", False))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("taste")
    logger.info("Starting taste backend...")
    app.state.startup_time = time.time()
    if settings.BADGE_STORE == "sql":
        create_all_tables()
    try:
        yield
    finally:
        await close_sessions()
        logger.info("Stopping taste backend...")


app = FastAPI(title="Taste - Backend", lifespan=lifespan)

# Middlewares
app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(HTTPException, http_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# CORS (adjust origins in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8081"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["health"])
app.include_router(archetypes.router, tags=["archetypes"])
app.include_router(mirror.router, tags=["mirror"])
app.include_router(badges.router, tags=["badges"])
app.include_router(recommendations.router, tags=["recommendations"])
