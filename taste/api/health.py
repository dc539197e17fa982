"""Liveness endpoint."""

import logging

from fastapi import APIRouter

from taste.core.logging import get_request_id

logger = logging.getLogger("taste")

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    logger.debug("healthz", extra={"request_id": get_request_id()})
    return {"status": "ok"}
