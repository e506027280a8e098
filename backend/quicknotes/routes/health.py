"""
QuickNotes Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and container probes.
How:   Checks the note store (SELECT 1) and the summarizer, returns status.

Status levels:
    - healthy:   Store reachable and summarizer available
    - degraded:  Store reachable, summarizer disabled or unreachable
                 (only the summarize endpoint is affected)
    - unhealthy: Store unreachable
"""

import logging
import time

from fastapi import APIRouter

from quicknotes import __version__
from quicknotes.database import check_connection
from quicknotes.schemas.note import HealthResponse
from quicknotes.services.gemini_service import summarizer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    summarizer_status = "available"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        await check_connection()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Summarizer ──────────────────────────────────────────────────
    if not summarizer.is_configured:
        summarizer_status = "disabled"
    elif not await summarizer.health_check():
        summarizer_status = "unavailable"

    if summarizer_status != "available" and overall != "unhealthy":
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        summarizer=summarizer_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
