"""
API routes for the mail relay service.

Serves health checks and previews of relayed emails cached by the
Telegram notification sender.
"""

import html
from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, PlainTextResponse
from loguru import logger
from pydantic import BaseModel

from mailrelay.application.ports.mail_cache import MailCache
from mailrelay.infrastructure import get_redis_client, get_settings
from mailrelay.infrastructure.stores import get_mail_cache

router = APIRouter()


# ============================================================================
# Response Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response with service status."""

    status: str
    timestamp: str
    services: dict[str, str]


# ============================================================================
# Health
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=get_settings().app_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def ready() -> ReadinessResponse:
    """Readiness probe, reports the status backend."""
    redis = await get_redis_client().health_check()
    status = "ready" if redis["status"] in ("healthy", "disabled") else "degraded"
    return ReadinessResponse(
        status=status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        services={"redis": redis["status"]},
    )


# ============================================================================
# Mail preview
# ============================================================================


@router.get("/email/{mail_id}")
async def preview_email(
    mail_id: str,
    mode: Literal["text", "html"] = Query("text"),
    cache: MailCache = Depends(get_mail_cache),
):
    """Render a cached email as plain text or HTML."""
    mail = await cache.get(mail_id)
    if mail is None:
        logger.debug(f"Preview requested for unknown or expired mail {mail_id}")
        raise HTTPException(status_code=404, detail="Email not found")

    if mode == "html":
        return HTMLResponse(mail.html or f"<pre>{html.escape(mail.text or '')}</pre>")
    return PlainTextResponse(mail.text or "")
