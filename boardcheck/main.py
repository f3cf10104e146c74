"""
Board Check API

Diagnostic FastAPI service for the Monday.com deals board integration.
"""

import logging
import time
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from boardcheck.config import get_settings
from boardcheck.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    install_request_id_logging,
)
from boardcheck.routers import column_check
from boardcheck.services.http_client import close_shared_client
from boardcheck.services.monday import check_connection

logger = logging.getLogger(__name__)

settings = get_settings()

install_request_id_logging()

# Health check cache: (result_dict, timestamp)
_health_cache: tuple[dict[str, Any], float] | None = None
_HEALTH_CACHE_TTL = 30  # seconds


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    yield
    await close_shared_client()


app = FastAPI(
    title="Board Check API",
    description="Diagnostics for the Monday.com deals board webhook",
    version="0.1.0",
    lifespan=lifespan,
)

# Security headers
app.add_middleware(SecurityHeadersMiddleware)

# Request ID (wraps the security headers middleware)
app.add_middleware(RequestIDMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)

# Routers
app.include_router(column_check.router, prefix="/api")


def _check_config() -> str:
    """Verify required Monday configuration is present. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.monday_api_token and s.monday_deals_board_id:
        return "ok"
    return "fail"


async def _run_health_checks() -> dict[str, Any]:
    """Run all health checks, returning the full response body."""
    global _health_cache
    now = time.time()
    if _health_cache is not None:
        cached_result, cached_at = _health_cache
        if now - cached_at < _HEALTH_CACHE_TTL:
            return cached_result

    config_status = _check_config()
    response_time_ms: int | None = None
    if config_status == "ok":
        started = time.monotonic()
        probe = await check_connection()
        response_time_ms = round((time.monotonic() - started) * 1000)
        monday_status = "ok" if probe["success"] else "fail"
    else:
        monday_status = "skipped"

    checks = {"config": config_status, "monday": monday_status}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    result: dict[str, Any] = {
        "status": overall,
        "service": "boardcheck-api",
        "version": "0.1.0",
        "checks": checks,
        "monday_response_time_ms": response_time_ms,
    }
    _health_cache = (result, now)
    return result


@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check verifying configuration and Monday API reachability."""
    result = await _run_health_checks()
    return JSONResponse(content=result, status_code=200)
