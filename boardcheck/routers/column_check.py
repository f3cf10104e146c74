"""Deals board column check endpoint."""

import logging
import traceback
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from boardcheck.config import get_settings
from boardcheck.middleware import current_request_id
from boardcheck.services.column_check import run_column_check

router = APIRouter(prefix="/check-deals-board", tags=["diagnostics"])
logger = logging.getLogger(__name__)


def _error_body(exc: Exception) -> dict[str, Any]:
    body: dict[str, Any] = {
        "ERROR": True,
        "message": str(exc) or "Unknown error",
        "requestId": current_request_id(),
    }
    if get_settings().expose_error_stack:
        body["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return body


@router.api_route("", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def check_deals_board() -> JSONResponse:
    """Report which status column the stage webhook should be using."""
    try:
        report = await run_column_check()
    except Exception as e:
        logger.exception("Deals board column check failed")
        return JSONResponse(status_code=500, content=_error_body(e))
    return JSONResponse(content=report.to_response())
