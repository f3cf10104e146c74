"""Monday.com GraphQL client.

Thin wrapper over the shared httpx client: one POST per query, errors
raised as MondayError subclasses so the caller decides how to report them.
"""

import logging
from typing import Any

from boardcheck.config import get_settings
from boardcheck.services.errors import MondayAPIError, MondayConfigError
from boardcheck.services.http_client import get_shared_client

logger = logging.getLogger(__name__)

_ME_QUERY = """
query {
  me {
    id
    name
  }
}
"""


def monday_headers() -> dict[str, str]:
    """Build Monday API request headers.

    Raises MondayConfigError when no API token is configured.
    """
    settings = get_settings()
    if not settings.monday_api_token:
        raise MondayConfigError("MONDAY_API_TOKEN is not configured")
    return {
        "Authorization": settings.monday_api_token,
        "Content-Type": "application/json",
        "API-Version": settings.monday_api_version,
    }


async def execute(
    query: str, variables: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Run a GraphQL query and return its ``data`` object."""
    settings = get_settings()
    headers = monday_headers()
    payload: dict[str, Any] = {"query": query}
    if variables:
        payload["variables"] = variables

    logger.debug("Monday query: %s... variables=%s", query.strip()[:100], variables)

    client = get_shared_client()
    resp = await client.post(settings.monday_api_url, headers=headers, json=payload)
    if resp.status_code != 200:
        raise MondayAPIError(
            f"Monday.com API error {resp.status_code}: {resp.reason_phrase}"
        )

    try:
        body = resp.json()
    except ValueError as e:
        raise MondayAPIError("Non-JSON response from Monday API") from e

    if not isinstance(body, dict):
        raise MondayAPIError("Unexpected Monday API response body")

    errors = body.get("errors")
    if errors:
        message = errors[0].get("message", "unknown error")
        raise MondayAPIError(f"Monday.com GraphQL errors: {message}")

    data = body.get("data")
    if data is None:
        raise MondayAPIError("Monday API returned no data")
    return data


async def check_connection() -> dict[str, Any]:
    """Probe the API with a ``me`` query. Never raises."""
    try:
        data = await execute(_ME_QUERY)
        name = (data.get("me") or {}).get("name", "")
        logger.info("Monday connection OK (user: %s)", name)
        return {"success": True, "user": name}
    except Exception as e:
        logger.warning("Monday connection test failed: %s", e)
        return {"success": False, "error": str(e) or "Unknown error"}
