"""Shared HTTP client utilities — reusable httpx client."""

import httpx

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=15.0)
    return _client


async def close_shared_client() -> None:
    """Close the shared client if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None
