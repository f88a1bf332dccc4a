"""
HTTP Transport

A shared httpx.AsyncClient for talking to the LMS API, plus a retry
helper with exponential backoff.

Retries are only safe for idempotent calls (GET, PUT of the same body);
callers decide which requests go through ``request_with_retry``.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx


logger = logging.getLogger(__name__)


# ============== Configuration ==============

DEFAULT_BASE_URL = "http://localhost:5000/api"

# Connection pool limits
MAX_CONNECTIONS = 20
MAX_KEEPALIVE_CONNECTIONS = 10
KEEPALIVE_EXPIRY = 30  # seconds

DEFAULT_TIMEOUT = 10.0  # seconds

# Retry configuration
MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 0.5  # seconds


# ============== Global Client Instance ==============

_http_client: Optional[httpx.AsyncClient] = None


def build_http_client(
    base_url: str = DEFAULT_BASE_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a client bound to an API base URL.

    Args:
        base_url: API root, including the /api prefix.
        transport: Optional transport (e.g. ``httpx.ASGITransport`` to
            talk to an in-process app).
    """
    limits = httpx.Limits(
        max_connections=MAX_CONNECTIONS,
        max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry=KEEPALIVE_EXPIRY,
    )
    return httpx.AsyncClient(
        base_url=base_url,
        limits=limits,
        timeout=httpx.Timeout(DEFAULT_TIMEOUT),
        transport=transport,
    )


def get_http_client(base_url: str = DEFAULT_BASE_URL) -> httpx.AsyncClient:
    """
    Get or create the process-wide client.

    The first call fixes the base URL.
    """
    global _http_client
    if _http_client is None:
        _http_client = build_http_client(base_url)
    return _http_client


async def close_http_client() -> None:
    """Close the process-wide client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


# ============== Request Helpers with Retry ==============

async def request_with_retry(
    method: str,
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    max_retries: int = MAX_RETRIES,
    **kwargs: Any,
) -> httpx.Response:
    """
    Make an HTTP request with automatic retry on failure.

    Uses exponential backoff between retries. 5xx responses and
    connection errors are retried; any other response is returned as-is.

    Args:
        method: HTTP method (GET, PUT, ...).
        url: Request URL, relative to the client's base URL.
        client: Client to use; defaults to the shared one.
        max_retries: Maximum number of retry attempts.
        **kwargs: Additional arguments passed to ``client.request``.

    Returns:
        httpx.Response: The last response received.

    Raises:
        httpx.TransportError: If every attempt fails to connect.
    """
    client = client or get_http_client()

    for attempt in range(max_retries + 1):
        try:
            response = await client.request(method, url, **kwargs)
        except (httpx.ConnectError, httpx.ReadTimeout, httpx.WriteTimeout) as exc:
            if attempt >= max_retries:
                raise
            wait_time = RETRY_BACKOFF_BASE * (2 ** attempt)
            logger.warning("%s %s failed (%s), retrying in %.2fs", method, url, exc, wait_time)
            await asyncio.sleep(wait_time)
            continue

        if response.status_code >= 500 and attempt < max_retries:
            wait_time = RETRY_BACKOFF_BASE * (2 ** attempt)
            logger.warning(
                "%s %s returned %d, retrying in %.2fs",
                method, url, response.status_code, wait_time,
            )
            await asyncio.sleep(wait_time)
            continue

        return response

    raise httpx.HTTPError(f"Request to {url} failed after {max_retries} retries")
