"""
HTTP Transport Unit Tests

Tests for the shared client and retry logic.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest


class TestHttpClient:
    """Tests for client construction."""

    @pytest.mark.asyncio
    async def test_get_http_client_returns_singleton(self):
        with patch("dynamix.client.transport._http_client", None):
            from dynamix.client.transport import get_http_client

            client1 = get_http_client()
            client2 = get_http_client()

            assert client1 is client2
            await client1.aclose()

    @pytest.mark.asyncio
    async def test_build_http_client_uses_base_url(self):
        from dynamix.client.transport import build_http_client

        async with build_http_client("http://lms.local/api") as client:
            assert str(client.base_url) == "http://lms.local/api/"


class TestRequestWithRetry:
    """Tests for retry logic."""

    @pytest.mark.asyncio
    async def test_retry_on_server_error(self):
        """Verify retry on 5xx status codes."""
        mock_response_fail = MagicMock()
        mock_response_fail.status_code = 503

        mock_response_success = MagicMock()
        mock_response_success.status_code = 200

        mock_client = AsyncMock()
        mock_client.request = AsyncMock(
            side_effect=[mock_response_fail, mock_response_success]
        )

        with patch("dynamix.client.transport.RETRY_BACKOFF_BASE", 0.01):
            from dynamix.client.transport import request_with_retry

            response = await request_with_retry("GET", "/courses", client=mock_client)

            assert response.status_code == 200
            assert mock_client.request.call_count == 2

    @pytest.mark.asyncio
    async def test_no_retry_on_client_error(self):
        """4xx responses are answers, not failures."""
        mock_response = MagicMock()
        mock_response.status_code = 404

        mock_client = AsyncMock()
        mock_client.request = AsyncMock(return_value=mock_response)

        from dynamix.client.transport import request_with_retry

        response = await request_with_retry("GET", "/courses/nope", client=mock_client)

        assert response.status_code == 404
        assert mock_client.request.call_count == 1

    @pytest.mark.asyncio
    async def test_returns_last_server_error_when_retries_exhausted(self):
        mock_response = MagicMock()
        mock_response.status_code = 500

        mock_client = AsyncMock()
        mock_client.request = AsyncMock(return_value=mock_response)

        with patch("dynamix.client.transport.RETRY_BACKOFF_BASE", 0.01):
            from dynamix.client.transport import request_with_retry

            response = await request_with_retry(
                "GET", "/courses", client=mock_client, max_retries=2
            )

            assert response.status_code == 500
            assert mock_client.request.call_count == 3

    @pytest.mark.asyncio
    async def test_raises_after_max_retries(self):
        """Verify exception after all retries exhausted."""
        mock_client = AsyncMock()
        mock_client.request = AsyncMock(side_effect=httpx.ConnectError("Connection failed"))

        with patch("dynamix.client.transport.RETRY_BACKOFF_BASE", 0.01):
            from dynamix.client.transport import request_with_retry

            with pytest.raises(httpx.ConnectError):
                await request_with_retry("GET", "/courses", client=mock_client, max_retries=2)

            assert mock_client.request.call_count == 3  # Initial + 2 retries
