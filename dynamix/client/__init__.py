"""
Async Python client for the LMS API.
"""

from dynamix.client.cache import EntityCache
from dynamix.client.store import ClientError, ClientStore
from dynamix.client.transport import build_http_client, request_with_retry

__all__ = [
    "EntityCache",
    "ClientError",
    "ClientStore",
    "build_http_client",
    "request_with_retry",
]
