# services/rest_client.py
import logging
from typing import Any, Dict, Optional

import httpx

from utils.config import load_config, get_api_timeout

config = load_config()
API_TIMEOUT = get_api_timeout(config)

logger = logging.getLogger(__name__)


class RestHttpClient:
    """
    Thin async REST facade over httpx.

    Every request carries a JSON content type; callers pass the full
    Authorization header value (e.g. "Bearer <token>") when one is needed.
    """

    def __init__(self, default_headers: Optional[Dict[str, str]] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.default_headers = {"Content-Type": "application/json"}
        if default_headers:
            self.default_headers.update(default_headers)
        # Injected transport (e.g. httpx.MockTransport) replaces the network in tests
        self.transport = transport

    def _headers(self, authorization_header: Optional[str]) -> Dict[str, str]:
        headers = dict(self.default_headers)
        if authorization_header:
            headers["Authorization"] = authorization_header
        return headers

    async def _send_request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Any] = None,
        authorization_header: Optional[str] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(transport=self.transport, timeout=API_TIMEOUT) as client:
            resp = await client.request(
                method,
                endpoint,
                json=payload,
                headers=self._headers(authorization_header),
            )
        logger.info(f"{method} {endpoint} -> {resp.status_code}")
        return resp

    async def send_post_request(self, endpoint: str, payload: Optional[Any] = None, authorization_header: Optional[str] = None) -> httpx.Response:
        return await self._send_request("POST", endpoint, payload, authorization_header)

    async def send_patch_request(self, endpoint: str, payload: Any, authorization_header: Optional[str] = None) -> httpx.Response:
        return await self._send_request("PATCH", endpoint, payload, authorization_header)

    async def send_get_request(self, endpoint: str, authorization_header: Optional[str] = None) -> httpx.Response:
        return await self._send_request("GET", endpoint, None, authorization_header)

    async def send_delete_request(self, endpoint: str, authorization_header: Optional[str] = None) -> httpx.Response:
        return await self._send_request("DELETE", endpoint, None, authorization_header)
