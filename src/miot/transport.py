"""Per-request HTTP transports and response normalization.

A transport is built for exactly one request: it carries the target host,
port, TLS flag and timeout from :class:`~miot.models.HTTPConfig` plus the
request headers, opens its own httpx client, and reports either the response
text or the reason no text was received.
"""

from __future__ import annotations

import logging
from typing import Dict
from typing import Optional

import httpx

from miot.models import ApiResult
from miot.models import HTTPConfig
from miot.models import ResponseOutcome
from miot.utils import decode_json

logger = logging.getLogger(__name__)


class _TransportBase:
    """State shared by the sync and async transports."""

    def __init__(
        self,
        config: HTTPConfig,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Initialize transport.

        Args:
            config: HTTP configuration
            headers: Headers sent with the request
        """
        self.config = config
        self.headers: Dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": config.user_agent,
        }
        if headers:
            self.headers.update(headers)
        self._last_error = ""

    @property
    def last_error(self) -> str:
        """Why the last call produced no response text, empty otherwise."""
        return self._last_error

    def _client_options(self, body: Optional[str]) -> Dict[str, object]:
        headers = dict(self.headers)
        if body is not None:
            headers["Content-Type"] = "application/json"
        return {
            "base_url": self.config.base_url,
            "timeout": httpx.Timeout(self.config.timeout),
            "headers": headers,
        }

    def _fail(self, method: str, path: str, error: httpx.HTTPError) -> None:
        self._last_error = str(error) or error.__class__.__name__
        logger.debug(f"{method} {path} failed: {self._last_error}")

    def _response_text(self, method: str, path: str, response: httpx.Response) -> Optional[str]:
        logger.debug(f"{method} {path} -> {response.status_code}")

        if not response.text:
            self._last_error = f"Empty response body (HTTP {response.status_code})"
            return None
        self._last_error = ""
        return response.text


class MiotTransport(_TransportBase):
    """Synchronous single-use transport."""

    def __init__(
        self,
        config: HTTPConfig,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(config, headers)
        self._http_transport = http_transport

    def execute(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> Optional[str]:
        """Send the request.

        Args:
            method: HTTP method
            path: Request path
            params: Query parameters
            body: Serialized JSON body

        Returns:
            Response text, or None when no text was received (see ``last_error``)
        """
        try:
            with httpx.Client(
                transport=self._http_transport, **self._client_options(body)
            ) as client:
                response = client.request(method, path, params=params, content=body)
        except httpx.HTTPError as e:
            self._fail(method, path, e)
            return None

        return self._response_text(method, path, response)


class AsyncMiotTransport(_TransportBase):
    """Asynchronous single-use transport."""

    def __init__(
        self,
        config: HTTPConfig,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(config, headers)
        self._http_transport = http_transport

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> Optional[str]:
        """Send the request.

        Args:
            method: HTTP method
            path: Request path
            params: Query parameters
            body: Serialized JSON body

        Returns:
            Response text, or None when no text was received (see ``last_error``)
        """
        try:
            async with httpx.AsyncClient(
                transport=self._http_transport, **self._client_options(body)
            ) as client:
                response = await client.request(method, path, params=params, content=body)
        except httpx.HTTPError as e:
            self._fail(method, path, e)
            return None

        return self._response_text(method, path, response)


def decode_response(text: Optional[str], last_error: str = "") -> ApiResult:
    """Interpret the text returned by a transport.

    Args:
        text: Response text, None or empty when the transport failed
        last_error: Transport failure detail

    Returns:
        Result whose outcome tells a decoded value, a JSON null, an
        undecodable body and a missing body apart
    """
    if not text:
        return ApiResult(outcome=ResponseOutcome.TRANSPORT_ERROR, message=last_error)

    try:
        value = decode_json(text)
    except ValueError as e:
        logger.debug(f"Undecodable response body: {e}")
        return ApiResult(outcome=ResponseOutcome.DECODE_ERROR, message=str(e))

    if value is None:
        return ApiResult(outcome=ResponseOutcome.NULL)
    return ApiResult(outcome=ResponseOutcome.OK, value=value)
