"""MIoT Python SDK - client implementation.

Client for the MIoT smart-home open API with:
- One method per REST endpoint (devices, properties, actions, scenes, homes,
  property-change subscriptions)
- App-Id / Access-Token / Spec-NS authentication headers on every call
- A fresh transport per request, no shared mutable state
- Synchronous and asyncio flavours with identical semantics

Every endpoint method returns the decoded JSON value, ``False`` when the body
is JSON ``null`` or not JSON, or ``{"status": "-705002036", "message": ...}``
when no response text was received. Transport failures never raise; use
:meth:`MiotClient.request` for the unambiguous :class:`ApiResult`.
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from . import endpoints
from .env_config import load_config_from_env
from .errors import MiotConfigurationError
from .models import (
    ApiResult,
    ClientConfig,
    Credentials,
    DEFAULT_SPEC_NS,
    EndpointCall,
    HTTPConfig,
    HTTPMethod,
)
from .transport import AsyncMiotTransport, MiotTransport, decode_response
from .utils import IdList, query_params, request_body

logger = logging.getLogger(__name__)

Voice = Optional[Union[str, Mapping[str, Any]]]


class _ClientBase:
    """Configuration handling shared by the sync and async clients."""

    def __init__(
        self,
        app_id: Optional[str] = None,
        access_token: Optional[str] = None,
        spec_ns: str = DEFAULT_SPEC_NS,
        *,
        http_config: Optional[HTTPConfig] = None,
        config: Optional[ClientConfig] = None,
        http_transport: Optional[Union[httpx.BaseTransport, httpx.AsyncBaseTransport]] = None,
    ):
        """Initialize client.

        Args:
            app_id: App-Id issued by the open platform
            access_token: OAuth access token obtained by the caller; the OAuth
                application must use the same App-Id
            spec_ns: Spec namespace, must be miot-spec-v2
            http_config: Host, port, TLS and timeout settings
            config: Complete configuration object (takes precedence)
            http_transport: Optional httpx transport handed to every
                per-request client

        Raises:
            MiotConfigurationError: Missing or invalid credentials
        """
        if config is None:
            try:
                credentials = Credentials(
                    app_id=app_id or "",
                    access_token=access_token or "",
                    spec_ns=spec_ns,
                )
            except ValidationError as e:
                fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
                raise MiotConfigurationError(
                    "app_id and access_token are required",
                    details={"fields": fields},
                ) from e
            config = ClientConfig(credentials=credentials, http=http_config or HTTPConfig())

        self._config = config
        self._http_transport = http_transport

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **kwargs):
        """Create a client from ``MIOT_*`` environment variables.

        Args:
            dotenv_path: Optional .env file to load first
            **kwargs: Passed to the constructor (e.g. ``http_transport``)
        """
        config = load_config_from_env(dotenv_path)
        if config.log_level:
            logging.getLogger("miot").setLevel(config.log_level)
        return cls(config=config, **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def credentials(self) -> Credentials:
        return self._config.credentials

    def _log_call(self, call: EndpointCall) -> None:
        logger.debug(f"Dispatching {call.method} {call.path}")


class MiotClient(_ClientBase):
    """Synchronous MIoT API client.

    Example:
        ```python
        from miot import MiotClient

        client = MiotClient(app_id="your-app-id", access_token="your-token")

        devices = client.devices(compact=True)
        values = client.properties(["AAAD.1.1", "AAAD.2.3"])
        client.set_properties({"properties": [{"pid": "AAAD.1.1", "value": True}]})
        ```
    """

    def _http_client(self) -> MiotTransport:
        return MiotTransport(
            self._config.http,
            headers=self.credentials.headers(),
            http_transport=self._http_transport,
        )

    def request(self, call: EndpointCall) -> ApiResult:
        """Dispatch a call and classify the response.

        Args:
            call: Shaped endpoint call

        Returns:
            Result with the decoded value or the failure outcome
        """
        self._log_call(call)
        transport = self._http_client()
        text = transport.execute(call.method, call.path, params=call.query, body=call.body)
        return decode_response(text, transport.last_error)

    def _dispatch(self, call: EndpointCall) -> Any:
        return self.request(call).unwrap()

    # Generic verbs
    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``path`` with ``params`` in the query string."""
        return self._dispatch(
            EndpointCall(method=HTTPMethod.GET, path=path, query=query_params(params))
        )

    def post(self, path: str, data: Any = None) -> Any:
        """POST ``data`` as JSON. Strings are sent as they are."""
        return self._dispatch(
            EndpointCall(method=HTTPMethod.POST, path=path, body=request_body(data))
        )

    def put(self, path: str, data: Any = None) -> Any:
        """PUT ``data`` as JSON. Strings are sent as they are."""
        return self._dispatch(
            EndpointCall(method=HTTPMethod.PUT, path=path, body=request_body(data))
        )

    def delete(self, path: str, data: Any = None) -> Any:
        """DELETE with ``data`` as JSON body. Strings are sent as they are."""
        return self._dispatch(
            EndpointCall(method=HTTPMethod.DELETE, path=path, body=request_body(data))
        )

    # Devices
    def devices(self, compact: bool = False) -> Any:
        """List abstract devices.

        Args:
            compact: Only read the minimal device description
        """
        return self._dispatch(endpoints.devices(compact))

    def device_information(self, dids: IdList) -> Any:
        """Read information for one or more devices.

        Args:
            dids: Device ids as a list or a comma-separated string
        """
        return self._dispatch(endpoints.device_information(dids))

    # Properties and actions
    def properties(self, pid: IdList, voice: Voice = None) -> Any:
        """Read one or more properties.

        Args:
            pid: Property ids as a list or a comma-separated string
            voice: Voice recognition context, passed through
        """
        return self._dispatch(endpoints.properties(pid, voice))

    def set_properties(self, data: Any) -> Any:
        """Write properties.

        Args:
            data: Request body as structured data, a model or a JSON string

        Raises:
            MiotJsonError: ``data`` is a string that is not valid JSON
        """
        return self._dispatch(endpoints.set_properties(data))

    def invoke_actions(self, data: Any) -> Any:
        """Invoke one action on one device.

        Args:
            data: Request body as structured data, a model or a JSON string

        Raises:
            MiotJsonError: ``data`` is a string that is not valid JSON
        """
        return self._dispatch(endpoints.invoke_actions(data))

    # Scenes and homes
    def scenes(self) -> Any:
        """Read the scenes the user configured in the Mi Home app."""
        return self._dispatch(endpoints.scenes())

    def trigger_scene(self, scene_id: Union[str, int]) -> Any:
        return self._dispatch(endpoints.trigger_scene(scene_id))

    def homes(self) -> Any:
        return self._dispatch(endpoints.homes())

    # Subscriptions
    def subscribe(self, properties: Any, receiver_url: str) -> Any:
        """Subscribe to property changes delivered to ``receiver_url``.

        Returns:
            The multi-status envelope, see :class:`SubscriptionResult`
        """
        return self._dispatch(endpoints.subscribe(properties, receiver_url))

    def unsubscribe(self, properties: Any) -> Any:
        return self._dispatch(endpoints.unsubscribe(properties))

    subscript = subscribe
    un_subscript = unsubscribe


class AsyncMiotClient(_ClientBase):
    """Asynchronous MIoT API client, same semantics as :class:`MiotClient`.

    Example:
        ```python
        client = AsyncMiotClient(app_id="your-app-id", access_token="your-token")
        homes = await client.homes()
        ```
    """

    def _http_client(self) -> AsyncMiotTransport:
        return AsyncMiotTransport(
            self._config.http,
            headers=self.credentials.headers(),
            http_transport=self._http_transport,
        )

    async def request(self, call: EndpointCall) -> ApiResult:
        """Dispatch a call and classify the response."""
        self._log_call(call)
        transport = self._http_client()
        text = await transport.execute(call.method, call.path, params=call.query, body=call.body)
        return decode_response(text, transport.last_error)

    async def _dispatch(self, call: EndpointCall) -> Any:
        result = await self.request(call)
        return result.unwrap()

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._dispatch(
            EndpointCall(method=HTTPMethod.GET, path=path, query=query_params(params))
        )

    async def post(self, path: str, data: Any = None) -> Any:
        return await self._dispatch(
            EndpointCall(method=HTTPMethod.POST, path=path, body=request_body(data))
        )

    async def put(self, path: str, data: Any = None) -> Any:
        return await self._dispatch(
            EndpointCall(method=HTTPMethod.PUT, path=path, body=request_body(data))
        )

    async def delete(self, path: str, data: Any = None) -> Any:
        return await self._dispatch(
            EndpointCall(method=HTTPMethod.DELETE, path=path, body=request_body(data))
        )

    async def devices(self, compact: bool = False) -> Any:
        return await self._dispatch(endpoints.devices(compact))

    async def device_information(self, dids: IdList) -> Any:
        return await self._dispatch(endpoints.device_information(dids))

    async def properties(self, pid: IdList, voice: Voice = None) -> Any:
        return await self._dispatch(endpoints.properties(pid, voice))

    async def set_properties(self, data: Any) -> Any:
        """Write properties. Raises MiotJsonError for a malformed JSON string."""
        return await self._dispatch(endpoints.set_properties(data))

    async def invoke_actions(self, data: Any) -> Any:
        """Invoke one action. Raises MiotJsonError for a malformed JSON string."""
        return await self._dispatch(endpoints.invoke_actions(data))

    async def scenes(self) -> Any:
        return await self._dispatch(endpoints.scenes())

    async def trigger_scene(self, scene_id: Union[str, int]) -> Any:
        return await self._dispatch(endpoints.trigger_scene(scene_id))

    async def homes(self) -> Any:
        return await self._dispatch(endpoints.homes())

    async def subscribe(self, properties: Any, receiver_url: str) -> Any:
        return await self._dispatch(endpoints.subscribe(properties, receiver_url))

    async def unsubscribe(self, properties: Any) -> Any:
        return await self._dispatch(endpoints.unsubscribe(properties))

    subscript = subscribe
    un_subscript = unsubscribe


def create_client(
    app_id: str,
    access_token: str,
    spec_ns: str = DEFAULT_SPEC_NS,
    **kwargs: Any,
) -> MiotClient:
    """Factory function to create a MIoT client.

    Args:
        app_id: App-Id issued by the open platform
        access_token: OAuth access token
        spec_ns: Spec namespace
        **kwargs: Additional constructor options

    Returns:
        MiotClient instance
    """
    return MiotClient(app_id, access_token, spec_ns, **kwargs)


def create_async_client(
    app_id: str,
    access_token: str,
    spec_ns: str = DEFAULT_SPEC_NS,
    **kwargs: Any,
) -> AsyncMiotClient:
    """Factory function to create an asyncio MIoT client."""
    return AsyncMiotClient(app_id, access_token, spec_ns, **kwargs)
