"""Pydantic models for MIoT API configuration, requests and results."""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

DEFAULT_SPEC_NS = "miot-spec-v2"
DEFAULT_HOST = "api.home.mi.com"
DEFAULT_USER_AGENT = "miot-api-python/1.0.0"

# Status reported when the transport produced no response text at all
TRANSPORT_ERROR_STATUS = "-705002036"


class MiotBaseModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        # Use enum values instead of enum objects
        use_enum_values=True,
        # Allow population by field name and alias
        populate_by_name=True,
        # Forbid extra fields unless explicitly allowed
        extra="forbid",
    )


# ============================================================================
# Enums
# ============================================================================

class HTTPMethod(str, Enum):
    """HTTP methods used by the MIoT API."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Topic(str, Enum):
    """Subscription topics."""
    PROPERTIES_CHANGED = "properties-changed"


class ResponseOutcome(str, Enum):
    """How a response text was interpreted."""
    OK = "ok"
    NULL = "null"
    DECODE_ERROR = "decode_error"
    TRANSPORT_ERROR = "transport_error"


# ============================================================================
# Configuration Models
# ============================================================================

class Credentials(MiotBaseModel):
    """Application credentials sent with every request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    app_id: str = Field(..., min_length=1, description="App-Id issued by the open platform")
    access_token: str = Field(..., min_length=1, description="OAuth access token", repr=False)
    spec_ns: str = Field(DEFAULT_SPEC_NS, min_length=1, description="Spec namespace")

    def headers(self) -> Dict[str, str]:
        """Authentication headers for a request."""
        return {
            "App-Id": self.app_id,
            "Access-Token": self.access_token,
            "Spec-NS": self.spec_ns,
        }


class HTTPConfig(MiotBaseModel):
    """HTTP transport configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = Field(DEFAULT_HOST, min_length=1, description="API host")
    port: int = Field(443, gt=0, le=65535, description="API port")
    use_tls: bool = Field(True, description="Connect over HTTPS")
    timeout: float = Field(10.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User agent string")

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_tls else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ClientConfig(MiotBaseModel):
    """Complete client configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    credentials: Credentials = Field(..., description="Authentication credentials")
    http: HTTPConfig = Field(default_factory=HTTPConfig, description="HTTP configuration")
    log_level: Optional[str] = Field(None, description="Level applied to the miot logger")


# ============================================================================
# Request Models
# ============================================================================

class EndpointCall(MiotBaseModel):
    """A fully shaped request against one endpoint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HTTPMethod = Field(..., description="HTTP method")
    path: str = Field(..., description="Request path")
    query: Optional[Dict[str, str]] = Field(None, description="Query parameters")
    body: Optional[str] = Field(None, description="Serialized JSON body")


class PropertyValue(MiotBaseModel):
    """A single property write."""
    pid: str = Field(..., description="Property identifier")
    value: Any = Field(..., description="New value")


class SetPropertiesRequest(MiotBaseModel):
    """Body of a property write."""
    properties: List[PropertyValue] = Field(..., description="Properties to write")


class ActionRequest(MiotBaseModel):
    """Body of an action invocation. One device and one action per call."""
    aid: str = Field(..., description="Action identifier")
    in_: List[Any] = Field(default_factory=list, alias="in", description="Action arguments")


# ============================================================================
# Result Models
# ============================================================================

class TransportError(MiotBaseModel):
    """Returned when the transport produced no response text."""
    status: str = Field(TRANSPORT_ERROR_STATUS, description="Sentinel status code")
    message: str = Field("", description="Transport error detail")


class ApiResult(MiotBaseModel):
    """Discriminated outcome of a single request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outcome: ResponseOutcome = Field(..., description="Interpretation of the response")
    value: Any = Field(None, description="Decoded JSON value")
    message: Optional[str] = Field(None, description="Decode or transport error detail")

    @property
    def ok(self) -> bool:
        return self.outcome == ResponseOutcome.OK

    def unwrap(self) -> Union[Any, bool, Dict[str, str]]:
        """Collapse the outcome into the value returned by the endpoint methods.

        Returns:
            The decoded value, ``False`` for a null or undecodable body, or the
            ``{"status", "message"}`` error object when no text was received.
        """
        if self.outcome == ResponseOutcome.OK:
            return self.value
        if self.outcome == ResponseOutcome.TRANSPORT_ERROR:
            return TransportError(message=self.message or "").model_dump()
        return False


class PropertyStatus(MiotBaseModel):
    """Per-property status inside a multi-status envelope."""

    model_config = ConfigDict(extra="allow")

    pid: str = Field(..., description="Property identifier")
    status: int = Field(..., description="Status code, 0 on success")


class SubscriptionResult(MiotBaseModel):
    """Multi-status envelope returned by subscription calls."""

    model_config = ConfigDict(extra="allow")

    expired: Optional[int] = Field(None, description="Subscription lifetime in seconds")
    properties: List[PropertyStatus] = Field(default_factory=list, description="Per-property status")

    def failed(self) -> List[PropertyStatus]:
        return [item for item in self.properties if item.status != 0]
