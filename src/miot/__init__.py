"""MIoT Python SDK - client for the MIoT smart-home open API."""

__version__ = "1.0.0"

from .client import AsyncMiotClient, MiotClient, create_async_client, create_client
from .env_config import load_config_from_env
from .errors import MiotConfigurationError, MiotError, MiotJsonError
from .models import (
    ActionRequest,
    ApiResult,
    ClientConfig,
    Credentials,
    EndpointCall,
    HTTPConfig,
    PropertyStatus,
    PropertyValue,
    ResponseOutcome,
    SetPropertiesRequest,
    SubscriptionResult,
    TRANSPORT_ERROR_STATUS,
    TransportError,
)

__all__ = [
    "MiotClient",
    "AsyncMiotClient",
    "create_client",
    "create_async_client",
    "load_config_from_env",
    "MiotError",
    "MiotJsonError",
    "MiotConfigurationError",
    "ActionRequest",
    "ApiResult",
    "ClientConfig",
    "Credentials",
    "EndpointCall",
    "HTTPConfig",
    "PropertyStatus",
    "PropertyValue",
    "ResponseOutcome",
    "SetPropertiesRequest",
    "SubscriptionResult",
    "TRANSPORT_ERROR_STATUS",
    "TransportError",
    "__version__",
]
