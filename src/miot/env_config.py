"""
Environment variable configuration loader for the MIoT SDK.

Lets an embedding application keep the App-Id and access token out of code:
the values are read from the process environment, optionally seeded from a
``.env`` file.
"""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .errors import MiotConfigurationError
from .models import ClientConfig, Credentials, HTTPConfig, DEFAULT_SPEC_NS

logger = logging.getLogger(__name__)


def load_config_from_env(dotenv_path: Optional[str] = None) -> ClientConfig:
    """
    Load client configuration from environment variables.

    Environment variables:
        Credentials:
            MIOT_APP_ID: App-Id from the open platform (required)
            MIOT_ACCESS_TOKEN: OAuth access token (required)
            MIOT_SPEC_NS: Spec namespace (default: miot-spec-v2)

        HTTP:
            MIOT_HOST: API host (default: api.home.mi.com)
            MIOT_PORT: API port (default: 443)
            MIOT_USE_TLS: Use HTTPS (true/false, default: true)
            MIOT_TIMEOUT: Request timeout in seconds (default: 10)
            MIOT_USER_AGENT: User agent string

        Logging:
            MIOT_LOG_LEVEL: Log level (DEBUG/INFO/WARNING/ERROR)

    Args:
        dotenv_path: Optional .env file loaded before reading the environment;
            variables already set in the environment win

    Returns:
        ClientConfig: Configuration object loaded from environment

    Raises:
        MiotConfigurationError: Credentials missing or invalid
    """
    if dotenv_path:
        load_dotenv(dotenv_path)

    app_id = os.getenv('MIOT_APP_ID')
    access_token = os.getenv('MIOT_ACCESS_TOKEN')
    if not app_id or not access_token:
        raise MiotConfigurationError(
            "MIOT_APP_ID and MIOT_ACCESS_TOKEN environment variables are required"
        )

    try:
        credentials = Credentials(
            app_id=app_id,
            access_token=access_token,
            spec_ns=os.getenv('MIOT_SPEC_NS') or DEFAULT_SPEC_NS,
        )
    except ValidationError as e:
        raise MiotConfigurationError(f"Invalid credentials: {e}") from e

    return ClientConfig(
        credentials=credentials,
        http=_load_http_from_env(),
        log_level=_load_log_level_from_env(),
    )


def _load_http_from_env() -> HTTPConfig:
    """Load HTTP configuration from environment."""
    defaults = HTTPConfig()
    values: Dict[str, Any] = {}

    if host := os.getenv('MIOT_HOST'):
        values['host'] = host

    if port := os.getenv('MIOT_PORT'):
        try:
            values['port'] = int(port)
        except ValueError:
            logger.warning(f"Invalid port value: {port}, using default: {defaults.port}")

    if use_tls := os.getenv('MIOT_USE_TLS'):
        values['use_tls'] = _parse_bool(use_tls)

    if timeout := os.getenv('MIOT_TIMEOUT'):
        try:
            values['timeout'] = float(timeout)
        except ValueError:
            logger.warning(f"Invalid timeout value: {timeout}, using default: {defaults.timeout}")

    if user_agent := os.getenv('MIOT_USER_AGENT'):
        values['user_agent'] = user_agent

    try:
        return HTTPConfig(**values)
    except ValidationError as e:
        raise MiotConfigurationError(f"Invalid HTTP configuration: {e}") from e


def _load_log_level_from_env() -> Optional[str]:
    """Read MIOT_LOG_LEVEL; an unregistered level name is ignored."""
    if not (level := os.getenv('MIOT_LOG_LEVEL')):
        return None

    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"Invalid log level value: {level}, leaving the miot logger unchanged")
        return None
    return level


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string."""
    return value.lower() in ('true', '1', 'yes', 'on')
