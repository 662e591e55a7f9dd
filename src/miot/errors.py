"""Exception classes for the MIoT SDK.

Remote failures are never raised: the API reports them inside the response
body and transport failures come back as a status object. Exceptions are
reserved for problems the caller can fix before a request is sent.
"""

from __future__ import annotations

from typing import Any
from typing import ClassVar
from typing import Dict
from typing import Optional


class MiotError(Exception):
    """Base exception for all MIoT SDK errors."""

    code: ClassVar[Optional[str]] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, error_code={self.error_code!r})"


class MiotJsonError(MiotError):
    """Write payload is neither structured data nor a valid JSON string.

    ``data`` holds the rejected payload so callers can log what they tried
    to send.
    """

    code = "JSON_ERROR"

    def __init__(
        self,
        message: str = "It's not a json string.",
        data: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.data = data


class MiotConfigurationError(MiotError):
    """Credentials or HTTP settings are missing or invalid."""

    code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
