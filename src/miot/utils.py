"""Utility functions for the MIoT SDK."""

from __future__ import annotations

import json
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Mapping
from typing import Optional
from typing import Union

from pydantic import BaseModel

from miot.errors import MiotJsonError

IdList = Union[str, Iterable[str]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_json(text: Union[str, bytes, bytearray]) -> Any:
    """Parse strict JSON text; NaN and Infinity are rejected with ValueError."""
    return json.loads(text, parse_constant=_reject_constant)


def encode_json(data: Any) -> str:
    """Serialize data to the compact JSON text sent on the wire.

    Args:
        data: Structured data or a pydantic model

    Returns:
        Compact JSON text

    Raises:
        MiotJsonError: Data is not JSON serializable
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    try:
        return json.dumps(data, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise MiotJsonError(f"Data is not JSON serializable: {e}", data=data) from e


def coerce_json_payload(data: Any) -> str:
    """Validate caller data and serialize it for a write request.

    Strings are parsed first so that malformed JSON is rejected before any
    request is made.

    Args:
        data: Structured data, a pydantic model, or a JSON string

    Returns:
        Compact JSON text

    Raises:
        MiotJsonError: A string that is not valid JSON, or unserializable data
    """
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = decode_json(data)
        except ValueError as e:
            raise MiotJsonError(data=data) from e
    return encode_json(data)


def request_body(data: Any) -> Optional[str]:
    """Body for the generic verb methods: strings are sent as they are."""
    if data is None:
        return None
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8")
    return encode_json(data)


def query_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    """Render query parameter values as strings; booleans become true/false."""
    if not params:
        return None
    rendered: Dict[str, str] = {}
    for key, value in params.items():
        if isinstance(value, bool):
            rendered[key] = "true" if value else "false"
        else:
            rendered[key] = str(value)
    return rendered


def join_ids(ids: IdList) -> str:
    """Join identifiers with commas; a plain string is passed through."""
    if isinstance(ids, str):
        return ids
    return ",".join(str(item) for item in ids)


def voice_param(voice: Union[str, Mapping[str, Any]]) -> str:
    # {"recognition": "...", "semantics": "..."} is sent as JSON text
    if isinstance(voice, str):
        return voice
    return encode_json(dict(voice))
