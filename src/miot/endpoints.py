"""Request builders for the MIoT REST endpoints.

Each builder turns operation arguments into an :class:`EndpointCall`; the
clients dispatch the call and normalize the response.
"""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Union

from miot.models import EndpointCall
from miot.models import HTTPMethod
from miot.models import Topic
from miot.utils import IdList
from miot.utils import coerce_json_payload
from miot.utils import encode_json
from miot.utils import join_ids
from miot.utils import voice_param

DEVICES_PATH = "/api/v1/devices"
DEVICE_INFORMATION_PATH = "/api/v1/device-information"
PROPERTIES_PATH = "/api/v1/properties"
ACTION_PATH = "/api/v1/action"
SCENES_PATH = "/api/v1/scenes"
SCENE_PATH = "/api/v1/scene"
HOMES_PATH = "/api/v1/homes"
SUBSCRIPTIONS_PATH = "/api/v1/subscriptions"


def devices(compact: bool = False) -> EndpointCall:
    """List abstract devices; ``compact`` asks for the minimal description."""
    query: Optional[Dict[str, str]] = {"compact": "true"} if compact else None
    return EndpointCall(method=HTTPMethod.GET, path=DEVICES_PATH, query=query)


def device_information(dids: IdList) -> EndpointCall:
    """Read device information.

    One device: ``?dids=xxxx``; several: ``?dids=xxxx,yyy,zzzzz``.
    """
    return EndpointCall(
        method=HTTPMethod.GET,
        path=DEVICE_INFORMATION_PATH,
        query={"dids": join_ids(dids)},
    )


def properties(
    pid: IdList,
    voice: Optional[Union[str, Mapping[str, Any]]] = None,
) -> EndpointCall:
    """Read one or more properties, e.g. ``?pid=AAAD.1.1,AAAD.2.3``.

    Voice control passes the recognition result along:
    ``&voice={"recognition":"...","semantics":"..."}``.
    """
    query = {"pid": join_ids(pid)}
    if voice:
        query["voice"] = voice_param(voice)
    return EndpointCall(method=HTTPMethod.GET, path=PROPERTIES_PATH, query=query)


def set_properties(data: Any) -> EndpointCall:
    return EndpointCall(
        method=HTTPMethod.PUT,
        path=PROPERTIES_PATH,
        body=coerce_json_payload(data),
    )


def invoke_actions(data: Any) -> EndpointCall:
    # One device, one action per request
    return EndpointCall(
        method=HTTPMethod.PUT,
        path=ACTION_PATH,
        body=coerce_json_payload(data),
    )


def scenes() -> EndpointCall:
    return EndpointCall(method=HTTPMethod.GET, path=SCENES_PATH)


def trigger_scene(scene_id: Union[str, int]) -> EndpointCall:
    return EndpointCall(
        method=HTTPMethod.POST,
        path=SCENE_PATH,
        body=encode_json({"id": scene_id}),
    )


def homes() -> EndpointCall:
    return EndpointCall(method=HTTPMethod.GET, path=HOMES_PATH)


def subscribe(properties: Any, receiver_url: str) -> EndpointCall:
    """Subscribe to property changes.

    The service answers ``207 Multi-Status`` with an envelope such as
    ``{"expired": 36000, "properties": [{"pid": "AAAB.1.1", "status": 0}, ...]}``;
    ``expired`` is the subscription lifetime in seconds.
    """
    body = {
        "topic": Topic.PROPERTIES_CHANGED.value,
        "properties": properties,
        "receiver-url": receiver_url,
    }
    return EndpointCall(method=HTTPMethod.POST, path=SUBSCRIPTIONS_PATH, body=encode_json(body))


def unsubscribe(properties: Any) -> EndpointCall:
    """Cancel property-change subscriptions. Answers with the same envelope as subscribe."""
    body = {
        "topic": Topic.PROPERTIES_CHANGED.value,
        "properties": properties,
    }
    return EndpointCall(method=HTTPMethod.DELETE, path=SUBSCRIPTIONS_PATH, body=encode_json(body))
