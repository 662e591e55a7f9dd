"""Tests for the per-request transports."""

import httpx
import pytest

from miot.models import HTTPConfig
from miot.models import ResponseOutcome
from miot.transport import AsyncMiotTransport
from miot.transport import MiotTransport
from miot.transport import decode_response

from conftest import RecordingHandler


class TestMiotTransport:
    """Test synchronous transport."""

    def test_init_headers(self, http_config):
        transport = MiotTransport(http_config, headers={"App-Id": "app"})

        assert transport.headers["App-Id"] == "app"
        assert transport.headers["Accept"] == "application/json"
        assert transport.headers["User-Agent"] == "test-agent/1.0.0"
        assert transport.last_error == ""

    def test_headers_are_copied(self, http_config):
        extra = {"Spec-NS": "miot-spec-v2"}
        transport = MiotTransport(http_config, headers=extra)
        extra["Spec-NS"] = "changed"

        assert transport.headers["Spec-NS"] == "miot-spec-v2"

    def test_successful_request(self, http_config):
        handler = RecordingHandler(text='{"ok": true}')
        transport = MiotTransport(http_config, http_transport=httpx.MockTransport(handler))

        text = transport.execute("GET", "/api/v1/homes", params={"a": "1"})

        assert text == '{"ok": true}'
        assert transport.last_error == ""
        assert handler.last.url.params["a"] == "1"
        assert "Content-Type" not in handler.last.headers

    def test_body_request(self, http_config):
        handler = RecordingHandler()
        transport = MiotTransport(http_config, http_transport=httpx.MockTransport(handler))

        transport.execute("DELETE", "/api/v1/subscriptions", body='{"topic":"properties-changed"}')

        assert handler.last.method == "DELETE"
        assert handler.last.headers["Content-Type"] == "application/json"
        assert handler.last.content == b'{"topic":"properties-changed"}'

    def test_empty_body(self, http_config):
        transport = MiotTransport(
            http_config, http_transport=httpx.MockTransport(RecordingHandler(text="", status_code=502))
        )

        assert transport.execute("GET", "/api/v1/homes") is None
        assert transport.last_error == "Empty response body (HTTP 502)"

    def test_connection_error(self, http_config):
        handler = RecordingHandler(error=httpx.ConnectError("Connection failed"))
        transport = MiotTransport(http_config, http_transport=httpx.MockTransport(handler))

        assert transport.execute("GET", "/api/v1/homes") is None
        assert transport.last_error == "Connection failed"

    def test_error_without_message_uses_class_name(self, http_config):
        handler = RecordingHandler(error=httpx.ConnectTimeout(""))
        transport = MiotTransport(http_config, http_transport=httpx.MockTransport(handler))

        assert transport.execute("GET", "/api/v1/homes") is None
        assert transport.last_error == "ConnectTimeout"


class TestAsyncMiotTransport:
    """Test asynchronous transport."""

    @pytest.mark.asyncio
    async def test_successful_request(self, http_config):
        handler = RecordingHandler(text="[]")
        transport = AsyncMiotTransport(
            http_config, headers={"App-Id": "app"}, http_transport=httpx.MockTransport(handler)
        )

        text = await transport.execute("PUT", "/api/v1/action", body="{}")

        assert text == "[]"
        assert handler.last.headers["App-Id"] == "app"
        assert handler.last.content == b"{}"

    @pytest.mark.asyncio
    async def test_connection_error(self, http_config):
        handler = RecordingHandler(error=httpx.ConnectError("Connection failed"))
        transport = AsyncMiotTransport(http_config, http_transport=httpx.MockTransport(handler))

        assert await transport.execute("GET", "/api/v1/homes") is None
        assert transport.last_error == "Connection failed"


class TestDecodeResponse:
    """Test response normalization."""

    def test_decoded_value(self):
        result = decode_response('{"devices": [{"did": "1"}]}')

        assert result.outcome == ResponseOutcome.OK
        assert result.value == {"devices": [{"did": "1"}]}

    def test_json_null(self):
        result = decode_response("null")

        assert result.outcome == ResponseOutcome.NULL
        assert result.value is None

    @pytest.mark.parametrize("text", ["<html>Bad Gateway</html>", "NaN", "-Infinity", "{\"t\": Infinity}"])
    def test_invalid_json(self, text):
        result = decode_response(text)

        assert result.outcome == ResponseOutcome.DECODE_ERROR
        assert result.message

    @pytest.mark.parametrize("text", [None, ""])
    def test_missing_text(self, text):
        result = decode_response(text, "Connection failed")

        assert result.outcome == ResponseOutcome.TRANSPORT_ERROR
        assert result.message == "Connection failed"

    def test_falsy_json_values_are_values(self):
        assert decode_response("false").value is False
        assert decode_response("0").outcome == ResponseOutcome.OK
        assert decode_response("{}").value == {}
