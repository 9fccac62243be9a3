import asyncio
import json
import sys
import pathlib
BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

import httpx
import pytest

from recipe_proxy.config import Settings
from recipe_proxy.services.gemini import GeminiClient, UpstreamResponse


def _recording_transport(status=200, body=None):
    seen = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=body if body is not None else {"candidates": []})

    return httpx.MockTransport(_handler), seen


def test_endpoint_url_uses_configured_model_and_base():
    client = GeminiClient(Settings(gemini_api_key="k", gemini_model="gemini-pro", gemini_api_base="http://local/v1"))
    assert client.endpoint_url() == "http://local/v1/models/gemini-pro:generateContent"


def test_generate_posts_json_with_key_query_param():
    transport, seen = _recording_transport()
    client = GeminiClient(Settings(gemini_api_key="abc123"), transport=transport)
    payload = {"contents": [{"parts": [{"text": "hi"}]}]}

    result = asyncio.run(client.generate(payload))

    assert result.status_code == 200
    assert result.ok
    assert json.loads(result.text) == {"candidates": []}
    request = seen[0]
    assert request.method == "POST"
    assert request.url.host == "generativelanguage.googleapis.com"
    assert request.url.path == "/v1beta/models/gemini-2.5-flash-preview-09-2025:generateContent"
    assert request.url.params["key"] == "abc123"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == payload


def test_generate_returns_error_status_without_raising():
    transport, _ = _recording_transport(status=503, body={"error": {"message": "overloaded"}})
    client = GeminiClient(Settings(gemini_api_key="k"), transport=transport)

    result = asyncio.run(client.generate({}))

    assert result.status_code == 503
    assert not result.ok
    assert "overloaded" in result.text


def test_generate_propagates_transport_errors():
    def _handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    client = GeminiClient(Settings(gemini_api_key="k"), transport=httpx.MockTransport(_handler))

    with pytest.raises(httpx.ConnectError):
        asyncio.run(client.generate({}))


@pytest.mark.parametrize("status,ok", [(200, True), (204, True), (299, True), (301, False), (429, False), (500, False)])
def test_upstream_response_ok(status, ok):
    assert UpstreamResponse(status, "").ok is ok


@pytest.mark.parametrize("timeout", [7.0, None])
def test_generate_applies_configured_timeout(timeout):
    transport, seen = _recording_transport()
    client = GeminiClient(Settings(gemini_api_key="k", request_timeout=timeout), transport=transport)

    asyncio.run(client.generate({}))

    applied = seen[0].extensions["timeout"]
    assert applied["connect"] == timeout
    assert applied["read"] == timeout
    assert applied["write"] == timeout
    assert applied["pool"] == timeout
