"""Tests for the synthesis proxy HTTP client."""

import base64
import json

import httpx
import pytest

from jtts.client.api_client import DEFAULT_ERROR_MESSAGE, SynthesisClient
from jtts.client.errors import SynthesisRequestError


def _client(handler) -> SynthesisClient:
    return SynthesisClient("http://proxy.test", transport=httpx.MockTransport(handler))


class TestRequests:
    """Tests for request payloads."""

    async def test_payload_is_clamped(self):
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            assert request.url.path == "/api/synthesize"
            return httpx.Response(200, content=b"ID3audio", headers={"Content-Type": "audio/mpeg"})

        async with _client(handler) as client:
            audio = await client.fetch_audio("こんにちは", "ja-JP-Neural2-B", speed=3.0, pitch=-50)

        assert audio == b"ID3audio"
        assert seen == [{
            "text": "こんにちは",
            "voiceId": "ja-JP-Neural2-B",
            "speed": 1.0,
            "pitch": -20,
            "preview": False,
        }]

    async def test_preview_returns_base64(self):
        encoded = base64.b64encode(b"ID3preview").decode("ascii")

        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["preview"] is True
            return httpx.Response(200, json={"audioContent": encoded})

        async with _client(handler) as client:
            assert await client.fetch_preview("はい", "ja-JP-Wavenet-A") == encoded


class TestErrors:
    """Tests for error mapping."""

    async def test_server_message_surfaced(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "Unknown voice: ja-JP-X", "code": "JTTS_E103"})

        async with _client(handler) as client:
            with pytest.raises(SynthesisRequestError) as exc_info:
                await client.fetch_audio("はい", "ja-JP-X")

        assert exc_info.value.message == "Unknown voice: ja-JP-X"
        assert exc_info.value.status_code == 400

    async def test_non_json_error_uses_default_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        async with _client(handler) as client:
            with pytest.raises(SynthesisRequestError) as exc_info:
                await client.fetch_audio("はい", "ja-JP-Neural2-B")

        assert exc_info.value.message == DEFAULT_ERROR_MESSAGE

    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            with pytest.raises(SynthesisRequestError) as exc_info:
                await client.fetch_audio("はい", "ja-JP-Neural2-B")

        assert exc_info.value.message == "Request timed out"

    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(SynthesisRequestError) as exc_info:
                await client.fetch_preview("はい", "ja-JP-Neural2-B")

        assert exc_info.value.message == "Could not reach the synthesis server"

    @pytest.mark.parametrize("body", [{"other": 1}, {"audioContent": ""}, ["x"]])
    async def test_malformed_preview(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        async with _client(handler) as client:
            with pytest.raises(SynthesisRequestError) as exc_info:
                await client.fetch_preview("はい", "ja-JP-Neural2-B")

        assert exc_info.value.message == "Malformed preview response"

    async def test_empty_download(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"")

        async with _client(handler) as client:
            with pytest.raises(SynthesisRequestError):
                await client.fetch_audio("はい", "ja-JP-Neural2-B")


class TestAgainstApp:
    """The client talking to the real app through ASGITransport."""

    async def test_round_trip_through_proxy(self, app, mock_provider):
        async with SynthesisClient("http://test", transport=httpx.ASGITransport(app=app)) as client:
            audio = await client.fetch_audio("こんにちは", "ja-JP-Standard-C", speed=0.5, pitch=-2)
            preview = await client.fetch_preview("こんにちは", "ja-JP-Standard-C", speed=0.5, pitch=-2)
            catalog = await client.list_voices()

        assert audio == mock_provider.audio_for(mock_provider.calls[0])
        assert base64.b64decode(preview) == audio
        assert catalog["total"] == 11

    async def test_server_validation_message(self, app):
        async with SynthesisClient("http://test", transport=httpx.ASGITransport(app=app)) as client:
            with pytest.raises(SynthesisRequestError) as exc_info:
                await client.fetch_audio("   ", "ja-JP-Neural2-B")

        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.status_code == 400
