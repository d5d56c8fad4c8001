"""Async HTTP client for the synthesis proxy."""

from typing import Any

import httpx

from jtts.client.errors import SynthesisRequestError
from jtts.core.voices import clamp_pitch, clamp_speed
from jtts.utils.logging import get_logger
from jtts.utils.timing import timed_async

logger = get_logger("client")

DEFAULT_ERROR_MESSAGE = "Failed to generate audio"


class SynthesisClient:
    """
    Thin wrapper over httpx.AsyncClient for /api/synthesize and /api/voices.

    Speed and pitch are clamped to their ranges before every request. Every
    request carries the client timeout; cancelling the awaiting task aborts
    the underlying HTTP request.

    Usage:
        async with SynthesisClient("http://127.0.0.1:8000") as client:
            audio = await client.fetch_audio("こんにちは", "ja-JP-Neural2-B")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "SynthesisClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _payload(
        self, text: str, voice_id: str, speed: float, pitch: float, preview: bool
    ) -> dict[str, Any]:
        return {
            "text": text,
            "voiceId": voice_id,
            "speed": clamp_speed(speed),
            "pitch": clamp_pitch(pitch),
            "preview": preview,
        }

    async def _post_synthesize(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = await self._http.post("/api/synthesize", json=payload)
        except httpx.TimeoutException as e:
            logger.warning("Synthesis request timed out", voice_id=payload["voiceId"])
            raise SynthesisRequestError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(
                "Synthesis request failed",
                voice_id=payload["voiceId"],
                error_type=type(e).__name__,
            )
            raise SynthesisRequestError("Could not reach the synthesis server") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Synthesis rejected",
                voice_id=payload["voiceId"],
                status_code=response.status_code,
                error=message,
            )
            raise SynthesisRequestError(message, status_code=response.status_code)
        return response

    async def fetch_audio(
        self, text: str, voice_id: str, speed: float = 1.0, pitch: float = 0
    ) -> bytes:
        """Download-mode synthesis: returns the MP3 bytes."""
        response = await self._post_synthesize(
            self._payload(text, voice_id, speed, pitch, preview=False)
        )
        if not response.content:
            raise SynthesisRequestError(DEFAULT_ERROR_MESSAGE, status_code=response.status_code)
        return response.content

    async def fetch_preview(
        self, text: str, voice_id: str, speed: float = 1.0, pitch: float = 0
    ) -> str:
        """Preview-mode synthesis: returns the base64 audio payload."""
        response = await self._post_synthesize(
            self._payload(text, voice_id, speed, pitch, preview=True)
        )
        try:
            audio_content = response.json()["audioContent"]
        except (ValueError, KeyError, TypeError) as e:
            raise SynthesisRequestError("Malformed preview response") from e
        if not isinstance(audio_content, str) or not audio_content:
            raise SynthesisRequestError("Malformed preview response")
        return audio_content

    @timed_async("list_voices", logger=logger)
    async def list_voices(self) -> dict[str, Any]:
        """Fetch the server's voice catalog, ranges and defaults."""
        try:
            response = await self._http.get("/api/voices")
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SynthesisRequestError("Could not load the voice catalog") from e
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return DEFAULT_ERROR_MESSAGE
