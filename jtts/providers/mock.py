"""Deterministic offline provider for local runs and tests."""

import asyncio
import hashlib
from collections import deque

from jtts.core.interfaces import ProviderRequest, SpeechProvider
from jtts.utils.logging import get_logger

logger = get_logger("synthesis")

# Minimal ID3v2.4 header so players recognise the payload as MP3
_ID3_HEADER = b"ID3\x04\x00\x00\x00\x00\x00\x00"


class MockSpeechProvider(SpeechProvider):
    """
    Returns a deterministic byte sequence derived from the request.

    Identical requests always produce identical audio; any change to text,
    voice, speed or pitch changes the payload.
    """

    name = "mock"

    def __init__(self, delay_seconds: float = 0.0, max_recorded_calls: int = 100) -> None:
        self.delay_seconds = delay_seconds
        # Most recent requests only; the mock also serves local traffic
        self.calls: deque[ProviderRequest] = deque(maxlen=max_recorded_calls)

    async def synthesize(self, request: ProviderRequest, timeout: float | None = None) -> bytes:
        self.calls.append(request)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        return self.audio_for(request)

    @staticmethod
    def audio_for(request: ProviderRequest) -> bytes:
        digest = hashlib.sha256(request.model_dump_json().encode("utf-8")).digest()
        return _ID3_HEADER + digest
