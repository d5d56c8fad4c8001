"""Per-voice audio preview.

Each voice owns one PreviewController and one PlaybackSlot; previews for
different voices never share state. Within one voice, every request gets a
sequence number and only the newest request's outcome is applied to the
slot. Starting a new preview cancels the previous in-flight request.
"""

import asyncio
import base64
import binascii
from collections.abc import Callable
from dataclasses import dataclass

from jtts.client.api_client import SynthesisClient
from jtts.client.errors import ClientError
from jtts.core.voices import JAPANESE_VOICES, is_known_voice
from jtts.utils.logging import get_logger

logger = get_logger("client")

PREVIEW_ERROR_MESSAGE = "Failed to generate preview"


@dataclass
class PlaybackSlot:
    """The single reusable playback element of one voice row."""

    voice_id: str
    audio: bytes | None = None
    error: str | None = None
    is_loading: bool = False

    @property
    def source(self) -> str | None:
        """Data URI playable by an audio element, or None before the first preview."""
        if self.audio is None:
            return None
        return "data:audio/mp3;base64," + base64.b64encode(self.audio).decode("ascii")


Player = Callable[[PlaybackSlot], None]


class PreviewController:
    """Preview one voice through the synthesis proxy."""

    def __init__(
        self,
        client: SynthesisClient,
        voice_id: str,
        player: Player | None = None,
    ) -> None:
        if not is_known_voice(voice_id):
            raise ValueError(f"Unknown voice: {voice_id}")
        self._client = client
        self._player = player
        self.slot = PlaybackSlot(voice_id=voice_id)
        self._sequence = 0
        self._inflight: asyncio.Task[str] | None = None

    @property
    def voice_id(self) -> str:
        return self.slot.voice_id

    def _is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    def cancel(self) -> None:
        """Abort the in-flight preview; its result will not be applied."""
        self._sequence += 1
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None
        self.slot.is_loading = False

    async def preview(self, text: str, speed: float = 1.0, pitch: float = 0) -> bool:
        """
        Request a preview and apply it to the slot.

        Returns:
            True if this request's outcome (audio or error) was applied,
            False if it was superseded by a newer request or cancelled
        """
        self.cancel()
        sequence = self._sequence

        if not text or not text.strip():
            self.slot.error = "Enter text to preview"
            return True

        self.slot.is_loading = True
        self.slot.error = None
        fetch = asyncio.ensure_future(
            self._client.fetch_preview(text, self.voice_id, speed=speed, pitch=pitch)
        )
        self._inflight = fetch

        try:
            audio_content = await fetch
        except asyncio.CancelledError:
            if not self._is_current(sequence):
                logger.debug("Preview superseded", voice_id=self.voice_id)
                return False
            self._inflight = None
            self.slot.is_loading = False
            raise
        except ClientError as e:
            if not self._is_current(sequence):
                return False
            self._finish(error=e.message)
            return True

        if not self._is_current(sequence):
            logger.debug("Discarding stale preview", voice_id=self.voice_id)
            return False

        try:
            audio = base64.b64decode(audio_content, validate=True)
        except (binascii.Error, ValueError):
            self._finish(error=PREVIEW_ERROR_MESSAGE)
            return True

        self._finish(audio=audio)
        return True

    def _finish(self, audio: bytes | None = None, error: str | None = None) -> None:
        self._inflight = None
        self.slot.is_loading = False
        if error is not None:
            self.slot.error = error
            logger.info("Preview failed", voice_id=self.voice_id, error=error)
            return

        self.slot.audio = audio
        self.slot.error = None
        logger.info("Preview ready", voice_id=self.voice_id, audio_size_bytes=len(audio or b""))
        if self._player is not None:
            self._player(self.slot)


class PreviewBoard:
    """One PreviewController per catalog voice, created on first use."""

    def __init__(self, client: SynthesisClient, player: Player | None = None) -> None:
        self._client = client
        self._player = player
        self._controllers: dict[str, PreviewController] = {}

    def controller_for(self, voice_id: str) -> PreviewController:
        controller = self._controllers.get(voice_id)
        if controller is None:
            controller = PreviewController(self._client, voice_id, player=self._player)
            self._controllers[voice_id] = controller
        return controller

    async def preview(self, voice_id: str, text: str, speed: float = 1.0, pitch: float = 0) -> bool:
        return await self.controller_for(voice_id).preview(text, speed=speed, pitch=pitch)

    def slots(self) -> dict[str, PlaybackSlot]:
        """Current slot of every voice that has been previewed, in catalog order."""
        return {
            voice.id: self._controllers[voice.id].slot
            for voice in JAPANESE_VOICES
            if voice.id in self._controllers
        }

    def cancel_all(self) -> None:
        for controller in self._controllers.values():
            controller.cancel()
