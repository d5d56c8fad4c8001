"""Synthesis service - validation and orchestration of provider calls.

Provides:
- SynthesisService: validates a request against the voice catalog and
  parameter ranges, calls the injected provider with a deadline, and
  flattens every provider failure into SynthesisFailedError
- AudioResult: the transient result of one call
"""

import asyncio
import base64
from dataclasses import dataclass

from jtts.api.exceptions import (
    InvalidParameterError,
    MissingFieldError,
    SynthesisFailedError,
    SynthesisTimeoutError,
    VoiceNotFoundError,
)
from jtts.config import ProviderSettings
from jtts.core.interfaces import ProviderRequest, SpeechProvider
from jtts.core.voices import (
    DEFAULT_PITCH,
    DEFAULT_SPEED,
    PITCH_RANGE,
    SPEED_RANGE,
    is_known_voice,
)
from jtts.utils.logging import get_logger
from jtts.utils.timing import Timer

logger = get_logger("synthesis")

MP3_CONTENT_TYPE = "audio/mpeg"


@dataclass(frozen=True)
class AudioResult:
    """Encoded audio for one voice."""

    audio_data: bytes
    voice_id: str
    content_type: str = MP3_CONTENT_TYPE

    @property
    def filename(self) -> str:
        return f"tts-{self.voice_id}.mp3"

    def to_base64(self) -> str:
        return base64.b64encode(self.audio_data).decode("ascii")


class SynthesisService:
    """
    Stateless broker between the HTTP layer and the speech provider.

    The provider is injected at construction time; the service never creates
    its own client.
    """

    def __init__(
        self,
        provider: SpeechProvider,
        language_code: str = "ja-JP",
        effects_profile: str | None = "telephony-class-application",
        timeout_seconds: float = 30.0,
    ) -> None:
        self._provider = provider
        self.language_code = language_code
        self.effects_profile = effects_profile
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(
        cls, provider: SpeechProvider, settings: ProviderSettings
    ) -> "SynthesisService":
        return cls(
            provider,
            language_code=settings.language_code,
            effects_profile=settings.effects_profile or None,
            timeout_seconds=settings.timeout_seconds,
        )

    @property
    def provider(self) -> SpeechProvider:
        return self._provider

    def is_ready(self) -> bool:
        return self._provider.is_ready()

    def build_request(
        self,
        text: str | None,
        voice_id: str | None,
        speed: float | None = None,
        pitch: float | None = None,
    ) -> ProviderRequest:
        """
        Validate inputs and resolve defaults into a provider request.

        Raises:
            MissingFieldError: If text or voice_id is absent or blank
            VoiceNotFoundError: If voice_id is not in the catalog
            InvalidParameterError: If speed or pitch is out of range
        """
        missing = []
        if text is None or not text.strip():
            missing.append("text")
        if voice_id is None or not voice_id.strip():
            missing.append("voiceId")
        if missing:
            raise MissingFieldError(missing)

        if not is_known_voice(voice_id):
            raise VoiceNotFoundError(voice_id)

        if speed is None:
            speed = DEFAULT_SPEED
        if pitch is None:
            pitch = DEFAULT_PITCH

        if not SPEED_RANGE.contains(speed):
            raise InvalidParameterError("speed", speed, SPEED_RANGE.min, SPEED_RANGE.max)
        if not PITCH_RANGE.contains(pitch):
            raise InvalidParameterError("pitch", pitch, int(PITCH_RANGE.min), int(PITCH_RANGE.max))

        return ProviderRequest(
            text=text,
            voice_name=voice_id,
            language_code=self.language_code,
            speaking_rate=float(speed),
            pitch=float(pitch),
            audio_encoding="MP3",
            effects_profile_ids=[self.effects_profile] if self.effects_profile else [],
        )

    async def synthesize(
        self,
        text: str | None,
        voice_id: str | None,
        speed: float | None = None,
        pitch: float | None = None,
    ) -> AudioResult:
        """
        Synthesize speech for one voice.

        Returns:
            AudioResult with MP3 bytes

        Raises:
            InvalidRequestError: On validation failure (no provider call is made)
            SynthesisFailedError: On any provider failure or timeout
        """
        request = self.build_request(text, voice_id, speed, pitch)

        logger.info(
            "Starting synthesis",
            voice_id=request.voice_name,
            text_length=len(request.text),
            speaking_rate=request.speaking_rate,
            pitch=request.pitch,
        )

        with Timer("synthesize", log_level="info", logger=logger):
            try:
                audio = await asyncio.wait_for(
                    self._provider.synthesize(request, timeout=self.timeout_seconds),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                logger.error(
                    "Synthesis timed out",
                    voice_id=request.voice_name,
                    timeout_seconds=self.timeout_seconds,
                )
                raise SynthesisTimeoutError(self.timeout_seconds, voice_id=request.voice_name) from e
            except Exception as e:
                logger.error(
                    "Synthesis failed",
                    voice_id=request.voice_name,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise SynthesisFailedError(reason=str(e), voice_id=request.voice_name) from e

        if not audio:
            logger.error("Provider returned empty audio", voice_id=request.voice_name)
            raise SynthesisFailedError(reason="empty audio content", voice_id=request.voice_name)

        logger.info(
            "Synthesis completed",
            voice_id=request.voice_name,
            audio_size_bytes=len(audio),
        )
        return AudioResult(audio_data=audio, voice_id=request.voice_name)
