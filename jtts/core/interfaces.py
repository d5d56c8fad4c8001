"""Abstract interface for upstream speech providers.

Defines:
- ProviderRequest: the fully-resolved call sent upstream
- SpeechProvider: ABC implemented by the Google and mock providers
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class ProviderRequest(BaseModel):
    """A single synthesizeSpeech call, already validated."""

    text: str = Field(..., min_length=1)
    voice_name: str = Field(..., min_length=1)
    language_code: str = Field(default="ja-JP")
    speaking_rate: float = Field(default=1.0)
    pitch: float = Field(default=0.0)
    audio_encoding: str = Field(default="MP3")
    effects_profile_ids: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class SpeechProvider(ABC):
    """
    Interface for a remote text-to-speech provider.

    Implementations are constructed once at startup and shared by every
    request; they must be safe to call concurrently from the event loop.
    """

    name: str = "provider"

    @abstractmethod
    async def synthesize(self, request: ProviderRequest, timeout: float | None = None) -> bytes:
        """
        Synthesize speech and return the encoded audio bytes.

        Args:
            request: Fully-resolved provider request
            timeout: Per-call deadline in seconds, forwarded to the transport

        Raises:
            Exception: Any provider or transport error; callers flatten these
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None

    def is_ready(self) -> bool:
        return True
