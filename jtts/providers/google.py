"""Google Cloud Text-to-Speech provider."""

from typing import Any

from google.cloud import texttospeech
from google.oauth2 import service_account

from jtts.config import ProviderConfigurationError
from jtts.core.interfaces import ProviderRequest, SpeechProvider
from jtts.utils.logging import get_logger

logger = get_logger("synthesis")


class GoogleSpeechProvider(SpeechProvider):
    """SpeechProvider backed by TextToSpeechAsyncClient."""

    name = "google"

    def __init__(self, client: texttospeech.TextToSpeechAsyncClient) -> None:
        self._client = client
        self._closed = False

    @classmethod
    def from_service_account_info(cls, info: dict[str, Any]) -> "GoogleSpeechProvider":
        """
        Build the provider from parsed service-account JSON.

        Raises:
            ProviderConfigurationError: If the credential is rejected
        """
        try:
            credentials = service_account.Credentials.from_service_account_info(info)
        except (ValueError, KeyError) as e:
            raise ProviderConfigurationError(f"Invalid service account credentials: {e}") from e

        client = texttospeech.TextToSpeechAsyncClient(credentials=credentials)
        logger.info(
            "Initialized Google Cloud TTS client",
            project_id=info.get("project_id"),
            client_email=info.get("client_email"),
        )
        return cls(client)

    async def synthesize(self, request: ProviderRequest, timeout: float | None = None) -> bytes:
        audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding[request.audio_encoding],
            speaking_rate=request.speaking_rate,
            pitch=request.pitch,
            effects_profile_id=list(request.effects_profile_ids),
        )
        response = await self._client.synthesize_speech(
            input=texttospeech.SynthesisInput(text=request.text),
            voice=texttospeech.VoiceSelectionParams(
                language_code=request.language_code,
                name=request.voice_name,
            ),
            audio_config=audio_config,
            retry=None,
            timeout=timeout,
        )
        return response.audio_content

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._client.transport.close()

    def is_ready(self) -> bool:
        return not self._closed
