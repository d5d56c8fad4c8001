"""Tests for the synthesis service."""

import base64

import pytest

from jtts.api.exceptions import (
    SYNTHESIS_FAILED_MESSAGE,
    InvalidParameterError,
    MissingFieldError,
    SynthesisFailedError,
    SynthesisTimeoutError,
    VoiceNotFoundError,
)
from jtts.config import ProviderSettings
from jtts.core.synthesis_service import AudioResult, SynthesisService
from jtts.providers import MockSpeechProvider
from tests.factories import EmptyAudioProvider, FailingProvider


class TestBuildRequest:
    """Tests for validation and default resolution."""

    def test_defaults_applied(self, synthesis_service: SynthesisService, sample_text: str):
        request = synthesis_service.build_request(sample_text, "ja-JP-Neural2-B")

        assert request.speaking_rate == 1.0
        assert request.pitch == 0.0
        assert request.voice_name == "ja-JP-Neural2-B"
        assert request.language_code == "ja-JP"
        assert request.audio_encoding == "MP3"
        assert request.effects_profile_ids == ["telephony-class-application"]

    def test_explicit_values_kept(self, synthesis_service: SynthesisService, sample_text: str):
        request = synthesis_service.build_request(sample_text, "ja-JP-Standard-C", 0.5, -7)

        assert request.speaking_rate == 0.5
        assert request.pitch == -7.0

    @pytest.mark.parametrize(
        "text,voice_id,missing",
        [
            (None, "ja-JP-Neural2-B", ["text"]),
            ("", "ja-JP-Neural2-B", ["text"]),
            ("   ", "ja-JP-Neural2-B", ["text"]),
            ("こんにちは", None, ["voiceId"]),
            (None, "", ["text", "voiceId"]),
        ],
    )
    def test_missing_fields(self, synthesis_service: SynthesisService, text, voice_id, missing):
        with pytest.raises(MissingFieldError) as exc_info:
            synthesis_service.build_request(text, voice_id)

        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.details["fields"] == missing

    def test_unknown_voice(self, synthesis_service: SynthesisService):
        with pytest.raises(VoiceNotFoundError):
            synthesis_service.build_request("こんにちは", "ja-JP-Neural9-Z")

    @pytest.mark.parametrize("speed", [0.0, 0.2, 1.5, -1.0])
    def test_speed_out_of_range(self, synthesis_service: SynthesisService, speed):
        with pytest.raises(InvalidParameterError) as exc_info:
            synthesis_service.build_request("こんにちは", "ja-JP-Neural2-B", speed=speed)

        assert exc_info.value.details["parameter"] == "speed"

    @pytest.mark.parametrize("pitch", [-21, 20.5, 100])
    def test_pitch_out_of_range(self, synthesis_service: SynthesisService, pitch):
        with pytest.raises(InvalidParameterError) as exc_info:
            synthesis_service.build_request("こんにちは", "ja-JP-Neural2-B", pitch=pitch)

        assert exc_info.value.details["parameter"] == "pitch"

    def test_range_boundaries_accepted(self, synthesis_service: SynthesisService):
        low = synthesis_service.build_request("こんにちは", "ja-JP-Neural2-B", 0.25, -20)
        high = synthesis_service.build_request("こんにちは", "ja-JP-Neural2-B", 1.0, 20)

        assert (low.speaking_rate, low.pitch) == (0.25, -20.0)
        assert (high.speaking_rate, high.pitch) == (1.0, 20.0)

    def test_from_settings(self, mock_provider: MockSpeechProvider):
        settings = ProviderSettings(
            language_code="ja-JP", effects_profile="", timeout_seconds=5.0
        )
        service = SynthesisService.from_settings(mock_provider, settings)

        request = service.build_request("こんにちは", "ja-JP-Neural2-B")

        assert service.timeout_seconds == 5.0
        assert request.effects_profile_ids == []


class TestSynthesize:
    """Tests for provider calls."""

    async def test_returns_mp3(
        self,
        synthesis_service: SynthesisService,
        mock_provider: MockSpeechProvider,
        sample_text: str,
    ):
        result = await synthesis_service.synthesize(sample_text, "ja-JP-Wavenet-A")

        assert isinstance(result, AudioResult)
        assert result.audio_data == MockSpeechProvider.audio_for(mock_provider.calls[0])
        assert result.content_type == "audio/mpeg"
        assert result.filename == "tts-ja-JP-Wavenet-A.mp3"
        assert base64.b64decode(result.to_base64()) == result.audio_data

    async def test_invalid_input_makes_no_provider_call(
        self, synthesis_service: SynthesisService, mock_provider: MockSpeechProvider
    ):
        for args in [("", "ja-JP-Neural2-B"), ("こんにちは", "nope"), ("こんにちは", None)]:
            with pytest.raises(Exception):
                await synthesis_service.synthesize(*args)
        with pytest.raises(InvalidParameterError):
            await synthesis_service.synthesize("こんにちは", "ja-JP-Neural2-B", speed=3.0)

        assert not mock_provider.calls

    async def test_provider_error_is_flattened(self, sample_text: str):
        provider = FailingProvider()
        service = SynthesisService(provider)

        with pytest.raises(SynthesisFailedError) as exc_info:
            await service.synthesize(sample_text, "ja-JP-Neural2-B")

        assert exc_info.value.message == SYNTHESIS_FAILED_MESSAGE
        assert "secret-123" not in exc_info.value.message
        assert exc_info.value.http_status == 500
        assert len(provider.calls) == 1

    async def test_empty_audio_is_failure(self, sample_text: str):
        service = SynthesisService(EmptyAudioProvider())

        with pytest.raises(SynthesisFailedError):
            await service.synthesize(sample_text, "ja-JP-Neural2-B")

    async def test_timeout(self, sample_text: str):
        service = SynthesisService(MockSpeechProvider(delay_seconds=1.0), timeout_seconds=0.05)

        with pytest.raises(SynthesisTimeoutError) as exc_info:
            await service.synthesize(sample_text, "ja-JP-Neural2-B")

        assert isinstance(exc_info.value, SynthesisFailedError)
        assert exc_info.value.message == SYNTHESIS_FAILED_MESSAGE

    async def test_each_call_reaches_provider(
        self, synthesis_service: SynthesisService, mock_provider: MockSpeechProvider
    ):
        await synthesis_service.synthesize("一", "ja-JP-Neural2-B")
        await synthesis_service.synthesize("一", "ja-JP-Neural2-B")

        assert len(mock_provider.calls) == 2

    def test_is_ready_follows_provider(self, synthesis_service: SynthesisService):
        assert synthesis_service.is_ready()
