"""Tests for speech providers."""

import json
from types import SimpleNamespace
from typing import Any

import pytest
from google.cloud import texttospeech

from jtts.config import ProviderConfigurationError, ProviderSettings
from jtts.providers import MockSpeechProvider, build_provider
from jtts.providers.google import GoogleSpeechProvider
from tests.factories import create_provider_request


class FakeTransport:
    def __init__(self) -> None:
        self.close_count = 0

    async def close(self) -> None:
        self.close_count += 1


class FakeTextToSpeechClient:
    """Records synthesize_speech keyword arguments."""

    def __init__(self, audio: bytes = b"ID3-google-audio") -> None:
        self.audio = audio
        self.calls: list[dict[str, Any]] = []
        self.transport = FakeTransport()

    async def synthesize_speech(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        return SimpleNamespace(audio_content=self.audio)


class TestBuildProvider:
    """Tests for provider construction from settings."""

    def test_mock_mode(self):
        provider = build_provider(ProviderSettings(use_mock=True))

        assert isinstance(provider, MockSpeechProvider)
        assert provider.name == "mock"

    def test_missing_credentials_abort(self):
        with pytest.raises(ProviderConfigurationError):
            build_provider(ProviderSettings(use_mock=False, credentials=""))

    def test_malformed_json_aborts(self):
        with pytest.raises(ProviderConfigurationError):
            build_provider(ProviderSettings(use_mock=False, credentials="{not json"))

    def test_incomplete_service_account_aborts(self):
        credentials = json.dumps({"type": "service_account", "project_id": "demo"})

        with pytest.raises(ProviderConfigurationError):
            build_provider(ProviderSettings(use_mock=False, credentials=credentials))


class TestMockProvider:
    """Tests for the offline provider."""

    async def test_deterministic_audio(self):
        provider = MockSpeechProvider()
        request = create_provider_request()

        first = await provider.synthesize(request)
        second = await provider.synthesize(request)

        assert first == second
        assert first.startswith(b"ID3")
        assert len(provider.calls) == 2

    async def test_parameters_change_audio(self):
        provider = MockSpeechProvider()

        base = await provider.synthesize(create_provider_request())
        higher = await provider.synthesize(create_provider_request(pitch=5.0))
        other_voice = await provider.synthesize(
            create_provider_request(voice_name="ja-JP-Wavenet-D")
        )

        assert len({base, higher, other_voice}) == 3

    async def test_recorded_calls_are_bounded(self):
        provider = MockSpeechProvider(max_recorded_calls=2)

        for text in ("一", "二", "三"):
            await provider.synthesize(create_provider_request(text=text))

        assert [call.text for call in provider.calls] == ["二", "三"]


class TestGoogleSpeechProvider:
    """Tests for the Google Cloud provider with a fake client."""

    async def test_synthesize_call_shape(self):
        fake = FakeTextToSpeechClient()
        provider = GoogleSpeechProvider(fake)
        request = create_provider_request(
            text="おはようございます", voice_name="ja-JP-Neural2-C", speaking_rate=0.75, pitch=-4.0
        )

        audio = await provider.synthesize(request, timeout=12.0)

        assert audio == b"ID3-google-audio"
        call = fake.calls[0]
        assert call["input"].text == "おはようございます"
        assert call["voice"].language_code == "ja-JP"
        assert call["voice"].name == "ja-JP-Neural2-C"
        assert call["audio_config"].audio_encoding == texttospeech.AudioEncoding.MP3
        assert call["audio_config"].speaking_rate == 0.75
        assert call["audio_config"].pitch == -4.0
        assert list(call["audio_config"].effects_profile_id) == ["telephony-class-application"]
        assert call["retry"] is None
        assert call["timeout"] == 12.0

    async def test_close_is_idempotent(self):
        fake = FakeTextToSpeechClient()
        provider = GoogleSpeechProvider(fake)

        assert provider.is_ready()
        await provider.close()
        await provider.close()

        assert not provider.is_ready()
        assert fake.transport.close_count == 1
