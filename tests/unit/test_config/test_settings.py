"""Tests for settings."""

import json

import pytest

from jtts.config import ProviderConfigurationError, ProviderSettings, ServerSettings, Settings


class TestProviderSettings:
    """Tests for provider credential parsing."""

    def test_credentials_info_parses_object(self):
        settings = ProviderSettings(credentials=json.dumps({"type": "service_account"}))

        assert settings.credentials_info() == {"type": "service_account"}

    @pytest.mark.parametrize("raw", ["", "   ", "not json", "[1, 2]", '"string"'])
    def test_bad_credentials_raise(self, raw: str):
        settings = ProviderSettings(credentials=raw)

        with pytest.raises(ProviderConfigurationError):
            settings.credentials_info()

    def test_google_credentials_env_alias(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GOOGLE_CREDENTIALS", '{"project_id": "demo"}')

        assert ProviderSettings().credentials_info() == {"project_id": "demo"}

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        for name in ("PROVIDER_LANGUAGE_CODE", "PROVIDER_EFFECTS_PROFILE", "PROVIDER_USE_MOCK"):
            monkeypatch.delenv(name, raising=False)

        settings = ProviderSettings()

        assert settings.language_code == "ja-JP"
        assert settings.effects_profile == "telephony-class-application"
        assert settings.use_mock is False


class TestSettings:
    """Tests for the combined settings."""

    def test_env_overrides(self, settings: Settings):
        assert settings.provider.use_mock is True
        assert settings.provider.timeout_seconds == 2.0
        assert settings.app.debug is False

    def test_cors_origin_list(self):
        server = ServerSettings(cors_origins="http://a.test, http://b.test,")

        assert server.cors_origin_list == ["http://a.test", "http://b.test"]
