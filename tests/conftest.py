"""Pytest configuration and fixtures.

Global fixtures for all tests:
- settings: test settings with PROVIDER_USE_MOCK=true
- mock_provider: deterministic offline speech provider
- app: FastAPI test application with the mock provider attached
- client: httpx.AsyncClient for testing
- synthesis_service: service wrapping the mock provider
- fake_client: scripted stand-in for SynthesisClient
- preferences_path: temporary preferences file location
- sample_text: example Japanese text for synthesis
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from jtts.api.app import create_app
from jtts.config import Settings, get_settings
from jtts.core.synthesis_service import SynthesisService
from jtts.providers import MockSpeechProvider
from tests.factories import FakeSynthesisClient


# -----------------------------------------------------------------------------
# Settings Fixture
# -----------------------------------------------------------------------------
@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Generator[Settings, None, None]:
    """Create test settings with the mock provider enabled."""
    monkeypatch.setenv("ENVIRONMENT", "dev")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("PROVIDER_USE_MOCK", "true")
    monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "2")
    monkeypatch.delenv("GOOGLE_CREDENTIALS", raising=False)

    # Clear cached settings
    get_settings.cache_clear()

    yield get_settings()

    get_settings.cache_clear()


# -----------------------------------------------------------------------------
# Provider Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_provider() -> MockSpeechProvider:
    """Create a fresh mock provider that records its calls."""
    return MockSpeechProvider()


@pytest.fixture
def synthesis_service(mock_provider: MockSpeechProvider) -> SynthesisService:
    """Create synthesis service with the mock provider."""
    return SynthesisService(mock_provider, timeout_seconds=1.0)


# -----------------------------------------------------------------------------
# App and Client Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def app(settings: Settings, mock_provider: MockSpeechProvider) -> FastAPI:
    """Create test FastAPI application with the mock provider attached."""
    return create_app(settings, provider=mock_provider)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Client-side Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_client() -> FakeSynthesisClient:
    """Scripted synthesis client for preview and batch tests."""
    return FakeSynthesisClient()


@pytest.fixture
def preferences_path(tmp_path: Path) -> Path:
    """Location of a preferences file that does not exist yet."""
    return tmp_path / "config" / "settings.json"


# -----------------------------------------------------------------------------
# Text Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_text() -> str:
    """Example text for synthesis tests."""
    return "こんにちは、今日はいい天気ですね。"
