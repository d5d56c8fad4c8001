"""Speech provider implementations.

build_provider() is called once during application startup; a malformed
credential aborts startup instead of failing the first request.
"""

from jtts.config import ProviderSettings
from jtts.core.interfaces import SpeechProvider
from jtts.providers.mock import MockSpeechProvider
from jtts.utils.logging import get_logger

logger = get_logger("system")

__all__ = [
    "MockSpeechProvider",
    "build_provider",
]


def build_provider(settings: ProviderSettings) -> SpeechProvider:
    """
    Construct the configured speech provider.

    Args:
        settings: Provider settings

    Returns:
        Ready-to-use SpeechProvider

    Raises:
        ProviderConfigurationError: If credentials are missing or malformed
    """
    if settings.use_mock:
        logger.warning("Using mock speech provider; no audio will be synthesized")
        return MockSpeechProvider()

    info = settings.credentials_info()

    from jtts.providers.google import GoogleSpeechProvider

    return GoogleSpeechProvider.from_service_account_info(info)
