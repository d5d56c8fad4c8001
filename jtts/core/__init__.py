"""Core synthesis components.

Exports:
- Catalog: VoiceOption, JAPANESE_VOICES, ranges and defaults
- Interfaces: SpeechProvider, ProviderRequest
- Service: SynthesisService, AudioResult
"""

from jtts.core.interfaces import ProviderRequest, SpeechProvider
from jtts.core.synthesis_service import AudioResult, SynthesisService
from jtts.core.voices import (
    DEFAULT_PITCH,
    DEFAULT_SELECTED_VOICES,
    DEFAULT_SPEED,
    JAPANESE_VOICES,
    PITCH_RANGE,
    SPEED_RANGE,
    Gender,
    ParameterRange,
    VoiceOption,
    get_voice,
    group_by_family,
    is_known_voice,
    voice_ids,
)

__all__ = [
    # Catalog
    "Gender",
    "VoiceOption",
    "ParameterRange",
    "JAPANESE_VOICES",
    "SPEED_RANGE",
    "PITCH_RANGE",
    "DEFAULT_SPEED",
    "DEFAULT_PITCH",
    "DEFAULT_SELECTED_VOICES",
    "get_voice",
    "is_known_voice",
    "voice_ids",
    "group_by_family",
    # Interfaces
    "SpeechProvider",
    "ProviderRequest",
    # Service
    "SynthesisService",
    "AudioResult",
]
