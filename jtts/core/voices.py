"""Japanese voice catalog and form parameter ranges.

The catalog is static reference data: it never changes at runtime and every
other component validates voice ids against it.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Gender(str, Enum):
    """Voice gender as reported by the provider."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    NEUTRAL = "NEUTRAL"


class VoiceOption(BaseModel):
    """A synthesizable voice identity."""

    id: str = Field(..., description="Provider voice name, e.g. 'ja-JP-Neural2-B'")
    name: str = Field(..., description="Display label")
    gender: Gender
    language_code: str = Field(default="ja-JP")

    model_config = {"frozen": True}

    @property
    def family(self) -> str:
        """Voice family segment of the id (Neural2, Standard, Wavenet)."""
        parts = self.id.split("-")
        return parts[2] if len(parts) > 2 else self.id


class ParameterRange(BaseModel):
    """Inclusive slider range for a numeric synthesis parameter."""

    min: float
    max: float
    step: float

    model_config = {"frozen": True}

    def clamp(self, value: float) -> float:
        return max(self.min, min(self.max, value))

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


JAPANESE_VOICES: tuple[VoiceOption, ...] = (
    VoiceOption(id="ja-JP-Neural2-B", name="Neural2 B", gender=Gender.FEMALE),
    VoiceOption(id="ja-JP-Neural2-C", name="Neural2 C", gender=Gender.MALE),
    VoiceOption(id="ja-JP-Neural2-D", name="Neural2 D", gender=Gender.MALE),
    VoiceOption(id="ja-JP-Standard-A", name="Standard A", gender=Gender.FEMALE),
    VoiceOption(id="ja-JP-Standard-B", name="Standard B", gender=Gender.FEMALE),
    VoiceOption(id="ja-JP-Standard-C", name="Standard C", gender=Gender.MALE),
    VoiceOption(id="ja-JP-Standard-D", name="Standard D", gender=Gender.MALE),
    VoiceOption(id="ja-JP-Wavenet-A", name="Wavenet A", gender=Gender.FEMALE),
    VoiceOption(id="ja-JP-Wavenet-B", name="Wavenet B", gender=Gender.FEMALE),
    VoiceOption(id="ja-JP-Wavenet-C", name="Wavenet C", gender=Gender.MALE),
    VoiceOption(id="ja-JP-Wavenet-D", name="Wavenet D", gender=Gender.MALE),
)

_VOICES_BY_ID = {voice.id: voice for voice in JAPANESE_VOICES}

SPEED_RANGE = ParameterRange(min=0.25, max=1.0, step=0.25)
PITCH_RANGE = ParameterRange(min=-20, max=20, step=1)

DEFAULT_SPEED = 1.0
DEFAULT_PITCH = 0
DEFAULT_SELECTED_VOICES: tuple[str, ...] = ("ja-JP-Neural2-B",)


def get_voice(voice_id: str) -> VoiceOption | None:
    """Look up a voice by id, returning None when it is not in the catalog."""
    return _VOICES_BY_ID.get(voice_id)


def is_known_voice(voice_id: str) -> bool:
    return voice_id in _VOICES_BY_ID


def voice_ids() -> list[str]:
    """All catalog ids in catalog order."""
    return [voice.id for voice in JAPANESE_VOICES]


def group_by_family(voices: tuple[VoiceOption, ...] = JAPANESE_VOICES) -> dict[str, list[VoiceOption]]:
    """Group voices by family, keeping first-seen family order and catalog order."""
    groups: dict[str, list[VoiceOption]] = {}
    for voice in voices:
        groups.setdefault(voice.family, []).append(voice)
    return groups


def clamp_speed(speed: float) -> float:
    return SPEED_RANGE.clamp(float(speed))


def clamp_pitch(pitch: float) -> int:
    return int(round(PITCH_RANGE.clamp(float(pitch))))
