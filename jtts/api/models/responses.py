"""API response models."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from jtts.core.voices import ParameterRange, VoiceOption


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""

    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Error code")
    request_id: str | None = Field(default=None, description="Request ID for tracing")


class PreviewResponse(BaseModel):
    """Preview-mode synthesis result."""

    audio_content: str = Field(..., alias="audioContent", description="Base64 encoded MP3")

    model_config = ConfigDict(populate_by_name=True)


class VoiceResponse(BaseModel):
    """One catalog entry."""

    id: str
    name: str
    gender: Literal["MALE", "FEMALE", "NEUTRAL"]
    language_code: str = Field(..., alias="languageCode")
    family: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_voice(cls, voice: VoiceOption) -> "VoiceResponse":
        return cls(
            id=voice.id,
            name=voice.name,
            gender=voice.gender.value,
            language_code=voice.language_code,
            family=voice.family,
        )


class DefaultsResponse(BaseModel):
    """Initial form values."""

    speed: float
    pitch: int
    selected_voices: list[str] = Field(..., alias="selectedVoices")

    model_config = ConfigDict(populate_by_name=True)


class VoiceListResponse(BaseModel):
    """Voice catalog with slider ranges and form defaults."""

    voices: list[VoiceResponse] = Field(default_factory=list)
    total: int = Field(..., description="Number of voices returned")
    speed_range: ParameterRange = Field(..., alias="speedRange")
    pitch_range: ParameterRange = Field(..., alias="pitchRange")
    defaults: DefaultsResponse

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall health status"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(..., description="Application version")


class ReadinessResponse(BaseModel):
    """Readiness probe response."""

    ready: bool = Field(..., description="Whether the service is ready")
    checks: dict[str, bool] = Field(default_factory=dict)
