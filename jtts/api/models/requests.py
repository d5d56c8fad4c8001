"""API request models."""

from pydantic import BaseModel, ConfigDict, Field


class SynthesizeRequest(BaseModel):
    """
    Body of POST /api/synthesize.

    Required fields are declared optional here so that a missing text or
    voiceId reaches the service and is reported as "Missing required fields"
    rather than as a schema error.
    """

    text: str | None = Field(default=None, description="Japanese text to synthesize")
    voice_id: str | None = Field(
        default=None,
        alias="voiceId",
        description="Catalog voice id, e.g. 'ja-JP-Neural2-B'",
    )
    speed: float | None = Field(default=None, description="Speaking rate (0.25-1.0)")
    pitch: int | None = Field(default=None, description="Whole semitones (-20 to 20)")
    preview: bool = Field(
        default=False,
        description="Return base64 JSON for inline playback instead of an MP3 attachment",
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
