"""Voice catalog endpoint.

GET /api/voices
"""

from fastapi import APIRouter

from jtts.api.models.responses import DefaultsResponse, VoiceListResponse, VoiceResponse
from jtts.core.voices import (
    DEFAULT_PITCH,
    DEFAULT_SELECTED_VOICES,
    DEFAULT_SPEED,
    JAPANESE_VOICES,
    PITCH_RANGE,
    SPEED_RANGE,
)

router = APIRouter(prefix="/api/voices", tags=["Voices"])


@router.get("", response_model=VoiceListResponse)
@router.get("/", response_model=VoiceListResponse, include_in_schema=False)
async def list_voices(family: str | None = None) -> VoiceListResponse:
    """
    List the voice catalog in catalog order.

    Optionally filter by family (Neural2, Standard, Wavenet; case-insensitive).
    """
    voices = list(JAPANESE_VOICES)
    if family:
        voices = [v for v in voices if v.family.lower() == family.lower()]

    return VoiceListResponse(
        voices=[VoiceResponse.from_voice(v) for v in voices],
        total=len(voices),
        speed_range=SPEED_RANGE,
        pitch_range=PITCH_RANGE,
        defaults=DefaultsResponse(
            speed=DEFAULT_SPEED,
            pitch=DEFAULT_PITCH,
            selected_voices=list(DEFAULT_SELECTED_VOICES),
        ),
    )
