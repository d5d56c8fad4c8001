"""Speech synthesis proxy endpoint.

POST /api/synthesize
- preview=true: JSON {"audioContent": <base64 MP3>}
- preview=false: MP3 attachment named tts-<voiceId>.mp3
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from jtts.api.dependencies import RequestIdDep, SynthesisServiceDep
from jtts.api.models.requests import SynthesizeRequest
from jtts.api.models.responses import ErrorResponse, PreviewResponse
from jtts.utils.logging import get_logger

logger = get_logger("api")

router = APIRouter(prefix="/api", tags=["Synthesis"])


@router.post(
    "/synthesize",
    response_model=None,
    responses={
        200: {
            "content": {"audio/mpeg": {}, "application/json": {}},
            "description": "MP3 attachment, or base64 JSON in preview mode",
        },
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def synthesize(
    body: SynthesizeRequest,
    service: SynthesisServiceDep,
    request_id: RequestIdDep,
) -> Response:
    """
    Synthesize Japanese speech for one voice.

    Speed defaults to 1.0 and pitch to 0 when omitted.
    """
    result = await service.synthesize(
        text=body.text,
        voice_id=body.voice_id,
        speed=body.speed,
        pitch=body.pitch,
    )

    if body.preview:
        logger.debug("Returning preview payload", request_id=request_id, voice_id=result.voice_id)
        preview = PreviewResponse(audio_content=result.to_base64())
        return JSONResponse(content=preview.model_dump(by_alias=True))

    return Response(
        content=result.audio_data,
        media_type=result.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Voice-ID": result.voice_id,
        },
    )
