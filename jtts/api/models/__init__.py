"""API request and response models."""

from jtts.api.models.requests import SynthesizeRequest
from jtts.api.models.responses import (
    DefaultsResponse,
    ErrorResponse,
    HealthResponse,
    PreviewResponse,
    ReadinessResponse,
    VoiceListResponse,
    VoiceResponse,
)

__all__ = [
    # Requests
    "SynthesizeRequest",
    # Responses
    "DefaultsResponse",
    "ErrorResponse",
    "HealthResponse",
    "PreviewResponse",
    "ReadinessResponse",
    "VoiceListResponse",
    "VoiceResponse",
]
