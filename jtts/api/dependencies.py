"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from jtts.api.exceptions import ProviderNotReadyError
from jtts.core.synthesis_service import SynthesisService


def get_synthesis_service(request: Request) -> SynthesisService:
    """Get the synthesis service attached to application state at startup."""
    service: SynthesisService | None = getattr(request.app.state, "synthesis_service", None)
    if service is None or not service.is_ready():
        raise ProviderNotReadyError()
    return service


def get_request_id(request: Request) -> str:
    """Get the request ID from request state."""
    return getattr(request.state, "request_id", "unknown")


# Type aliases for cleaner dependency injection
SynthesisServiceDep = Annotated[SynthesisService, Depends(get_synthesis_service)]
RequestIdDep = Annotated[str, Depends(get_request_id)]
