"""Health check endpoints.

Prefix: /health
"""

from fastapi import APIRouter, Request

from jtts.api.models.responses import HealthResponse, ReadinessResponse
from jtts.config import get_settings

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse, include_in_schema=False)
async def health_check() -> HealthResponse:
    """Basic health check - returns service status."""
    settings = get_settings()
    return HealthResponse(status="healthy", version=settings.app.version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Readiness probe - checks that a speech provider is attached and open.

    Does not call the upstream provider.
    """
    service = getattr(request.app.state, "synthesis_service", None)
    checks = {
        "config_valid": True,
        "provider_attached": service is not None,
        "provider_ready": service is not None and service.is_ready(),
    }
    return ReadinessResponse(ready=all(checks.values()), checks=checks)


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe - always {"status": "alive"} while the process responds."""
    return {"status": "alive"}
