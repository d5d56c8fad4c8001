"""FastAPI application factory.

Provides:
- create_app(): Application factory function
- Lifespan context manager that builds the speech provider at startup
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jtts.api.middleware.error_handler import register_exception_handlers
from jtts.api.middleware.request_context import RequestContextMiddleware
from jtts.api.routers import health, synthesis, voices
from jtts.config import Settings, get_settings
from jtts.core.interfaces import SpeechProvider
from jtts.core.synthesis_service import SynthesisService
from jtts.providers import build_provider
from jtts.utils.logging import get_logger, setup_logging

logger = get_logger("system")


def attach_provider(app: FastAPI, provider: SpeechProvider, settings: Settings) -> SynthesisService:
    """Wrap a provider in a SynthesisService and expose it on app.state."""
    service = SynthesisService.from_settings(provider, settings.provider)
    app.state.synthesis_service = service
    return service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    On startup the provider is built from settings unless one was injected
    through create_app(); ProviderConfigurationError propagates and aborts
    startup. On shutdown an owned provider is closed.
    """
    settings: Settings = app.state.settings

    setup_logging(
        level=settings.log_level,
        format=settings.log_format,
        service_name=settings.app.name,
    )

    logger.info(
        "Starting jtts",
        version=settings.app.version,
        environment=settings.app.environment.value,
        debug=settings.app.debug,
    )

    owned_provider: SpeechProvider | None = None
    if getattr(app.state, "synthesis_service", None) is None:
        owned_provider = build_provider(settings.provider)
        attach_provider(app, owned_provider, settings)

    logger.info(
        "Synthesis proxy ready",
        provider=app.state.synthesis_service.provider.name,
        language_code=settings.provider.language_code,
        timeout_seconds=settings.provider.timeout_seconds,
    )

    yield

    logger.info("Shutting down jtts")
    if owned_provider is not None:
        await owned_provider.close()
        app.state.synthesis_service = None
    logger.info("Shutdown complete")


def create_app(
    settings: Settings | None = None,
    provider: SpeechProvider | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Optional settings override (uses get_settings() if None)
        provider: Optional pre-built provider; when given it is attached
            immediately and the lifespan does not build or close one

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="jtts",
        version=settings.app.version,
        description="Japanese text-to-speech synthesis proxy",
        docs_url="/docs" if settings.app.debug else None,
        redoc_url="/redoc" if settings.app.debug else None,
        openapi_url="/openapi.json" if settings.app.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.synthesis_service = None

    if provider is not None:
        attach_provider(app, provider, settings)

    register_exception_handlers(app)

    # First added is innermost
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )

    app.include_router(health.router)
    app.include_router(voices.router)
    app.include_router(synthesis.router)

    return app
