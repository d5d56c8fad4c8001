"""API middleware components."""

from jtts.api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    register_exception_handlers,
    tts_exception_handler,
    validation_exception_handler,
)
from jtts.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "register_exception_handlers",
    "tts_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "generic_exception_handler",
    "RequestContextMiddleware",
]
