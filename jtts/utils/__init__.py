"""Utility modules."""

from jtts.utils.logging import (
    ContextLogger,
    LogContext,
    get_log_context,
    get_logger,
    setup_logging,
)
from jtts.utils.timing import Timer, timed_async

__all__ = [
    "ContextLogger",
    "LogContext",
    "get_log_context",
    "get_logger",
    "setup_logging",
    "Timer",
    "timed_async",
]
