"""Logging configuration and utilities.

Provides:
- JSON formatter for production (structured logs)
- Pretty formatter for development (colored, readable)
- Log context using contextvars for request-scoped data
- ContextLogger wrapper accepting structured keyword fields
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

# Context variable for request-scoped logging data
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# ANSI color codes for pretty formatting
COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
    "BOLD": "\033[1m",
    "DIM": "\033[2m",
}

# LogRecord attributes that are never treated as structured extras
_RECORD_FIELDS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs", "pathname",
    "process", "processName", "relativeCreated", "stack_info",
    "exc_info", "exc_text", "thread", "threadName", "taskName",
    "message", "request_id",
})

NAMED_LOGGERS = ("api", "synthesis", "client", "system")


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_FIELDS and not key.startswith("_")
    }


class LogContext:
    """Context manager for request-scoped logging data."""

    def __init__(self, **kwargs: Any) -> None:
        self._token = None
        self._data = kwargs

    def __enter__(self) -> "LogContext":
        current = _log_context.get().copy()
        current.update(self._data)
        self._token = _log_context.set(current)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._token is not None:
            _log_context.reset(self._token)


def get_log_context() -> dict[str, Any]:
    """Get the current logging context."""
    return _log_context.get().copy()


class ContextFilter(logging.Filter):
    """Filter that injects context variables into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _log_context.get()
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        if not hasattr(record, "request_id"):
            record.request_id = context.get("request_id", "-")
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for production structured logging."""

    def __init__(self, service_name: str = "jtts") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        request_id = getattr(record, "request_id", None)
        if request_id and request_id != "-":
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        for key, value in _record_extras(record).items():
            if key in log_data:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class PrettyFormatter(logging.Formatter):
    """Pretty formatter for development with colors."""

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors:
            level_color = COLORS.get(record.levelname, "")
            reset = COLORS["RESET"]
            dim = COLORS["DIM"]
            bold = COLORS["BOLD"]
        else:
            level_color = reset = dim = bold = ""

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        parts = [
            f"{dim}{timestamp}{reset}",
            f"{level_color}{record.levelname:<8}{reset}",
            f"{dim}{record.name:<10}{reset}",
        ]

        request_id = getattr(record, "request_id", None)
        if request_id and request_id != "-":
            parts.append(f"{dim}[{request_id[:8]}]{reset}")

        parts.append(f"{bold}{record.getMessage()}{reset}")
        message = " │ ".join(parts)

        extras = _record_extras(record)
        if extras:
            extras_str = " ".join(f"{dim}{k}={reset}{v}" for k, v in extras.items())
            message += f"\n         {extras_str}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


class ContextLogger:
    """Logger wrapper that supports structured logging with context."""

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)
        self._static_context: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **kwargs: Any) -> "ContextLogger":
        """Create a new logger with additional static context."""
        new_logger = ContextLogger(self._logger.name)
        new_logger._static_context = {**self._static_context, **kwargs}
        return new_logger

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        extra = {**self._static_context, **kwargs}
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        extra = {**self._static_context, **kwargs}
        self._logger.exception(message, extra=extra)


_loggers: dict[str, ContextLogger] = {}


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger instance.

    Named loggers:
    - api: HTTP request/response logging
    - synthesis: upstream provider calls
    - client: preview/batch client flows
    - system: startup/shutdown
    """
    if name not in _loggers:
        _loggers[name] = ContextLogger(name)
    return _loggers[name]


def setup_logging(
    level: str = "INFO",
    format: str = "pretty",
    service_name: str = "jtts",
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ('json' or 'pretty')
        service_name: Name of the service for log context
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.addFilter(ContextFilter())

    if format == "json":
        console_handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        console_handler.setFormatter(PrettyFormatter())

    root_logger.addHandler(console_handler)

    for logger_name in NAMED_LOGGERS:
        logging.getLogger(logger_name).setLevel(log_level)

    # Reduce noise from third-party libraries
    for noisy in ("uvicorn.access", "httpx", "httpcore", "google", "grpc", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    get_logger("system").info(
        "Logging initialized",
        log_level=level,
        log_format=format,
        service=service_name,
    )
