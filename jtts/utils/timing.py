"""Timing utilities for performance measurement.

Provides:
- Timer context manager (sync and async) that logs elapsed time
- @timed_async decorator for coroutine functions
"""

import functools
import time
from collections.abc import Callable, Coroutine
from typing import Any, ParamSpec, TypeVar

from jtts.utils.logging import ContextLogger, get_logger

_default_logger = get_logger("system")

P = ParamSpec("P")
T = TypeVar("T")


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer("synthesize", logger=logger, log_level="info") as t:
            do_something()
        print(f"Took {t.elapsed_ms}ms")
    """

    def __init__(
        self,
        name: str = "operation",
        log: bool = True,
        log_level: str = "debug",
        logger: ContextLogger | None = None,
    ) -> None:
        self.name = name
        self.log = log
        self.log_level = log_level.lower()
        self.logger = logger or _default_logger
        self.start_time: float = 0
        self.end_time: float = 0
        self.duration: float = 0
        self._running = False

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self._running = True
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time
        self._running = False

        if not self.log:
            return

        log_fn = getattr(self.logger, self.log_level, self.logger.debug)
        if exc_type is not None:
            log_fn(
                f"{self.name} failed",
                duration_ms=round(self.duration * 1000, 2),
                error_type=exc_type.__name__,
            )
        else:
            log_fn(
                f"{self.name} completed",
                duration_ms=round(self.duration * 1000, 2),
            )

    async def __aenter__(self) -> "Timer":
        return self.__enter__()

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if not self._running:
            return self.duration
        return time.perf_counter() - self.start_time

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return self.elapsed * 1000


def timed_async(
    name: str | None = None,
    log_level: str = "debug",
    logger: ContextLogger | None = None,
) -> Callable[[Callable[P, Coroutine[Any, Any, T]]], Callable[P, Coroutine[Any, Any, T]]]:
    """
    Decorator for timing async functions.

    Usage:
        @timed_async("fetch_voices")
        async def fetch_voices():
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]]
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        operation_name = name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            async with Timer(operation_name, log_level=log_level, logger=logger):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
