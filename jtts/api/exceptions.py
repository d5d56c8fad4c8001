"""Custom exceptions for the synthesis proxy.

Exception hierarchy with unique error codes:
- TTSBaseException: Base with error_code, message, details, http_status
- InvalidRequestError (400): Missing fields, unknown voice, out-of-range values
- SynthesisFailedError (500): Any upstream provider failure, flattened
- ProviderNotReadyError (503): No provider attached to the application
"""

from typing import Any

# Message returned for every upstream failure; provider detail stays in the logs.
SYNTHESIS_FAILED_MESSAGE = "Failed to synthesize speech"


class TTSBaseException(Exception):
    """
    Base exception for all proxy errors.

    All exceptions have:
    - error_code: Unique string identifier (e.g., "JTTS_E100")
    - message: Human-readable error message
    - details: Additional context as a dictionary (logged, never sent for 5xx)
    - http_status: HTTP status code for the response
    """

    error_code: str = "JTTS_E000"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
        http_status: int | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        if http_status is not None:
            self.http_status = http_status
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the JSON error body."""
        return {"error": self.message, "code": self.error_code}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.error_code}, message={self.message!r})"


# =============================================================================
# 400 Bad Request
# =============================================================================


class InvalidRequestError(TTSBaseException):
    """Raised when the synthesis request is malformed (400)."""

    error_code = "JTTS_E100"
    http_status = 400

    def __init__(
        self,
        message: str = "Invalid request",
        details: dict[str, Any] | None = None,
        field: str | None = None,
    ) -> None:
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message=message, details=details)


class MissingFieldError(InvalidRequestError):
    """Raised when text or voiceId is absent or empty (400)."""

    error_code = "JTTS_E101"

    def __init__(self, fields: list[str] | None = None) -> None:
        super().__init__(
            message="Missing required fields",
            details={"fields": fields or []},
        )


class InvalidParameterError(InvalidRequestError):
    """Raised when speed or pitch is outside its allowed range (400)."""

    error_code = "JTTS_E102"

    def __init__(
        self,
        parameter: str,
        value: Any,
        min_value: Any = None,
        max_value: Any = None,
    ) -> None:
        details: dict[str, Any] = {"parameter": parameter, "value": value}
        if min_value is not None:
            details["min_value"] = min_value
        if max_value is not None:
            details["max_value"] = max_value
        message = f"Invalid value for '{parameter}': {value}"
        if min_value is not None and max_value is not None:
            message += f" (allowed {min_value} to {max_value})"
        super().__init__(message=message, details=details)


class VoiceNotFoundError(InvalidRequestError):
    """Raised when voiceId is not in the catalog (400)."""

    error_code = "JTTS_E103"

    def __init__(self, voice_id: str) -> None:
        super().__init__(
            message=f"Unknown voice: {voice_id}",
            details={"voice_id": voice_id},
        )


# =============================================================================
# 500 Internal Server Error
# =============================================================================


class SynthesisFailedError(TTSBaseException):
    """Raised when the upstream provider call fails for any reason (500)."""

    error_code = "JTTS_E500"
    http_status = 500

    def __init__(self, reason: str | None = None, voice_id: str | None = None) -> None:
        details: dict[str, Any] = {}
        if reason:
            details["reason"] = reason
        if voice_id:
            details["voice_id"] = voice_id
        super().__init__(message=SYNTHESIS_FAILED_MESSAGE, details=details)


class SynthesisTimeoutError(SynthesisFailedError):
    """Raised when the upstream provider does not answer in time (500)."""

    error_code = "JTTS_E501"

    def __init__(self, timeout_seconds: float, voice_id: str | None = None) -> None:
        super().__init__(reason=f"timed out after {timeout_seconds}s", voice_id=voice_id)
        self.details["timeout_seconds"] = timeout_seconds


# =============================================================================
# 503 Service Unavailable
# =============================================================================


class ProviderNotReadyError(TTSBaseException):
    """Raised when no speech provider is attached to the application (503)."""

    error_code = "JTTS_E600"
    http_status = 503

    def __init__(self) -> None:
        super().__init__(message="Speech provider is not available")
