"""Client-side errors.

Every error carries a human-readable message suitable for display next to
the control that triggered it.
"""


class ClientError(Exception):
    """Base class for preview/batch client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailedError(ClientError):
    """A precondition failed before any network call was made."""


class SynthesisRequestError(ClientError):
    """The synthesis proxy rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GenerationInProgressError(ClientError):
    """A batch was submitted while another batch is still running."""

    def __init__(self) -> None:
        super().__init__("Audio generation is already in progress")
