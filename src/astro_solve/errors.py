"""Error taxonomy for the plate-solving pipeline."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification attached to every user-facing failure."""

    INVALID_INPUT = "invalid_input"
    IO_ERROR = "io_error"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    SCHEMA_MISMATCH = "schema_mismatch"
    SERVICE_ERROR = "service_error"
    PRECONDITION = "precondition"


class AstroSolveError(Exception):
    """Base exception carrying a kind and a message safe to show users."""

    kind: ErrorKind
    default_message: str = "An unknown error occurred during analysis."

    def __init__(
        self, message: str | None = None, *, detail: str | None = None
    ) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(
            self.message if detail is None else f"{self.message} ({detail})"
        )


class InvalidImageError(AstroSolveError):
    """Raised when the selected file is not an image."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "Please select a valid image file."


class ImageReadError(AstroSolveError):
    """Raised when the selected file cannot be read."""

    kind = ErrorKind.IO_ERROR
    default_message = "The selected image could not be read."


class EmptyResponseError(AstroSolveError):
    """Raised when the vision service returns no text."""

    kind = ErrorKind.EMPTY_RESPONSE
    default_message = (
        "The AI returned an empty response. The image might be unidentifiable."
    )


class MalformedResponseError(AstroSolveError):
    """Raised when the vision service reply is not valid JSON."""

    kind = ErrorKind.MALFORMED_RESPONSE
    default_message = (
        "Failed to parse the AI's response. "
        "The model may not have been able to identify the image content."
    )


class SchemaMismatchError(AstroSolveError):
    """Raised when a parsed reply does not match the plate-solve shape."""

    kind = ErrorKind.SCHEMA_MISMATCH
    default_message = "AI response is malformed or missing required fields."


class ServiceError(AstroSolveError):
    """Raised for transport or provider failures."""

    kind = ErrorKind.SERVICE_ERROR
    default_message = "An error occurred while communicating with the AI service."


class PreconditionError(AstroSolveError):
    """Raised when an operation is requested in the wrong session state."""

    kind = ErrorKind.PRECONDITION
    default_message = "Please select an image first."
