"""
Error taxonomy for Link Platform.

Every failure the service reports to a caller is one of these classes.
Each carries the HTTP status it maps to so the API layer can translate
without a lookup table:

    ValidationError          -> 400  (malformed URL or code pattern)
    ConflictError            -> 409  (duplicate code)
    NotFoundError            -> 404  (unknown code)
    InternalError            -> 500  (store unreachable, unexpected failure)
      StorageError           -> 500  (driver/connection failure)
      CodeSpaceExhaustedError-> 500  (random code retries used up)

LLM Prompt Example:
    "Show how a small exception hierarchy with status codes attached keeps
    HTTP concerns out of business logic while still mapping cleanly to responses."
"""

DUPLICATE_CODE_MESSAGE = "Code already exists. Please try a different code."

__all__ = [
    "DUPLICATE_CODE_MESSAGE",
    "LinkError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "InternalError",
    "StorageError",
    "CodeSpaceExhaustedError",
]


class LinkError(Exception):
    """Base class for all domain errors raised by Link Platform."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LinkError):
    status_code = 400


class ConflictError(LinkError):
    status_code = 409


class NotFoundError(LinkError):
    status_code = 404


class InternalError(LinkError):
    """Server-side failure. The message is logged, never shown to callers."""

    status_code = 500


class StorageError(InternalError):
    """The storage backend could not complete an operation."""


class CodeSpaceExhaustedError(InternalError):
    """Every generated candidate collided with an existing code."""
