"""Error hierarchy for gift builder operations.

Failures are confined to three boundaries: import parsing, external-service
calls and persistence I/O. Structural mutations on the block store never
raise; a missing block id is absorbed as a no-op.
"""

from typing import Any, Dict, Optional


class GiftBuilderError(Exception):
    """Base exception for all gift builder errors.

    Attributes
    ----------
    message : str
        Human-readable error description.
    context : dict
        Additional context for debugging (offending field, block id, ...).
    recoverable : bool
        Whether retrying the operation can succeed.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if recoverable is not None:
            self.recoverable = recoverable

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context,
        }


class ValidationError(GiftBuilderError):
    """Malformed configuration: parse failure or schema mismatch."""


class NotFoundError(GiftBuilderError):
    """A block id does not reference a block in the document."""


class ExternalServiceError(GiftBuilderError):
    """AI generation failed or returned an unusable answer."""

    recoverable = True


class GenerationTimeoutError(ExternalServiceError):
    """AI generation did not answer within the configured timeout."""


class GenerationCancelledError(ExternalServiceError):
    """AI generation was cancelled before its answer was delivered."""


class MediaAccessError(GiftBuilderError):
    """Microphone, camera or file access was denied."""


class PersistenceError(GiftBuilderError):
    """Durable storage could not be read or written."""

    recoverable = True
