"""Custom exceptions for the video-processor service."""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from video_processor.domain.models import ProcessingResult


class ErrorKind(str, Enum):
    """Classification of a processing failure."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INVALID_INPUT = "invalid_input"
    INTERNAL = "internal"


class ProcessingError(Exception):
    """Base class for classified processing failures."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        result: "ProcessingResult | None" = None,
    ):
        self.message = message
        self.cause = cause
        self.result = result
        super().__init__(message)


class VideoNotFoundError(ProcessingError):
    """Raised when the source video object does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidVideoError(ProcessingError):
    """Raised when the source video fails format validation."""

    kind = ErrorKind.VALIDATION


class InvalidInputError(ProcessingError):
    """Raised for unsupported processing parameters or unusable output."""

    kind = ErrorKind.INVALID_INPUT


class InternalProcessingError(ProcessingError):
    """Raised for I/O, subprocess and storage failures."""

    kind = ErrorKind.INTERNAL


class ProcessingCancelled(BaseException):
    """
    Raised when the caller's deadline or termination signal fires.

    Derives from BaseException so it passes through the best-effort
    ``except Exception`` guards and aborts the run.
    """


class DeadlineExceeded(ProcessingCancelled):
    """Raised when a run outlives its deadline, as opposed to a termination signal."""


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class StorageObjectNotFoundError(StorageDownloadError):
    """Raised when the requested object does not exist in storage."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(object_name, cause)
        self.args = (f"Object '{object_name}' not found in storage",)


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class StorageDeleteError(Exception):
    """Raised when deleting a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to delete '{object_name}' from storage")


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")


class VideoFormatError(Exception):
    """Raised when a local video file cannot be decoded as a video."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        self.file_name = file_name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Invalid video file '{file_name}': {reason}")


class FrameExtractionError(Exception):
    """Raised when frame extraction from video fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        message = f"Failed to extract frames from '{file_name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
