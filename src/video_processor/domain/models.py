"""Domain models for the video processing service."""

from typing import Literal

from pydantic import BaseModel, Field, NonNegativeInt

OutputFormat = Literal["jpg", "png"]


class ProcessingConfigInput(BaseModel, frozen=True):
    """Processing parameters as supplied by the caller, before normalization."""

    frame_rate: float = 0.0
    output_format: str = ""


class ProcessingRequest(BaseModel, frozen=True):
    """Represents a request to turn one stored video into a frame archive."""

    video_key: str = Field(min_length=1)
    video_id: str | None = None
    user_id: str | None = None
    configuration: ProcessingConfigInput | None = None


class ProcessingConfig(BaseModel, frozen=True):
    """Normalized processing parameters."""

    frame_rate: float = Field(gt=0)
    output_format: OutputFormat


class ExtractionResult(BaseModel, frozen=True):
    """Frames extracted from a local video and packaged as an archive."""

    frame_count: int
    archive_path: str


class ProcessingResult(BaseModel, frozen=True):
    """Terminal outcome of a processing request."""

    success: bool
    message: str
    output_key: str | None = None
    frame_count: int = 0
    hash: str | None = None
    error: str | None = None


class VideoStatusEvent(BaseModel, frozen=True):
    """Status update published once a video has been processed."""

    video_id: NonNegativeInt
    user_id: NonNegativeInt
    hash: str
    status: str
