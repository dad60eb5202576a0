"""Response models for the video-processor entry points."""

from pydantic import BaseModel


class ProcessVideoResponse(BaseModel):
    """JSON body describing the outcome of a processing request."""

    success: bool
    message: str
    output_key: str | None = None
    frame_count: int | None = None
    hash: str | None = None
    error: str | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class JobResponse(BaseModel, frozen=True):
    """Transport-neutral response: a status code and a JSON body."""

    status_code: int
    body: str
