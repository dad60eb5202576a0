"""Presentation boundary mapping processing outcomes to responses."""

import logging

from video_processor.domain import ProcessingRequest, ProcessingResult
from video_processor.exceptions import ErrorKind, ProcessingError
from video_processor.handlers import VideoProcessingHandler
from video_processor.response_models import JobResponse, ProcessVideoResponse

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INTERNAL: 500,
}


def status_code_for(error: ProcessingError) -> int:
    """Maps an error kind to an HTTP-equivalent status code."""
    return STATUS_CODES.get(error.kind, 500)


def present_result(result: ProcessingResult) -> ProcessVideoResponse:
    return ProcessVideoResponse(
        success=result.success,
        message=result.message,
        output_key=result.output_key or None,
        frame_count=result.frame_count or None,
        hash=result.hash or None,
        error=result.error or None,
    )


def present_error(error: ProcessingError) -> ProcessVideoResponse:
    if error.result is not None:
        return present_result(error.result)
    return ProcessVideoResponse(
        success=False,
        message="Processing failed",
        error=str(error),
    )


class VideoController:
    """Runs the processing handler and renders its outcome."""

    def __init__(self, handler: VideoProcessingHandler):
        self._handler = handler

    def process_video(self, request: ProcessingRequest) -> JobResponse:
        logger.info(
            "Controller received video processing request",
            extra={"video_key": request.video_key},
        )
        try:
            result = self._handler.process(request)
        except ProcessingError as e:
            status_code = status_code_for(e)
            logger.error(
                "Video processing failed",
                extra={"video_key": request.video_key, "status_code": status_code},
            )
            return JobResponse(status_code=status_code, body=present_error(e).to_json())

        return JobResponse(status_code=200, body=present_result(result).to_json())
