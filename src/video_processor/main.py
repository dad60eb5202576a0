"""
Video Processor Service.

Turns an uploaded video into a zip archive of frames named after the video's
SHA-256 digest. It can run:
- As a one-shot job configured through K8S_JOB_ENV_* environment variables.
- As a worker consuming processing requests from a RabbitMQ queue.

Both modes log structured JSON and are traced with Datadog.
"""

import logging
import os
import sys

from ddtrace import patch_all

from video_processor.cancellation import cancel_after
from video_processor.config import load_config
from video_processor.dependencies import get_controller, get_worker
from video_processor.domain import (
    DEFAULT_FRAME_RATE,
    DEFAULT_OUTPUT_FORMAT,
    ProcessingConfigInput,
    ProcessingRequest,
)
from video_processor.exceptions import ProcessingCancelled
from video_processor.logging import bind_trace_id, setup_logging

logger = logging.getLogger(__name__)

USAGE = """Required environment variables:
  K8S_JOB_ENV_VIDEO_KEY=<object-key>          # storage key of the video file

Optional environment variables:
  K8S_JOB_ENV_VIDEO_BUCKET=<bucket-name>      # bucket for input videos
  K8S_JOB_ENV_PROCESSED_BUCKET=<bucket-name>  # bucket for output archives
  K8S_JOB_ENV_VIDEO_EXPORT_FORMAT=jpg|png     # output format (default: jpg)
  K8S_JOB_ENV_VIDEO_EXPORT_FPS=1.0            # frame extraction rate (default: 1.0)
  K8S_JOB_ENV_VIDEO_ID=<id>                   # video id for the status update
  K8S_JOB_ENV_USER_ID=<id>                    # user id for the status update

Example:
  export K8S_JOB_ENV_VIDEO_KEY=videos/sample.mp4
  export K8S_JOB_ENV_VIDEO_EXPORT_FORMAT=jpg
  export K8S_JOB_ENV_VIDEO_EXPORT_FPS=2.0
  video-processor-job
"""


def parse_frame_rate(raw: str | None) -> float:
    """Parses the requested frame rate, falling back to the default on bad input."""
    if not raw:
        return DEFAULT_FRAME_RATE
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            "Invalid frame rate, using default",
            extra={"frame_rate": raw, "default": DEFAULT_FRAME_RATE},
        )
        return DEFAULT_FRAME_RATE


def request_from_env() -> ProcessingRequest | None:
    """Builds a processing request from the job environment, or None if no key is set."""
    video_key = os.getenv("K8S_JOB_ENV_VIDEO_KEY", "")
    if not video_key:
        return None
    return ProcessingRequest(
        video_key=video_key,
        video_id=os.getenv("K8S_JOB_ENV_VIDEO_ID") or None,
        user_id=os.getenv("K8S_JOB_ENV_USER_ID") or None,
        configuration=ProcessingConfigInput(
            frame_rate=parse_frame_rate(os.getenv("K8S_JOB_ENV_VIDEO_EXPORT_FPS")),
            output_format=(
                os.getenv("K8S_JOB_ENV_VIDEO_EXPORT_FORMAT") or DEFAULT_OUTPUT_FORMAT
            ),
        ),
    )


def run_job() -> int:
    """Processes the single video named by the environment. Returns the exit code."""
    patch_all()
    setup_logging()
    trace_id = bind_trace_id()

    request = request_from_env()
    if request is None:
        print(USAGE, file=sys.stderr)
        return 1

    config = load_config()
    logger.info(
        "Starting video processor job",
        extra={
            "trace_id": trace_id,
            "video_key": request.video_key,
            "video_bucket": config.minio.video_bucket,
            "processed_bucket": config.minio.processed_bucket,
        },
    )

    controller = get_controller(config)
    try:
        with cancel_after(config.processing.job_timeout_seconds):
            response = controller.process_video(request)
    except ProcessingCancelled as e:
        logger.error("Video processing cancelled", extra={"reason": str(e)})
        return 1

    print(response.body)
    return 0 if response.status_code == 200 else 1


def run_worker() -> None:
    """Starts the queue worker."""
    patch_all()
    setup_logging()
    worker = get_worker(load_config())
    worker.start()


def main() -> None:
    sys.exit(run_job())


if __name__ == "__main__":
    main()
