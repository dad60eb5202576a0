"""Handler orchestrating the processing of one uploaded video."""

import logging

from video_processor.cancellation import deferred_cancellation
from video_processor.domain import (
    DEFAULT_PROCESSING_CONFIG,
    ExtractionResult,
    ProcessingConfig,
    ProcessingConfigInput,
    ProcessingRequest,
    ProcessingResult,
    VideoStatusEvent,
    derive_output_key,
    hash_while_writing,
    normalize_config,
)
from video_processor.exceptions import (
    InternalProcessingError,
    InvalidInputError,
    InvalidVideoError,
    ProcessingError,
    StorageObjectNotFoundError,
    VideoNotFoundError,
)
from video_processor.infrastructure.interfaces import (
    FileManager,
    FrameExtractor,
    MessagePublisher,
    StorageClient,
)

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPE = "application/zip"
STATUS_PROCESSED = "PROCESSED"
FAILURE_MESSAGE = "Processing failed"


class VideoProcessingHandler:
    """Turns a stored video into a content-addressed archive of its frames.

    Every temporary file created during a run is removed before ``process``
    returns or raises. Deleting the source video and publishing the status
    update are best-effort and never change the outcome.
    """

    def __init__(
        self,
        storage: StorageClient,
        extractor: FrameExtractor,
        file_manager: FileManager,
        publisher: MessagePublisher,
        status_routing_key: str,
        defaults: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
    ):
        self._storage = storage
        self._extractor = extractor
        self._file_manager = file_manager
        self._publisher = publisher
        self._status_routing_key = status_routing_key
        self._defaults = defaults

    def process(self, request: ProcessingRequest) -> ProcessingResult:
        """
        Processes a video end to end.

        Args:
            request: Identifies the source video and processing parameters.

        Returns:
            ProcessingResult describing the uploaded archive.

        Raises:
            VideoNotFoundError: If the source video does not exist.
            InvalidVideoError: If the source is not a usable video.
            InvalidInputError: If the output format is unsupported or no frames were extracted.
            InternalProcessingError: For any other download, extraction or upload failure.
        """
        extra = {"video_key": request.video_key}
        logger.info("Starting video processing", extra=extra)

        temp_files: list[tuple[str, str]] = []
        try:
            try:
                video_path = self._create_temp_file("video_", ".mp4")
                temp_files.append((video_path, "temp video file"))

                video_hash = self._download_source(request.video_key, video_path)
                self._validate_video(video_path)
                config = self._configure_processing(request.configuration)

                extraction = self._extract_frames(video_path, config)
                temp_files.append((extraction.archive_path, "temp zip file"))
                if extraction.frame_count == 0:
                    logger.warning("No frames extracted from video", extra=extra)
                    raise InvalidInputError("No frames extracted from video")

                output_key = self._upload_result(extraction.archive_path, video_hash)
            finally:
                self._cleanup_files(temp_files)
        except ProcessingError as e:
            e.result = ProcessingResult(
                success=False,
                message=FAILURE_MESSAGE,
                error=str(e),
            )
            logger.error(
                "Video processing failed",
                extra={**extra, "error_kind": e.kind.value, "error": str(e)},
            )
            raise

        self._delete_source(request.video_key)
        self._update_status(request, video_hash, STATUS_PROCESSED)

        logger.info(
            "Video processing completed successfully",
            extra={
                **extra,
                "frame_count": extraction.frame_count,
                "output_key": output_key,
                "hash": video_hash,
            },
        )
        return ProcessingResult(
            success=True,
            message=(
                f"Video processed successfully. "
                f"{extraction.frame_count} frames extracted."
            ),
            output_key=output_key,
            frame_count=extraction.frame_count,
            hash=video_hash,
        )

    def _create_temp_file(self, prefix: str, suffix: str) -> str:
        try:
            return self._file_manager.create_temp_file(prefix, suffix)
        except Exception as e:
            raise InternalProcessingError(f"Failed to create temp file: {e}", e) from e

    def _download_source(self, video_key: str, video_path: str) -> str:
        """Streams the source video into the temp file and returns its digest."""
        try:
            with self._file_manager.open_for_write(video_path) as destination:
                chunks = self._storage.download(video_key)
                video_hash = hash_while_writing(destination, chunks)
        except StorageObjectNotFoundError as e:
            raise VideoNotFoundError(f"Video '{video_key}' not found", e) from e
        except Exception as e:
            raise InternalProcessingError(f"Failed to download video: {e}", e) from e

        logger.info(
            "Video downloaded successfully",
            extra={"video_key": video_key, "local_path": video_path, "hash": video_hash},
        )
        return video_hash

    def _validate_video(self, video_path: str) -> None:
        try:
            self._extractor.validate(video_path)
        except Exception as e:
            raise InvalidVideoError(f"Failed to validate video: {e}", e) from e

    def _configure_processing(
        self, config_input: ProcessingConfigInput | None
    ) -> ProcessingConfig:
        config = normalize_config(config_input, self._defaults)
        logger.info(
            "Processing configuration resolved",
            extra={
                "frame_rate": config.frame_rate,
                "output_format": config.output_format,
                "custom": config_input is not None,
            },
        )
        return config

    def _extract_frames(
        self, video_path: str, config: ProcessingConfig
    ) -> ExtractionResult:
        try:
            return self._extractor.extract(
                video_path, config.frame_rate, config.output_format
            )
        except Exception as e:
            raise InternalProcessingError(f"Failed to extract frames: {e}", e) from e

    def _upload_result(self, archive_path: str, video_hash: str) -> str:
        output_key = derive_output_key(video_hash)
        try:
            size = self._file_manager.get_file_size(archive_path)
            with self._file_manager.open_for_read(archive_path) as data:
                self._storage.upload(output_key, data, size, ARCHIVE_CONTENT_TYPE)
        except Exception as e:
            raise InternalProcessingError(f"Failed to upload result: {e}", e) from e

        logger.info("Upload completed successfully", extra={"output_key": output_key})
        return output_key

    def _cleanup_files(self, temp_files: list[tuple[str, str]]) -> None:
        with deferred_cancellation():
            for file_path, description in temp_files:
                self._cleanup_file(file_path, description)

    def _cleanup_file(self, file_path: str, description: str) -> None:
        try:
            self._file_manager.delete_file(file_path)
        except Exception:
            logger.warning(
                f"Failed to delete {description}",
                exc_info=True,
                extra={"path": file_path},
            )

    def _delete_source(self, video_key: str) -> None:
        try:
            self._storage.delete(video_key)
            logger.info("Original video deleted", extra={"video_key": video_key})
        except Exception:
            logger.warning(
                "Failed to delete original video",
                exc_info=True,
                extra={"video_key": video_key},
            )

    def _update_status(
        self, request: ProcessingRequest, video_hash: str, status: str
    ) -> None:
        extra = {"video_id": request.video_id, "status": status}
        try:
            event = VideoStatusEvent(
                video_id=request.video_id,
                user_id=request.user_id,
                hash=video_hash,
                status=status,
            )
            self._publisher.publish(self._status_routing_key, event.model_dump())
            logger.info("Video status updated", extra=extra)
        except Exception as e:
            logger.warning(
                "Failed to update video status", extra={**extra, "error": str(e)}
            )
