"""Abstract interface for video validation and frame extraction."""

from abc import ABC, abstractmethod

from video_processor.domain.models import ExtractionResult


class FrameExtractor(ABC):
    """Abstract base class for frame extraction backends."""

    @abstractmethod
    def validate(self, video_path: str) -> None:
        """
        Checks that a local file holds a decodable video stream.

        Args:
            video_path: Path of the local video file.

        Raises:
            VideoFormatError: If the file is not a usable video.
        """

    @abstractmethod
    def extract(
        self, video_path: str, frame_rate: float, output_format: str
    ) -> ExtractionResult:
        """
        Extracts frames at a fixed rate and packages them into a zip archive.

        The archive is a temporary file that the caller owns and must delete.

        Args:
            video_path: Path of the local video file.
            frame_rate: Frames to extract per second of video.
            output_format: Image format of the frames ("jpg" or "png").

        Returns:
            ExtractionResult with the frame count and archive path.

        Raises:
            FrameExtractionError: If extraction or packaging fails.
        """
