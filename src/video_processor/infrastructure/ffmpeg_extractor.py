"""FFmpeg implementation of the FrameExtractor interface."""

import logging
import os
import subprocess
import zipfile

import moviepy
from moviepy.config import FFMPEG_BINARY

from video_processor.domain.models import ExtractionResult
from video_processor.exceptions import FrameExtractionError, VideoFormatError

from .interfaces import FileManager, FrameExtractor

logger = logging.getLogger(__name__)

# ffmpeg -q:v scale is 1-31, lower is better
DEFAULT_JPEG_QUALITY = "2"

_CODEC_ARGS = {
    "jpg": ["-vcodec", "mjpeg", "-q:v", DEFAULT_JPEG_QUALITY],
    "png": ["-vcodec", "png"],
}


class FFmpegFrameExtractor(FrameExtractor):
    """Validates videos with moviepy and extracts frames with the ffmpeg binary."""

    def __init__(
        self,
        file_manager: FileManager,
        ffmpeg_binary: str = FFMPEG_BINARY,
        timeout_seconds: float = 600.0,
    ):
        self._file_manager = file_manager
        self._ffmpeg = ffmpeg_binary
        self._timeout = timeout_seconds

    def validate(self, video_path: str) -> None:
        if not os.path.exists(video_path):
            raise VideoFormatError(video_path, "file does not exist")

        try:
            video = moviepy.VideoFileClip(video_path, audio=False)
        except Exception as e:
            logger.warning(
                "Opening video with moviepy failed",
                extra={"video_path": video_path, "error": str(e)},
            )
            raise VideoFormatError(video_path, "no decodable video stream", e) from e

        try:
            width, height = video.size
        finally:
            video.close()

        if width <= 0 or height <= 0:
            raise VideoFormatError(video_path, "video stream has no frame size")

        logger.info(
            "Video validated",
            extra={"video_path": video_path, "width": width, "height": height},
        )

    def extract(
        self, video_path: str, frame_rate: float, output_format: str
    ) -> ExtractionResult:
        """
        Extracts frames into a temporary directory and zips them.

        The frames directory is always removed. The archive is removed here
        only if packaging fails; otherwise it belongs to the caller.
        """
        if output_format not in _CODEC_ARGS:
            raise FrameExtractionError(
                video_path, ValueError(f"unsupported output format {output_format!r}")
            )

        frames_dir = self._file_manager.create_temp_dir("frames_")
        try:
            frame_paths = self._run_ffmpeg(
                video_path, frame_rate, output_format, frames_dir
            )
            archive_path = self._file_manager.create_temp_file("frames_", ".zip")
            try:
                self._create_zip(frame_paths, archive_path)
            except BaseException:
                self._file_manager.delete_file(archive_path)
                raise
        except FrameExtractionError:
            raise
        except Exception as e:
            logger.exception(
                "Frame packaging failed", extra={"video_path": video_path}
            )
            raise FrameExtractionError(video_path, e) from e
        finally:
            self._file_manager.delete_dir(frames_dir)

        logger.info(
            "Frames extracted",
            extra={
                "video_path": video_path,
                "frame_count": len(frame_paths),
                "archive_path": archive_path,
            },
        )
        return ExtractionResult(frame_count=len(frame_paths), archive_path=archive_path)

    def build_command(
        self, video_path: str, frame_rate: float, output_format: str, output_dir: str
    ) -> list[str]:
        """Builds the ffmpeg argument list for fixed-rate frame extraction."""
        frame_pattern = os.path.join(output_dir, f"frame_%04d.{output_format}")
        return [
            self._ffmpeg,
            "-nostdin",
            "-loglevel", "error",
            "-y",
            "-i", video_path,
            "-map", "0:v:0",
            "-an",
            "-vf", f"fps={frame_rate:g}",
            "-start_number", "0",
            "-f", "image2",
            *_CODEC_ARGS[output_format],
            "-frame_pts", "1",
            frame_pattern,
        ]

    def _run_ffmpeg(
        self, video_path: str, frame_rate: float, output_format: str, output_dir: str
    ) -> list[str]:
        cmd = self.build_command(video_path, frame_rate, output_format, output_dir)
        logger.info(
            "Running ffmpeg",
            extra={"video_path": video_path, "fps": frame_rate, "format": output_format},
        )

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise FrameExtractionError(
                video_path, RuntimeError(f"ffmpeg timed out after {self._timeout}s")
            ) from e
        except FileNotFoundError as e:
            raise FrameExtractionError(
                video_path, RuntimeError(f"ffmpeg binary not found: {self._ffmpeg}")
            ) from e

        if result.returncode != 0:
            raise FrameExtractionError(
                video_path,
                RuntimeError(
                    f"ffmpeg exited with code {result.returncode}: {result.stderr.strip()}"
                ),
            )

        return self._file_manager.list_files(output_dir, f"*.{output_format}")

    def _create_zip(self, files: list[str], archive_path: str) -> None:
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for file_path in files:
                zf.write(file_path, arcname=os.path.basename(file_path))
