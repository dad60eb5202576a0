"""Shared fixtures and in-memory fakes for the video-processor tests."""

import os
from collections.abc import Iterator
from typing import BinaryIO

import pytest

from video_processor.domain.models import ExtractionResult
from video_processor.exceptions import (
    EventPublishError,
    StorageDeleteError,
    StorageDownloadError,
    StorageObjectNotFoundError,
    StorageUploadError,
)
from video_processor.handlers import VideoProcessingHandler
from video_processor.infrastructure.interfaces import (
    FrameExtractor,
    MessagePublisher,
    StorageClient,
)
from video_processor.infrastructure.local_file_manager import LocalFileManager

STATUS_ROUTING_KEY = "video.status.updated"


class FakeStorage(StorageClient):
    """In-memory object store that streams objects in small chunks."""

    def __init__(self, objects: dict[str, bytes] | None = None, chunk_size: int = 4):
        self.objects = dict(objects or {})
        self.chunk_size = chunk_size
        self.uploads: dict[str, tuple[bytes, str, int]] = {}
        self.deleted: list[str] = []
        self.download_calls: list[str] = []
        self.fail_download = False
        self.fail_upload = False
        self.fail_delete = False

    def download(self, object_name: str) -> Iterator[bytes]:
        self.download_calls.append(object_name)
        if object_name not in self.objects:
            raise StorageObjectNotFoundError(object_name)
        if self.fail_download:
            raise StorageDownloadError(object_name, ConnectionError("connection reset"))
        data = self.objects[object_name]
        return iter(
            [data[i : i + self.chunk_size] for i in range(0, len(data), self.chunk_size)]
        )

    def upload(self, object_name: str, data: BinaryIO, size: int, content_type: str) -> str:
        if self.fail_upload:
            raise StorageUploadError(object_name, ConnectionError("upload refused"))
        self.uploads[object_name] = (data.read(), content_type, size)
        return object_name

    def delete(self, object_name: str) -> None:
        if self.fail_delete:
            raise StorageDeleteError(object_name, PermissionError("access denied"))
        self.deleted.append(object_name)
        self.objects.pop(object_name, None)

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        pass


class FakeExtractor(FrameExtractor):
    """Reports a fixed frame count and writes a small archive through the file manager."""

    def __init__(self, file_manager: LocalFileManager, frame_count: int = 3):
        self.file_manager = file_manager
        self.frame_count = frame_count
        self.validate_calls: list[str] = []
        self.extract_calls: list[tuple[str, float, str]] = []
        self.validation_error: Exception | None = None
        self.extraction_error: BaseException | None = None

    def validate(self, video_path: str) -> None:
        self.validate_calls.append(video_path)
        if self.validation_error is not None:
            raise self.validation_error

    def extract(self, video_path: str, frame_rate: float, output_format: str) -> ExtractionResult:
        self.extract_calls.append((video_path, frame_rate, output_format))
        if self.extraction_error is not None:
            raise self.extraction_error
        archive_path = self.file_manager.create_temp_file("frames_", ".zip")
        with open(archive_path, "wb") as f:
            f.write(b"zipdata")
        return ExtractionResult(frame_count=self.frame_count, archive_path=archive_path)


class FakePublisher(MessagePublisher):
    def __init__(self):
        self.published: list[tuple[str, dict]] = []
        self.fail = False

    def publish(self, routing_key: str, payload: dict) -> None:
        if self.fail:
            raise EventPublishError(routing_key, ConnectionError("broker down"))
        self.published.append((routing_key, payload))


class RecordingFileManager(LocalFileManager):
    """Local file manager that remembers every temp file it created and deleted."""

    def __init__(self, temp_dir: str):
        super().__init__(temp_dir)
        self.created: list[str] = []
        self.deleted: list[str] = []

    def create_temp_file(self, prefix: str, suffix: str) -> str:
        path = super().create_temp_file(prefix, suffix)
        self.created.append(path)
        return path

    def delete_file(self, file_path: str) -> None:
        self.deleted.append(file_path)
        super().delete_file(file_path)

    def leaked(self) -> list[str]:
        return [path for path in self.created if os.path.exists(path)]


@pytest.fixture
def file_manager(tmp_path) -> RecordingFileManager:
    return RecordingFileManager(str(tmp_path))


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def extractor(file_manager) -> FakeExtractor:
    return FakeExtractor(file_manager)


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def handler(storage, extractor, file_manager, publisher) -> VideoProcessingHandler:
    return VideoProcessingHandler(
        storage=storage,
        extractor=extractor,
        file_manager=file_manager,
        publisher=publisher,
        status_routing_key=STATUS_ROUTING_KEY,
    )

