"""Infrastructure implementations."""

from .ffmpeg_extractor import FFmpegFrameExtractor
from .local_file_manager import LocalFileManager
from .minio_storage import MinioStorageClient
from .rabbitmq_broker import LazyRabbitMQPublisher, RabbitMQBroker, RabbitMQPublisher

__all__ = [
    "FFmpegFrameExtractor",
    "LazyRabbitMQPublisher",
    "LocalFileManager",
    "MinioStorageClient",
    "RabbitMQBroker",
    "RabbitMQPublisher",
]
