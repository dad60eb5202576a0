"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    secure: bool = False
    video_bucket: str = "video-processor-raw-videos"
    processed_bucket: str = "video-processor-processed-images"


class QueueConfig(BaseModel, frozen=True):
    """RabbitMQ queue configuration."""

    name: str
    queue_type: str = "quorum"
    max_delivery_count: int = 3
    expected_routing_key: str
    dlq_name: str
    dlq_exchange_name: str = "dead_letter_exchange"
    dlq_routing_key: str


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection configuration."""

    host: str
    user: str
    password: str
    exchange_name: str = "events"
    status_routing_key: str = "video.status.updated"
    queue_config: QueueConfig | None = None


class ProcessingSettings(BaseModel, frozen=True):
    """Local processing configuration."""

    temp_dir: str
    ffmpeg_timeout_seconds: float = 600.0
    job_timeout_seconds: float = 900.0


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    rabbitmq: RabbitMQConfig
    processing: ProcessingSettings


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _default_temp_dir() -> str:
    # Lambda-style runtimes only guarantee /tmp to be writable
    if os.getenv("LAMBDA_RUNTIME_DIR"):
        return "/tmp"
    return os.getenv("TMPDIR", "/tmp")


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
            video_bucket=os.getenv(
                "K8S_JOB_ENV_VIDEO_BUCKET", "video-processor-raw-videos"
            ),
            processed_bucket=os.getenv(
                "K8S_JOB_ENV_PROCESSED_BUCKET", "video-processor-processed-images"
            ),
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", "rabbitmq"),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
            queue_config=QueueConfig(
                name="video_processing_queue",
                queue_type="quorum",
                max_delivery_count=3,
                expected_routing_key="video.upload.completed",
                dlq_name="dlq_video_processing",
                dlq_exchange_name="dead_letter_exchange",
                dlq_routing_key="video.processing.failed",
            ),
        ),
        processing=ProcessingSettings(
            temp_dir=os.getenv("VIDEO_PROCESSOR_TEMP_DIR", _default_temp_dir()),
            ffmpeg_timeout_seconds=_get_float("FFMPEG_TIMEOUT_SECONDS", 600.0),
            job_timeout_seconds=_get_float("JOB_TIMEOUT_SECONDS", 900.0),
        ),
    )
