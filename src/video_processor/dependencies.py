"""Dependency wiring for the video-processor service."""

import logging

import pika
from minio import Minio
from pika.adapters.blocking_connection import BlockingChannel

from video_processor.config import AppConfig
from video_processor.controller import VideoController
from video_processor.handlers import VideoProcessingHandler
from video_processor.infrastructure import (
    FFmpegFrameExtractor,
    LazyRabbitMQPublisher,
    LocalFileManager,
    MinioStorageClient,
    RabbitMQBroker,
)
from video_processor.infrastructure.interfaces import MessagePublisher
from video_processor.worker import Worker

logger = logging.getLogger(__name__)


def get_storage(config: AppConfig) -> MinioStorageClient:
    """Returns a MinIO storage client with both buckets in place."""
    minio_client = Minio(
        endpoint=config.minio.endpoint,
        access_key=config.minio.user,
        secret_key=config.minio.password,
        secure=config.minio.secure,
    )
    storage = MinioStorageClient(
        minio_client,
        video_bucket=config.minio.video_bucket,
        processed_bucket=config.minio.processed_bucket,
    )
    storage.ensure_bucket_exists(config.minio.processed_bucket)
    return storage


def get_rabbit_channel(config: AppConfig) -> BlockingChannel:
    """Opens a blocking RabbitMQ connection and returns its channel."""
    credentials = pika.PlainCredentials(config.rabbitmq.user, config.rabbitmq.password)
    parameters = pika.ConnectionParameters(
        host=config.rabbitmq.host,
        credentials=credentials,
        heartbeat=0,
    )
    try:
        connection = pika.BlockingConnection(parameters)
    except Exception:
        logger.exception(
            "Failed to connect to RabbitMQ",
            extra={"host": config.rabbitmq.host, "username": config.rabbitmq.user},
        )
        raise
    return connection.channel()


def get_publisher(config: AppConfig) -> LazyRabbitMQPublisher:
    """Returns a status publisher that connects on its first publish."""
    return LazyRabbitMQPublisher(lambda: get_rabbit_channel(config), config.rabbitmq)


def get_handler(config: AppConfig, publisher: MessagePublisher) -> VideoProcessingHandler:
    """Returns the configured video processing handler."""
    file_manager = LocalFileManager(config.processing.temp_dir)
    extractor = FFmpegFrameExtractor(
        file_manager,
        timeout_seconds=config.processing.ffmpeg_timeout_seconds,
    )
    return VideoProcessingHandler(
        storage=get_storage(config),
        extractor=extractor,
        file_manager=file_manager,
        publisher=publisher,
        status_routing_key=config.rabbitmq.status_routing_key,
    )


def get_controller(config: AppConfig) -> VideoController:
    """Returns a controller for one-shot job runs."""
    return VideoController(get_handler(config, get_publisher(config)))


def get_worker(config: AppConfig) -> Worker:
    """Returns a queue worker with its broker infrastructure set up."""
    channel = get_rabbit_channel(config)
    broker = RabbitMQBroker(channel, config.rabbitmq)
    broker.setup()
    return Worker(
        broker,
        get_handler(config, broker),
        config.rabbitmq,
        job_timeout_seconds=config.processing.job_timeout_seconds,
    )
