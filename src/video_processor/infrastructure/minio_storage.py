"""MinIO implementation of the StorageClient interface."""

import logging
from collections.abc import Iterator
from typing import BinaryIO

from minio import Minio
from minio.error import S3Error

from video_processor.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageObjectNotFoundError,
    StorageUploadError,
)

from .interfaces import StorageClient

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 1024 * 1024
_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchObject", "NoSuchBucket"}


class MinioStorageClient(StorageClient):
    """Handles file storage operations using MinIO.

    Source videos are read from and deleted in the video bucket; processed
    archives are written to the processed bucket.
    """

    def __init__(self, client: Minio, video_bucket: str, processed_bucket: str):
        self._client = client
        self._video_bucket = video_bucket
        self._processed_bucket = processed_bucket

    def download(self, object_name: str) -> Iterator[bytes]:
        try:
            response = self._client.get_object(self._video_bucket, object_name)
        except S3Error as e:
            if e.code in _NOT_FOUND_CODES:
                logger.warning(
                    "Object not found in MinIO",
                    extra={"bucket_name": self._video_bucket, "object_name": object_name},
                )
                raise StorageObjectNotFoundError(object_name, e) from e
            logger.exception(
                "MinIO download failed",
                extra={"bucket_name": self._video_bucket, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e
        except Exception as e:
            logger.exception(
                "MinIO download failed",
                extra={"bucket_name": self._video_bucket, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e

        logger.info(
            "Streaming file from MinIO",
            extra={"bucket_name": self._video_bucket, "object_name": object_name},
        )
        return self._stream(response, object_name)

    def _stream(self, response, object_name: str) -> Iterator[bytes]:
        """Yields response chunks and releases the connection when done."""
        try:
            yield from response.stream(DOWNLOAD_CHUNK_SIZE)
        except Exception as e:
            logger.exception(
                "MinIO download interrupted",
                extra={"bucket_name": self._video_bucket, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e
        finally:
            response.close()
            response.release_conn()

    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> str:
        try:
            self._client.put_object(
                bucket_name=self._processed_bucket,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": self._processed_bucket,
                    "object_name": object_name,
                    "size": size,
                },
            )
            return object_name
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._processed_bucket, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def delete(self, object_name: str) -> None:
        try:
            self._client.remove_object(self._video_bucket, object_name)
            logger.info(
                "File deleted from MinIO",
                extra={"bucket_name": self._video_bucket, "object_name": object_name},
            )
        except Exception as e:
            logger.exception(
                "MinIO delete failed",
                extra={"bucket_name": self._video_bucket, "object_name": object_name},
            )
            raise StorageDeleteError(object_name, e) from e

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        if not self._client.bucket_exists(bucket_name):
            self._client.make_bucket(bucket_name)
            logger.info("Bucket created", extra={"bucket_name": bucket_name})
        else:
            logger.info("Bucket already exists", extra={"bucket_name": bucket_name})
