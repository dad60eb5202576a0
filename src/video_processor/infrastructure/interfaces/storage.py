"""Abstract interface for object storage operations."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import BinaryIO


class StorageClient(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    def download(self, object_name: str) -> Iterator[bytes]:
        """
        Opens a source video for streaming.

        The object is located eagerly, so a missing object is reported by this
        call rather than while iterating.

        Args:
            object_name: The object path/name in storage.

        Returns:
            An iterator over the object's bytes in chunks.

        Raises:
            StorageObjectNotFoundError: If the object does not exist.
            StorageDownloadError: If the download fails.
        """

    @abstractmethod
    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> str:
        """
        Uploads a processed file to storage.

        Args:
            object_name: The destination path/name in storage.
            data: File-like object containing the data.
            size: Size of the file in bytes.
            content_type: MIME type of the file.

        Returns:
            The confirmed object name.

        Raises:
            StorageUploadError: If the upload fails.
        """

    @abstractmethod
    def delete(self, object_name: str) -> None:
        """
        Deletes a source video from storage.

        Args:
            object_name: The object path/name in storage.

        Raises:
            StorageDeleteError: If the deletion fails.
        """

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """
        Ensures a bucket exists, creating it if necessary.

        Args:
            bucket_name: The bucket name to ensure exists.
        """
