"""Abstract interface for local temporary file operations."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class FileManager(ABC):
    """Abstract base class for local file storage. All methods raise OSError on failure."""

    @abstractmethod
    def create_temp_file(self, prefix: str, suffix: str) -> str:
        """Creates an empty temporary file and returns its path."""

    @abstractmethod
    def create_temp_dir(self, prefix: str) -> str:
        """Creates a temporary directory and returns its path."""

    @abstractmethod
    def open_for_write(self, file_path: str) -> BinaryIO:
        """Opens a file for binary writing, truncating it."""

    @abstractmethod
    def open_for_read(self, file_path: str) -> BinaryIO:
        """Opens a file for binary reading."""

    @abstractmethod
    def delete_file(self, file_path: str) -> None:
        """Deletes a file. A file that is already gone is not an error."""

    @abstractmethod
    def delete_dir(self, dir_path: str) -> None:
        """Deletes a directory and everything in it."""

    @abstractmethod
    def list_files(self, dir_path: str, pattern: str) -> list[str]:
        """Lists regular files in a directory matching a glob pattern, sorted."""

    @abstractmethod
    def get_file_size(self, file_path: str) -> int:
        """Returns the size of a file in bytes."""
