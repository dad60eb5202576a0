"""Local filesystem implementation of the FileManager interface."""

import glob
import os
import shutil
import tempfile
from typing import BinaryIO

from .interfaces import FileManager


class LocalFileManager(FileManager):
    """Creates and removes temporary files under a single root directory."""

    def __init__(self, temp_dir: str | None = None):
        self._temp_dir = temp_dir or tempfile.gettempdir()

    def create_temp_file(self, prefix: str, suffix: str) -> str:
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=self._temp_dir)
        os.close(fd)
        return path

    def create_temp_dir(self, prefix: str) -> str:
        return tempfile.mkdtemp(prefix=prefix, dir=self._temp_dir)

    def open_for_write(self, file_path: str) -> BinaryIO:
        return open(file_path, "wb")

    def open_for_read(self, file_path: str) -> BinaryIO:
        return open(file_path, "rb")

    def delete_file(self, file_path: str) -> None:
        try:
            os.remove(file_path)
        except FileNotFoundError:
            pass

    def delete_dir(self, dir_path: str) -> None:
        try:
            shutil.rmtree(dir_path)
        except FileNotFoundError:
            pass

    def list_files(self, dir_path: str, pattern: str) -> list[str]:
        matches = glob.glob(os.path.join(dir_path, pattern))
        return sorted(path for path in matches if os.path.isfile(path))

    def get_file_size(self, file_path: str) -> int:
        return os.path.getsize(file_path)
