"""Abstract interfaces for infrastructure dependencies."""

from .file_manager import FileManager
from .frame_extractor import FrameExtractor
from .message_broker import MessageBroker, MessagePublisher
from .storage import StorageClient

__all__ = [
    "FileManager",
    "FrameExtractor",
    "MessageBroker",
    "MessagePublisher",
    "StorageClient",
]
