"""Domain layer containing business logic and models."""

from .config_normalizer import (
    DEFAULT_FRAME_RATE,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_PROCESSING_CONFIG,
    normalize_config,
)
from .content_hasher import hash_while_writing
from .models import (
    ExtractionResult,
    ProcessingConfig,
    ProcessingConfigInput,
    ProcessingRequest,
    ProcessingResult,
    VideoStatusEvent,
)
from .output_key import derive_output_key

__all__ = [
    "DEFAULT_FRAME_RATE",
    "DEFAULT_OUTPUT_FORMAT",
    "DEFAULT_PROCESSING_CONFIG",
    "ExtractionResult",
    "ProcessingConfig",
    "ProcessingConfigInput",
    "ProcessingRequest",
    "ProcessingResult",
    "VideoStatusEvent",
    "derive_output_key",
    "hash_while_writing",
    "normalize_config",
]
