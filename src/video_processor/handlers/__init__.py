"""Handlers orchestrating domain logic and infrastructure."""

from .video_processing_handler import VideoProcessingHandler

__all__ = ["VideoProcessingHandler"]
