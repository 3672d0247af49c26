"""Utility modules."""

from .logging import setup_logging, get_logger
from .validation import (
    validate_youtube_url,
    extract_video_id,
    validate_video_id,
    validate_offset,
)
from .cache import RecordStore
from .performance import PerformanceMonitor

__all__ = [
    "setup_logging",
    "get_logger",
    "validate_youtube_url",
    "extract_video_id",
    "validate_video_id",
    "validate_offset",
    "RecordStore",
    "PerformanceMonitor",
]
