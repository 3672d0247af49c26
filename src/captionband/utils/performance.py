"""Timing of pipeline stages (decoding, filter passes, recognition)."""

import time
from typing import Optional

from .logging import get_logger

logger = get_logger(__name__)


class PerformanceMonitor:
    """Context manager that logs how long one pipeline stage took.

    When ``frames`` is given the completion line also reports the stage's
    throughput in frames per second.
    """

    def __init__(self, stage: str, frames: Optional[int] = None):
        self.stage = stage
        self.frames = frames
        self.start_time = 0.0
        self.duration = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        logger.info(f"🚀 Starting {self.stage}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        if exc_type is not None:
            logger.error(f"❌ {self.stage} failed after {self.duration:.2f}s")
            return

        rate = ""
        if self.frames and self.duration > 0:
            rate = f" ({self.frames / self.duration:.1f} frames/s)"
        logger.info(f"✅ {self.stage} completed in {self.duration:.2f}s{rate}")
