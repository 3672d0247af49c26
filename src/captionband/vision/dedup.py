"""Suppression of consecutive frames showing the same caption."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from ..config import DARK_THRESHOLD, DIFFERENCE_THRESHOLD
from ..core.models import Frame
from ..utils.logging import get_logger
from .masks import dark_mask

logger = get_logger(__name__)


def image_difference(
    a: np.ndarray, b: np.ndarray, dark_threshold: int = DARK_THRESHOLD
) -> int:
    """Count positions that are dark in one band and light in the other."""
    if a.shape != b.shape:
        raise ValueError(f"Band shapes differ: {a.shape} vs {b.shape}")
    return int(np.count_nonzero(dark_mask(a, dark_threshold) != dark_mask(b, dark_threshold)))


def deduplicate_frames(
    frames: Sequence[Frame],
    *,
    threshold: int = DIFFERENCE_THRESHOLD,
    dark_threshold: int = DARK_THRESHOLD,
) -> List[Frame]:
    """Keep a frame only if it differs enough from the frame before it.

    Each frame is compared with its predecessor in ``frames`` whether or not
    that predecessor was kept. A rejected frame is released once it has also
    served as the reference for its successor; a rejected last frame is
    released at the end of the pass.
    """
    kept: List[Frame] = []
    previous: Optional[Frame] = None

    for frame in frames:
        if previous is None:
            frame.kept = True
        else:
            difference = image_difference(
                frame.require_pixels(), previous.require_pixels(), dark_threshold
            )
            frame.kept = difference >= threshold
            if not frame.kept:
                logger.debug(
                    f"Frame {frame.index} repeats frame {previous.index} "
                    f"(difference {difference})"
                )
            if not previous.kept:
                previous.dispose()

        if frame.kept:
            kept.append(frame)
        previous = frame

    if previous is not None and not previous.kept:
        previous.dispose()

    logger.info(f"Deduplication kept {len(kept)} of {len(frames)} frames")
    return kept
