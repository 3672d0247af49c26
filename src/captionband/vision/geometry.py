"""Despeckling and geometric checks on a caption band.

All functions take the grayscale band as a ``(height, width)`` uint8 array.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..config import (
    BLACK_THRESHOLD,
    MAXIMAL_OFF_CENTER_FACTOR,
    MINIMAL_TEXT_HEIGHT,
    TEXT_CROP_TOLERANCE,
)
from ..core.models import CropBox, Frame
from ..utils.logging import get_logger
from .masks import black_mask

logger = get_logger(__name__)

WHITE = 255


def _black_neighbor_counts(black: np.ndarray) -> np.ndarray:
    """Number of black pixels among the 8 neighbors of every position."""
    height, width = black.shape
    padded = np.pad(black.astype(np.uint8), 1, mode="constant", constant_values=0)
    counts = np.zeros((height, width), dtype=np.uint8)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dy == 0 and dx == 0:
                continue
            counts += padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
    return counts


def despeckle(pixels: np.ndarray, black_threshold: int = BLACK_THRESHOLD) -> int:
    """Whiten black pixels with at most one black neighbor, in place.

    Neighborhoods are evaluated on the band as it was before the pass.
    Returns the number of pixels removed.
    """
    black = black_mask(pixels, black_threshold)
    speckles = black & (_black_neighbor_counts(black) <= 1)
    removed = int(np.count_nonzero(speckles))
    if removed:
        pixels[speckles] = WHITE
    return removed


def detect_side_borders(
    pixels: np.ndarray, black_threshold: int = BLACK_THRESHOLD
) -> Optional[Tuple[int, int]]:
    """Return the leftmost and rightmost columns holding black ink, if any."""
    columns = np.flatnonzero(black_mask(pixels, black_threshold).any(axis=0))
    if columns.size == 0:
        return None
    return int(columns[0]), int(columns[-1])


def off_center_factor(width: int, leftmost: int, rightmost: int) -> int:
    # A centered caption has leftmost + rightmost == width - 1.
    return abs(width - leftmost - rightmost)


def filter_centered(
    frames: List[Frame],
    *,
    tolerance: int = MAXIMAL_OFF_CENTER_FACTOR,
    black_threshold: int = BLACK_THRESHOLD,
) -> List[Frame]:
    """Despeckle each frame and keep the ones whose ink is horizontally centered.

    Frames without any black ink left after despeckling are rejected.
    """
    kept: List[Frame] = []
    for frame in frames:
        pixels = frame.require_pixels()
        despeckle(pixels, black_threshold)
        borders = detect_side_borders(pixels, black_threshold)

        if borders is None:
            frame.dispose()
            continue

        frame.leftmost_black_x, frame.rightmost_black_x = borders
        factor = off_center_factor(pixels.shape[1], *borders)
        if factor <= tolerance:
            kept.append(frame)
        else:
            logger.debug(f"Frame {frame.index} off center by {factor}")
            frame.dispose()

    logger.info(f"Centering filter kept {len(kept)} of {len(frames)} frames")
    return kept


def text_crop_box(
    pixels: np.ndarray, tolerance: int = TEXT_CROP_TOLERANCE
) -> Optional[CropBox]:
    """Bounding box ``(left, top, right, bottom)`` of non-white content.

    ``right`` and ``bottom`` are exclusive, matching PIL's crop boxes.
    Pixels within ``tolerance`` of white count as background.
    """
    content = pixels < WHITE - tolerance
    rows = np.flatnonzero(content.any(axis=1))
    if rows.size == 0:
        return None
    columns = np.flatnonzero(content.any(axis=0))
    return int(columns[0]), int(rows[0]), int(columns[-1]) + 1, int(rows[-1]) + 1


def filter_text_height(
    frames: List[Frame],
    *,
    min_height: int = MINIMAL_TEXT_HEIGHT,
    tolerance: int = TEXT_CROP_TOLERANCE,
) -> List[Frame]:
    """Keep frames whose cropped text is at least ``min_height`` rows tall."""
    kept: List[Frame] = []
    for frame in frames:
        box = text_crop_box(frame.require_pixels(), tolerance)
        height = box[3] - box[1] if box else 0
        if height >= min_height:
            frame.crop_box = box
            kept.append(frame)
        else:
            logger.debug(f"Frame {frame.index} text only {height} rows tall")
            frame.dispose()

    logger.info(f"Text height filter kept {len(kept)} of {len(frames)} frames")
    return kept
