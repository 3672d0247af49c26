"""Caption band classification.

A real caption sits inset from the band edges: the top and bottom margins of
the band stay (almost) white while the interior carries a lot of dark ink.
Frames caught mid-transition or showing unrelated video content fail one of
the two counts.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from ..config import (
    CAPTION_BLACK_THRESHOLD,
    CAPTION_NON_WHITE_THRESHOLD,
    EMPTY_BAND_HEIGHT,
)
from ..core.models import Frame
from ..utils.logging import get_logger
from .masks import black_mask, non_white_mask

logger = get_logger(__name__)


def count_band_pixels(
    pixels: np.ndarray, margin_height: int = EMPTY_BAND_HEIGHT
) -> Tuple[int, int]:
    """Return (non-white pixels in both margins, black pixels in the interior)."""
    height = pixels.shape[0]
    if margin_height < 0 or 2 * margin_height >= height:
        raise ValueError(
            f"Margin height {margin_height} leaves no interior in a {height}-row band"
        )

    top = pixels[:margin_height]
    interior = pixels[margin_height : height - margin_height]
    bottom = pixels[height - margin_height :]

    margin_count = int(np.count_nonzero(non_white_mask(top))) + int(
        np.count_nonzero(non_white_mask(bottom))
    )
    interior_black = int(np.count_nonzero(black_mask(interior)))
    return margin_count, interior_black


def is_caption_band(
    pixels: np.ndarray,
    *,
    margin_height: int = EMPTY_BAND_HEIGHT,
    non_white_threshold: int = CAPTION_NON_WHITE_THRESHOLD,
    black_threshold: int = CAPTION_BLACK_THRESHOLD,
) -> bool:
    margin_count, interior_black = count_band_pixels(pixels, margin_height)
    return margin_count <= non_white_threshold and interior_black >= black_threshold


def classify_frames(
    frames: Iterable[Frame],
    *,
    margin_height: int = EMPTY_BAND_HEIGHT,
    non_white_threshold: int = CAPTION_NON_WHITE_THRESHOLD,
    black_threshold: int = CAPTION_BLACK_THRESHOLD,
) -> List[Frame]:
    """Keep frames whose band looks like a caption.

    ``frames`` may be a lazy iterator; rejected frames are released as soon as
    they are classified so only the candidates stay resident.
    """
    kept: List[Frame] = []
    seen = 0
    for frame in frames:
        seen += 1
        if is_caption_band(
            frame.require_pixels(),
            margin_height=margin_height,
            non_white_threshold=non_white_threshold,
            black_threshold=black_threshold,
        ):
            kept.append(frame)
        else:
            frame.dispose()

    logger.info(f"Band classification kept {len(kept)} of {seen} frames")
    return kept
