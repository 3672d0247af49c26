"""Pixel-level caption band filters and text recognition."""

from .band import classify_frames, is_caption_band
from .dedup import deduplicate_frames, image_difference
from .geometry import (
    despeckle,
    detect_side_borders,
    filter_centered,
    filter_text_height,
    off_center_factor,
    text_crop_box,
)

__all__ = [
    "classify_frames",
    "is_caption_band",
    "deduplicate_frames",
    "image_difference",
    "despeckle",
    "detect_side_borders",
    "filter_centered",
    "filter_text_height",
    "off_center_factor",
    "text_crop_box",
]
