"""Grayscale pixel classes shared by the band filters."""

import numpy as np

from ..config import BLACK_THRESHOLD, DARK_THRESHOLD, WHITE_THRESHOLD


def black_mask(pixels: np.ndarray, threshold: int = BLACK_THRESHOLD) -> np.ndarray:
    """Near-black ink."""
    return pixels < threshold


def non_white_mask(pixels: np.ndarray, threshold: int = WHITE_THRESHOLD) -> np.ndarray:
    """Anything that is not background white."""
    return pixels < threshold


def dark_mask(pixels: np.ndarray, threshold: int = DARK_THRESHOLD) -> np.ndarray:
    return pixels < threshold
