"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary files and directories
- Synthetic caption bands (numpy arrays) and Frame objects
- Decoded frame directories with a timecode log
- A fake OCR engine and an in-memory record store
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Optional

import numpy as np
import pytest
from PIL import Image

from captionband.core.models import Frame

BAND_WIDTH = 1280
BAND_HEIGHT = 30


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords or "integration" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Band builders
# =============================================================================


def blank_band(width: int = BAND_WIDTH, height: int = BAND_HEIGHT) -> np.ndarray:
    return np.full((height, width), 255, dtype=np.uint8)


def caption_band(
    text_width: int = 200,
    top: int = 6,
    bottom: int = 24,
    shift: int = 0,
    width: int = BAND_WIDTH,
    height: int = BAND_HEIGHT,
) -> np.ndarray:
    """White band with a solid black block centered horizontally.

    ``top``/``bottom`` are the block's first and one-past-last rows.
    """
    band = blank_band(width, height)
    left = (width - text_width) // 2 + shift
    band[top:bottom, left : left + text_width] = 0
    return band


def make_frame(index: int, pixels: np.ndarray, directory: Path, write: bool = True) -> Frame:
    path = Path(directory) / f"{index:05d}.png"
    if write:
        Image.fromarray(pixels).save(path)
    return Frame(index=index, path=path, pixels=pixels.copy())


def write_frame_dir(
    directory: Path,
    bands: Dict[int, np.ndarray],
    timecodes: Iterable[int],
) -> Path:
    """Write numbered band images plus ``frames.txt`` into ``directory``."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    for index, band in bands.items():
        Image.fromarray(band).save(directory / f"{index:05d}.png")
    (directory / "frames.txt").write_text(
        "".join(f"{t}\n" for t in timecodes), encoding="utf-8"
    )
    return directory


class FakeOCR:
    """Writes a canned text file next to each image, keyed by frame stem."""

    def __init__(self, texts: Optional[Dict[str, Optional[str]]] = None, default: str = "Topic"):
        self.texts = texts or {}
        self.default = default
        self.calls = []

    def recognize(self, image_path: Path) -> Path:
        self.calls.append(image_path.stem)
        output_path = image_path.with_suffix(".txt")
        text = self.texts.get(image_path.stem, self.default)
        if text is not None:
            output_path.write_text(f"  {text}\n", encoding="utf-8")
        return output_path


class MemoryStore:
    def __init__(self):
        self.records: Dict[str, str] = {}
        self.set_calls = 0

    def get_captions(self, video_id: str) -> Optional[str]:
        return self.records.get(video_id)

    def set_captions(self, video_id: str, captions_text: str) -> None:
        self.set_calls += 1
        self.records[video_id] = captions_text


# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_youtube_url():
    """Sample YouTube URL for testing."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def sample_video_id():
    return "dQw4w9WgXcQ"


@pytest.fixture
def fake_ocr():
    return FakeOCR()


@pytest.fixture
def memory_store():
    return MemoryStore()
