"""Data models for caption frames and recovered captions."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np
from PIL import Image

from ..exceptions import FrameLifecycleError

CropBox = Tuple[int, int, int, int]


@dataclass
class Frame:
    """A decoded caption-band bitmap moving through the filter stages.

    The frame owns its bitmap file until :meth:`dispose` is called. Stages
    fill in the derived fields as the frame survives them.
    """

    index: int
    path: Path
    pixels: Optional[np.ndarray] = field(default=None, repr=False)
    leftmost_black_x: Optional[int] = None
    rightmost_black_x: Optional[int] = None
    crop_box: Optional[CropBox] = None
    kept: bool = False
    caption: Optional[str] = None
    unreadable: bool = False
    time: Optional[int] = None
    disposed: bool = False

    @classmethod
    def from_file(cls, path: Path) -> "Frame":
        """Load a frame from a zero-padded, 1-based numbered bitmap."""
        path = Path(path)
        with Image.open(path) as img:
            pixels = np.array(img.convert("L"), dtype=np.uint8)
        return cls(index=int(path.stem), path=path, pixels=pixels)

    @property
    def basename(self) -> str:
        return self.path.stem

    @property
    def width(self) -> int:
        return self.require_pixels().shape[1]

    @property
    def height(self) -> int:
        return self.require_pixels().shape[0]

    def require_pixels(self) -> np.ndarray:
        if self.disposed or self.pixels is None:
            raise FrameLifecycleError(f"Frame {self.index} has been released")
        return self.pixels

    def dispose(self) -> None:
        """Release the bitmap file and pixel buffer. Valid exactly once."""
        if self.disposed:
            raise FrameLifecycleError(f"Frame {self.index} released twice")
        self.disposed = True
        self.pixels = None
        self.path.unlink(missing_ok=True)

    def to_caption(self) -> "Caption":
        if self.caption is None or self.time is None:
            raise ValueError(f"Frame {self.index} has no recognized caption yet")
        return Caption(text=self.caption, time=self.time, frame_index=self.index)


@dataclass(frozen=True)
class Caption:
    """A recognized caption aligned to video time (whole seconds)."""

    text: str
    time: int
    frame_index: int

    def validate(self) -> None:
        if self.time < 0:
            raise ValueError("Caption time must be non-negative")


def release_frames(frames: Iterable[Frame]) -> int:
    """Dispose every frame not yet released; used when a run aborts."""
    released = 0
    for frame in frames:
        if not frame.disposed:
            frame.dispose()
            released += 1
    return released
