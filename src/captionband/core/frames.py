"""Access to a directory of decoded caption-band frames."""

from pathlib import Path
from typing import Iterator, List

from ..config import CLIP_HEIGHT, CLIP_WIDTH, TIMECODE_FILENAME
from ..exceptions import InvalidFrameError
from ..utils.logging import get_logger
from .models import Frame

logger = get_logger(__name__)


class FrameSource:
    """Numbered ``.png`` frames plus the parallel timecode log in one directory.

    Frames are loaded lazily, in decode order, so that a consumer which
    releases rejected frames as it goes never holds every bitmap at once.
    Only files named by the decoder (all-digit stems) and the timecode log
    belong to the source; anything else in the directory is left alone.
    """

    def __init__(
        self,
        work_dir: Path,
        timecode_filename: str = TIMECODE_FILENAME,
        width: int = CLIP_WIDTH,
        height: int = CLIP_HEIGHT,
    ):
        self.work_dir = Path(work_dir)
        self.timecode_path = self.work_dir / timecode_filename
        self.width = width
        self.height = height

    def frame_paths(self) -> List[Path]:
        paths = [
            p for p in self.work_dir.glob("*.png")
            if p.stem.isdigit()
        ]
        return sorted(paths, key=lambda p: int(p.stem))

    def __iter__(self) -> Iterator[Frame]:
        for path in self.frame_paths():
            frame = Frame.from_file(path)
            if frame.pixels.shape != (self.height, self.width):
                rows, columns = frame.pixels.shape
                frame.dispose()
                raise InvalidFrameError(
                    f"Frame {path.name} is {columns}x{rows}, "
                    f"expected {self.width}x{self.height}"
                )
            yield frame

    def __len__(self) -> int:
        return len(self.frame_paths())

    def clear(self) -> None:
        """Remove leftovers of a previous run before decoding into the directory."""
        self.work_dir.mkdir(parents=True, exist_ok=True)
        stale = [
            p for pattern in ("*.png", "*.txt")
            for p in self.work_dir.glob(pattern)
            if p.stem.isdigit()
        ]
        if self.timecode_path.exists():
            stale.append(self.timecode_path)

        for path in stale:
            path.unlink()
        if stale:
            logger.debug(f"Removed {len(stale)} stale files from {self.work_dir}")
