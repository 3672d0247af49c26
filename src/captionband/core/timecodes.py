"""Alignment of surviving frames to video time."""

from pathlib import Path
from typing import Iterable, List, Optional

from ..config import LAG_OFFSET
from ..exceptions import TimecodeError
from ..utils.logging import get_logger
from .models import Frame

logger = get_logger(__name__)


def read_timecodes(path: Path) -> List[Optional[int]]:
    """Read the decoder's timecode log: line N holds the raw time of frame N.

    Unparseable lines are kept as ``None`` so later lines keep their position;
    trailing blank lines are dropped.
    """
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise TimecodeError(f"Cannot read timecode log {path}: {e}") from e

    while lines and not lines[-1].strip():
        lines.pop()

    timecodes: List[Optional[int]] = []
    for line in lines:
        try:
            timecodes.append(int(line.strip()))
        except ValueError:
            timecodes.append(None)
    return timecodes


def frame_time(index: int, timecodes: List[Optional[int]], offset: int = LAG_OFFSET) -> int:
    """Aligned time in seconds for the 1-based frame ``index``, never negative."""
    if index < 1 or index > len(timecodes):
        raise TimecodeError(
            f"Frame {index} has no timecode (log has {len(timecodes)} entries)"
        )
    raw = timecodes[index - 1]
    if raw is None:
        raise TimecodeError(f"Timecode for frame {index} is not an integer")
    return max(0, raw - offset)


def align_frames(
    frames: Iterable[Frame], timecodes: List[Optional[int]], offset: int = LAG_OFFSET
) -> None:
    for frame in frames:
        frame.time = frame_time(frame.index, timecodes, offset)
        logger.debug(f"Frame {frame.index} -> {frame.time}s")
