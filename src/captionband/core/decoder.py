"""Sampling of the caption band out of a video with ffmpeg."""

import re
import subprocess
from pathlib import Path
from typing import List

from ..config import (
    CLIP_HEIGHT,
    FFMPEG_BINARY,
    FRAME_PATTERN,
    SAMPLE_FPS,
    TIMECODE_FILENAME,
)
from ..exceptions import ExternalToolError
from ..utils.logging import get_logger

logger = get_logger(__name__)

_PTS_PATTERN = re.compile(r"\bpts:\s*(\d+)")


def build_filter_chain(clip_height: int = CLIP_HEIGHT, fps: int = SAMPLE_FPS) -> str:
    """ffmpeg filter chain producing one black-on-white band per caption change.

    The band at the bottom of the picture is cropped, near-identical
    consecutive samples are dropped by ``mpdecimate``, ``showinfo`` logs the
    pts of every frame that survives, and ``curves`` binarizes light caption
    text on a dark strip into black ink on white.
    """
    return ",".join(
        [
            f"fps={fps}",
            f"crop=in_w:{clip_height}:0:in_h-{clip_height}",
            "mpdecimate=lo=64*10:hi=64*20",
            "showinfo",
            "hue=s=0",
            "curves=m='0/1 .3/1 .31/0 1/0'",
        ]
    )


def parse_showinfo_pts(log_text: str) -> List[int]:
    """Extract the pts of every frame reported by the ``showinfo`` filter."""
    return [int(match) for match in _PTS_PATTERN.findall(log_text)]


def generate_caption_images(
    video_file_url: str,
    work_dir: Path,
    clip_height: int = CLIP_HEIGHT,
    ffmpeg_binary: str = FFMPEG_BINARY,
) -> Path:
    """Decode ``video_file_url`` into numbered band images inside ``work_dir``.

    Writes the parallel timecode log (one pts per line, in frame order) and
    returns its path.
    """
    work_dir = Path(work_dir)
    work_dir.mkdir(parents=True, exist_ok=True)

    command = [
        ffmpeg_binary,
        "-hide_banner",
        "-nostdin",
        "-i", video_file_url,
        "-vf", build_filter_chain(clip_height),
        "-fps_mode", "passthrough",
        FRAME_PATTERN,
    ]
    logger.debug(f"Running ffmpeg in {work_dir}")

    try:
        result = subprocess.run(
            command, cwd=str(work_dir), capture_output=True, text=True
        )
    except OSError as e:
        raise ExternalToolError(f"Could not start {ffmpeg_binary}: {e}") from e

    if result.returncode != 0:
        tail = "\n".join(result.stderr.strip().splitlines()[-5:])
        raise ExternalToolError(
            f"ffmpeg exited with code {result.returncode}: {tail}",
            stdout=result.stdout,
            stderr=result.stderr,
        )

    timecodes = parse_showinfo_pts(result.stderr)
    timecode_path = work_dir / TIMECODE_FILENAME
    timecode_path.write_text(
        "".join(f"{pts}\n" for pts in timecodes), encoding="utf-8"
    )
    logger.info(f"Decoded {len(timecodes)} caption band frames into {work_dir}")
    return timecode_path
