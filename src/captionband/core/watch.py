"""Poll loop: watch a playlist and build listings for new episodes."""

import time
from pathlib import Path
from typing import Callable, Optional

from ..config import POLL_INTERVAL
from ..utils.logging import get_logger
from .pipeline import CaptionGenerator
from .youtube import fetch_latest_video

logger = get_logger(__name__)


def run_cycle(
    generator: CaptionGenerator,
    playlist_id: str,
    api_key: str,
    output_dir: Path,
    title_prefix: str = "",
) -> Optional[Path]:
    """One poll: find the newest episode and write its listing if not yet written."""
    latest = fetch_latest_video(playlist_id, api_key, title_prefix)
    if not latest:
        return None

    video_id = latest["video_id"]
    listing_path = Path(output_dir) / f"{video_id}.md"
    if listing_path.exists():
        logger.debug(f"Listing for {video_id} already written")
        return None

    logger.info(f"Found video without captions written: ID {video_id}")
    captions_text = generator.get_or_build(video_id)

    listing_path.parent.mkdir(parents=True, exist_ok=True)
    listing_path.write_text(captions_text, encoding="utf-8")
    logger.info(f"Wrote captions for {latest['title']} to {listing_path}")
    return listing_path


def run_forever(
    generator: CaptionGenerator,
    playlist_id: str,
    api_key: str,
    output_dir: Path,
    title_prefix: str = "",
    interval: float = POLL_INTERVAL,
    max_cycles: Optional[int] = None,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> None:
    """Poll until interrupted (or ``max_cycles`` polls have run).

    A failing cycle is logged and the whole video is retried from scratch on
    the next poll.
    """
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        cycles += 1
        try:
            run_cycle(generator, playlist_id, api_key, output_dir, title_prefix)
        except Exception as e:
            logger.exception(f"Poll cycle failed: {e}")
        sleep_fn(interval)
