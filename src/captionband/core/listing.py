"""Rendering of recognized captions into a timestamp listing."""

from typing import Iterable, List
from urllib.parse import urlencode, urlsplit, urlunsplit

from ..config import LISTING_FOOTER, LISTING_HEADER
from .models import Caption, Frame


def format_timestamp(seconds: int) -> str:
    """Render whole seconds as ``HH:MM:SS``."""
    if seconds < 0:
        raise ValueError(f"Timestamp cannot be negative: {seconds}")
    minutes, second = divmod(int(seconds), 60)
    hour, minute = divmod(minutes, 60)
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def timestamp_url(video_url: str, seconds: int) -> str:
    """Link into ``video_url`` at ``seconds``; any existing query is dropped."""
    parts = urlsplit(video_url)
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, urlencode({"t": seconds}), "")
    )


def collect_captions(frames: Iterable[Frame]) -> List[Caption]:
    """Captions of the readable frames, in frame order."""
    captions = [frame.to_caption() for frame in frames if not frame.unreadable]
    for caption in captions:
        caption.validate()
    return captions


def build_listing(
    captions: Iterable[Caption],
    video_url: str,
    header: str = LISTING_HEADER,
    footer: str = LISTING_FOOTER,
) -> str:
    rows = [
        f"{caption.text}|[{format_timestamp(caption.time)}]"
        f"({timestamp_url(video_url, caption.time)})"
        for caption in captions
    ]
    return header + "\n".join(rows) + footer
