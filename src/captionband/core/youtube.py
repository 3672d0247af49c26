"""YouTube lookups: newest playlist episode and the playable stream URL."""

from typing import Any, Dict, Optional

import requests
import yt_dlp

from ..config import (
    REQUEST_TIMEOUT,
    SHORT_LINK_BASE,
    VIDEO_FORMAT_ID,
    YOUTUBE_API_URL,
)
from ..exceptions import CaptionBandError, MissingSourceFormatError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def short_link(video_id: str) -> str:
    """Link whose path alone identifies the video, so a query can be replaced."""
    return f"{SHORT_LINK_BASE}{video_id}"


def resolve_video_file_url(url: str, format_id: str = VIDEO_FORMAT_ID) -> str:
    """Return the direct media URL of format ``format_id`` for a video page.

    Raises:
        MissingSourceFormatError: If the video does not offer that format
    """
    ydl_opts = {
        "quiet": True,
        "no_warnings": True,
        "skip_download": True,
    }
    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(url, download=False)
    except yt_dlp.utils.DownloadError as e:
        raise MissingSourceFormatError(f"Could not resolve streams for {url}: {e}") from e

    for fmt in (info or {}).get("formats") or []:
        if str(fmt.get("format_id")) == format_id and fmt.get("url"):
            return fmt["url"]

    raise MissingSourceFormatError(f"Format {format_id} missing for {url}")


def fetch_latest_video(
    playlist_id: str,
    api_key: str,
    title_prefix: str = "",
    session: Optional[requests.Session] = None,
) -> Optional[Dict[str, Any]]:
    """Find the newest playlist item whose title starts with ``title_prefix``.

    Returns:
        Dict with 'video_id' and 'title' keys, or None if nothing matches
    """
    http = session or requests
    response = http.get(
        YOUTUBE_API_URL,
        params={"part": "snippet", "playlistId": playlist_id, "key": api_key},
        timeout=REQUEST_TIMEOUT,
    )
    if response.status_code != 200:
        raise CaptionBandError(f"Unexpected status code {response.status_code}")

    items = (response.json() or {}).get("items") or []
    for item in items:
        snippet = item.get("snippet") or {}
        title = snippet.get("title") or ""
        if not title.startswith(title_prefix):
            continue
        video_id = (snippet.get("resourceId") or {}).get("videoId")
        if video_id:
            return {"video_id": video_id, "title": title}

    logger.debug(f"No item in playlist {playlist_id} starts with {title_prefix!r}")
    return None
