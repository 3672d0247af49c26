"""Validation utilities."""

import re

from ..exceptions import ValidationError

_VIDEO_ID_PATTERNS = [
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/)([a-zA-Z0-9_-]{11})",
    r"youtube\.com/(?:embed|shorts|live)/([a-zA-Z0-9_-]{11})",
]


def validate_youtube_url(url: str) -> str:
    """Validate and normalize YouTube URL."""
    if not url:
        raise ValidationError("URL cannot be empty")

    for pattern in _VIDEO_ID_PATTERNS:
        if re.search(pattern, url):
            return url

    raise ValidationError(f"Invalid YouTube URL: {url}")


def extract_video_id(url: str) -> str:
    """Extract the 11-character YouTube video ID from a URL."""
    for pattern in _VIDEO_ID_PATTERNS:
        match = re.search(pattern, url)
        if match:
            return match.group(1)
    raise ValidationError(f"No video ID in URL: {url}")


def validate_video_id(video_id: str) -> str:
    """Validate a bare YouTube video ID (it doubles as a directory name)."""
    if not re.fullmatch(r"[a-zA-Z0-9_-]{11}", video_id or ""):
        raise ValidationError(f"Invalid video ID: {video_id!r}")
    return video_id


def validate_offset(offset: int) -> int:
    """Validate lag-compensation offset."""
    if offset < 0:
        raise ValidationError("Offset must be a non-negative number of seconds")
    return offset
