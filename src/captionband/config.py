"""Configuration settings for captionband."""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError

# Directories
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "captionband"
DEFAULT_WORK_DIR = Path.cwd() / "tmp"

# Caption band geometry (can be overridden via environment variables)
CLIP_WIDTH = int(os.getenv("CAPTIONBAND_CLIP_WIDTH", "1280"))
CLIP_HEIGHT = int(os.getenv("CAPTIONBAND_CLIP_HEIGHT", "30"))
EMPTY_BAND_HEIGHT = int(os.getenv("CAPTIONBAND_EMPTY_BAND_HEIGHT", "2"))  # Margins that stay blank around real captions

# Pixel classes (0-255 grayscale)
WHITE_THRESHOLD = 250  # Lowest value still considered background white
BLACK_THRESHOLD = 5  # Values below this are near-black ink
DARK_THRESHOLD = 200  # Dark/light split used when comparing consecutive frames

# Frame classification
CAPTION_NON_WHITE_THRESHOLD = int(os.getenv("CAPTIONBAND_NON_WHITE_THRESHOLD", "20"))
CAPTION_BLACK_THRESHOLD = int(os.getenv("CAPTIONBAND_BLACK_THRESHOLD", "1000"))
MAXIMAL_OFF_CENTER_FACTOR = int(os.getenv("CAPTIONBAND_OFF_CENTER_FACTOR", "10"))
TEXT_CROP_TOLERANCE = 4
MINIMAL_TEXT_HEIGHT = int(os.getenv("CAPTIONBAND_MINIMAL_TEXT_HEIGHT", "14"))
DIFFERENCE_THRESHOLD = int(os.getenv("CAPTIONBAND_DIFFERENCE_THRESHOLD", "300"))

# Timing
LAG_OFFSET = int(os.getenv("CAPTIONBAND_LAG_OFFSET", "60"))  # Seconds captions trail the topic they announce
SAMPLE_FPS = 1
POLL_INTERVAL = float(os.getenv("CAPTIONBAND_POLL_INTERVAL", "60"))

# Source video and external tools
VIDEO_FORMAT_ID = os.getenv("CAPTIONBAND_VIDEO_FORMAT_ID", "136")  # 720p video-only stream
FFMPEG_BINARY = os.getenv("CAPTIONBAND_FFMPEG", "ffmpeg")
OCR_COMMAND = os.getenv("CAPTIONBAND_OCR_COMMAND", "tesseract {image} {stem} --psm 7")
OCR_OUTPUT_SUFFIX = ".txt"
UPSCALE_FACTOR = 4
FRAME_PATTERN = "%05d.png"
TIMECODE_FILENAME = "frames.txt"

# Listing
SHORT_LINK_BASE = "https://youtu.be/"
LISTING_HEADER = (
    "Approximate timestamps to specific topics\n\n&nbsp;\n\nTopic|Timestamp\n-|-\n"
)
LISTING_FOOTER = "\n\n&nbsp;\n\n^^Generated ^^automatically ^^by ^^captionband"

# YouTube Data API
YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3/playlistItems"
REQUEST_TIMEOUT = 10


def validate_config() -> None:
    """Validate configuration values."""
    if CLIP_WIDTH <= 0 or CLIP_HEIGHT <= 0:
        raise ConfigError("Invalid caption band dimensions")

    if EMPTY_BAND_HEIGHT < 0 or 2 * EMPTY_BAND_HEIGHT >= CLIP_HEIGHT:
        raise ConfigError("Empty band margins leave no interior rows")

    for name, value in (
        ("WHITE_THRESHOLD", WHITE_THRESHOLD),
        ("BLACK_THRESHOLD", BLACK_THRESHOLD),
        ("DARK_THRESHOLD", DARK_THRESHOLD),
    ):
        if not 0 <= value <= 255:
            raise ConfigError(f"{name} must be between 0 and 255")

    if LAG_OFFSET < 0:
        raise ConfigError("Lag offset cannot be negative")

    if UPSCALE_FACTOR < 1:
        raise ConfigError("Upscale factor must be at least 1")


def get_cache_dir() -> Path:
    """Get cache directory from environment or default."""
    cache_dir = os.getenv("CAPTIONBAND_CACHE_DIR")
    if cache_dir:
        return Path(cache_dir)
    return DEFAULT_CACHE_DIR


def get_work_dir(video_id: Optional[str] = None) -> Path:
    """Get the scratch directory frames are decoded into."""
    work_dir = os.getenv("CAPTIONBAND_WORK_DIR")
    base = Path(work_dir) if work_dir else DEFAULT_WORK_DIR
    return base / video_id if video_id else base


def get_youtube_api_key() -> Optional[str]:
    """Get the YouTube Data API key, if configured."""
    return os.getenv("CAPTIONBAND_YT_API_KEY")


# Validate config on import
validate_config()
