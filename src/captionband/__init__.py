"""captionband - recover timestamped captions burnt into a video's caption band."""

__version__ = "0.1.0"
