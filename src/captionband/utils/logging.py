"""Logging setup for the captionband CLI and poll loop."""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "captionband"

# yt-dlp and urllib3 log every request of a stream lookup; PIL logs each
# PNG chunk it decodes.
_NOISY_LOGGERS = ("urllib3", "yt_dlp", "PIL")


def setup_logging(
    level: str = "INFO", log_file: Optional[Path] = None, verbose: bool = False
) -> logging.Logger:
    """Configure the ``captionband`` logger that every module logs under.

    Output goes to stdout, plus ``log_file`` when given (a long-running
    ``watch`` is usually pointed at one). ``verbose`` switches to a format
    with timestamps and module names. Calling this again replaces the
    handlers, so repeated CLI invocations in one process do not duplicate
    lines.
    """
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if verbose:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Module logger; names under ``captionband.`` inherit the CLI handlers."""
    return logging.getLogger(name)
