"""Custom exceptions for captionband."""

class CaptionBandError(Exception):
    """Base exception for captionband."""
    pass

class ExternalToolError(CaptionBandError):
    """An external tool (ffmpeg, recognition engine) exited abnormally."""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr

class MissingSourceFormatError(CaptionBandError):
    """No suitable video stream could be resolved."""
    pass

class UnreadableCaptionError(CaptionBandError):
    """Recognition output for a single frame is missing or unreadable."""
    pass

class InvalidFrameError(CaptionBandError):
    """Decoded frame does not have the configured band size."""
    pass

class TimecodeError(CaptionBandError):
    """Timecode log has no usable entry for a frame."""
    pass

class FrameLifecycleError(CaptionBandError):
    """Frame used or released after its backing bitmap was released."""
    pass

class ValidationError(CaptionBandError):
    """Invalid input parameters."""
    pass

class ConfigError(CaptionBandError):
    """Invalid configuration values."""
    pass

class CacheError(CaptionBandError):
    """Error with record store operations."""
    pass
