"""Core functionality modules.

Keep this package light: the vision filters import the models from here, so
the pipeline and collaborators are imported from their own modules.
"""

from .models import Caption, Frame, release_frames

__all__ = ["Caption", "Frame", "release_frames"]
