"""Text recognition through an external OCR command.

The engine is any command that, given an image path, writes the recognized
text next to it as ``<image stem>.txt`` (``tesseract`` with an output base,
``ocropus-rpred``, ...). Recognition runs strictly one frame at a time: the
engine works on files in the shared scratch directory.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image

from ..config import OCR_COMMAND, OCR_OUTPUT_SUFFIX, UPSCALE_FACTOR
from ..core.models import Frame, release_frames
from ..exceptions import ExternalToolError, UnreadableCaptionError

logger = logging.getLogger(__name__)

_OCR_ENGINE = None


class CommandLineOCR:
    """Wrapper for an OCR executable that writes a sibling text file."""

    def __init__(
        self,
        command_template: str = OCR_COMMAND,
        output_suffix: str = OCR_OUTPUT_SUFFIX,
    ) -> None:
        self.command_template = command_template
        self.output_suffix = output_suffix

    def build_command(self, image_path: Path) -> List[str]:
        fields = {
            "image": str(image_path),
            "stem": str(image_path.with_suffix("")),
            "dir": str(image_path.parent),
        }
        return [part.format(**fields) for part in shlex.split(self.command_template)]

    def output_path(self, image_path: Path) -> Path:
        return image_path.with_suffix(self.output_suffix)

    def recognize(self, image_path: Path) -> Path:
        """Run the engine on one image and return where its text should be."""
        command = self.build_command(image_path)
        logger.debug(f"Running OCR: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise ExternalToolError(f"Could not start OCR engine {command[0]}: {e}") from e

        if result.returncode != 0:
            raise ExternalToolError(
                f"OCR engine exited with code {result.returncode} on {image_path.name}",
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return self.output_path(image_path)


def get_ocr_engine() -> CommandLineOCR:
    """Get the singleton OCR engine instance, initializing if necessary."""
    global _OCR_ENGINE
    if _OCR_ENGINE is None:
        logger.info(f"Initializing OCR engine: {OCR_COMMAND}")
        _OCR_ENGINE = CommandLineOCR()
    return _OCR_ENGINE


def save_upscaled_crop(frame: Frame, scale: int = UPSCALE_FACTOR) -> Path:
    """Overwrite the frame's bitmap with its text region scaled up ``scale`` times."""
    pixels = frame.require_pixels()
    image = Image.fromarray(pixels)
    if frame.crop_box is not None:
        image = image.crop(frame.crop_box)

    width, height = image.size
    scaled = image.resize((width * scale, height * scale), Image.Resampling.BICUBIC)
    scaled.save(frame.path, format="PNG")
    return frame.path


def read_recognized_text(output_path: Path) -> str:
    try:
        return output_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableCaptionError(f"File {output_path.name} is not readable") from e


def recognize_frame(
    frame: Frame, engine: Optional[CommandLineOCR] = None, scale: int = UPSCALE_FACTOR
) -> None:
    """Fill ``frame.caption`` (or flag it unreadable) and release the frame."""
    engine = engine or get_ocr_engine()
    try:
        image_path = save_upscaled_crop(frame, scale)
        output_path = engine.recognize(image_path)
        try:
            frame.caption = read_recognized_text(output_path)
        except UnreadableCaptionError as e:
            logger.warning(str(e))
            frame.unreadable = True
        else:
            output_path.unlink(missing_ok=True)
    finally:
        frame.dispose()


def recognize_frames(
    frames: Iterable[Frame],
    engine: Optional[CommandLineOCR] = None,
    scale: int = UPSCALE_FACTOR,
) -> None:
    """Recognize frames one after another, in order.

    If recognition of one frame raises, the frames after it are released
    before the error propagates.
    """
    frames = list(frames)
    engine = engine or get_ocr_engine()
    for position, frame in enumerate(frames):
        try:
            recognize_frame(frame, engine, scale)
        except Exception:
            release_frames(frames[position + 1 :])
            raise
