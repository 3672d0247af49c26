"""Caption recovery pipeline: frames in, timestamp listing out."""

from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Protocol

from ..config import LAG_OFFSET, get_work_dir
from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor
from ..vision.band import classify_frames
from ..vision.dedup import deduplicate_frames
from ..vision.geometry import filter_centered, filter_text_height
from ..vision.ocr import CommandLineOCR, get_ocr_engine, recognize_frames
from .decoder import generate_caption_images
from .frames import FrameSource
from .listing import build_listing, collect_captions
from .models import Frame, release_frames
from .timecodes import align_frames, read_timecodes
from .youtube import resolve_video_file_url, short_link, watch_url

logger = get_logger(__name__)


class CaptionStore(Protocol):
    """Persistence collaborator for finished listings."""

    def get_captions(self, video_id: str) -> Optional[str]: ...

    def set_captions(self, video_id: str, captions_text: str) -> None: ...


def filter_caption_frames(frames: Iterable[Frame]) -> List[Frame]:
    """Run classification, despeckle/centering, text height and dedup passes.

    Every frame that does not come out of this function has been released,
    including on the error path.
    """
    loaded: List[Frame] = []

    def track(source: Iterable[Frame]) -> Iterator[Frame]:
        for frame in source:
            loaded.append(frame)
            yield frame

    try:
        with PerformanceMonitor("band classification"):
            candidates = classify_frames(track(frames))
        with PerformanceMonitor("geometry filters"):
            candidates = filter_centered(candidates)
            candidates = filter_text_height(candidates)
        with PerformanceMonitor("deduplication"):
            return deduplicate_frames(candidates)
    except Exception:
        release_frames(loaded)
        raise


def select_caption_frames(source: FrameSource, offset: int = LAG_OFFSET) -> List[Frame]:
    """Filter a decoded directory and align the survivors to video time."""
    frames = filter_caption_frames(source)
    try:
        timecodes = read_timecodes(source.timecode_path)
        align_frames(frames, timecodes, offset)
    except Exception:
        release_frames(frames)
        raise
    return frames


class CaptionGenerator:
    """Builds caption listings per video, consulting the store first."""

    def __init__(
        self,
        store: CaptionStore,
        work_dir: Optional[Path] = None,
        offset: int = LAG_OFFSET,
        ocr_engine: Optional[CommandLineOCR] = None,
        resolve_source_fn: Callable[[str], str] = resolve_video_file_url,
        decode_fn: Callable[[str, Path], Path] = generate_caption_images,
    ):
        self.store = store
        self.work_dir = work_dir
        self.offset = offset
        self.ocr_engine = ocr_engine
        self.resolve_source_fn = resolve_source_fn
        self.decode_fn = decode_fn

    def get_or_build(self, video_id: str) -> str:
        """Return the cached listing for ``video_id`` or build and store it."""
        cached = self.store.get_captions(video_id)
        if cached is not None:
            logger.info(f"Captions for video {video_id} already exist")
            return cached

        logger.info(f"Captions for video {video_id} missing - trying to generate")
        captions_text = self.build(video_id)
        self.store.set_captions(video_id, captions_text)
        return captions_text

    def build(self, video_id: str) -> str:
        """Run the whole pipeline for one video. Nothing is persisted here."""
        video_file_url = self.resolve_source_fn(watch_url(video_id))
        logger.info(f"Processing video {video_id}")

        source = FrameSource(self.work_dir or get_work_dir(video_id))
        source.clear()
        with PerformanceMonitor(f"decoding {video_id}"):
            self.decode_fn(video_file_url, source.work_dir)

        captions_text = self.process_frames(source, short_link(video_id))
        logger.info(f"Built captions for {video_id}")
        return captions_text

    def process_frames(self, source: FrameSource, link_url: str) -> str:
        """Filter, align, recognize and list the frames of a decoded directory."""
        frames = select_caption_frames(source, self.offset)
        with PerformanceMonitor("text recognition", frames=len(frames)):
            recognize_frames(frames, self.ocr_engine or get_ocr_engine())
        return build_listing(collect_captions(frames), link_url)
