"""Persistent record of videos whose caption listings are already built."""

import json
import os
import time
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_cache_dir
from ..exceptions import CacheError
from ..utils.logging import get_logger

logger = get_logger(__name__)

RECORDS_FILENAME = "records.json"


class RecordStore:
    """JSON-file store of per-video records, keyed by YouTube video ID."""

    def __init__(self, cache_dir: Optional[Path] = None):
        self.cache_dir = cache_dir or get_cache_dir()
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.cache_dir / RECORDS_FILENAME

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"videos": {}}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CacheError(f"Failed to read records from {self.path}: {e}")

        data.setdefault("videos", {})
        return data

    def _save(self, data: Dict[str, Any]):
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise CacheError(f"Failed to save records: {e}")

    def get_captions(self, video_id: str) -> Optional[str]:
        """Return the cached caption listing for a video, if any."""
        record = self._load()["videos"].get(video_id) or {}
        return record.get("captionsText")

    def set_captions(self, video_id: str, captions_text: str):
        """Store the caption listing for a video."""
        data = self._load()
        record = data["videos"].setdefault(video_id, {})
        record["captionsText"] = captions_text
        record["created"] = time.time()
        self._save(data)
        logger.debug(f"Saved captions for {video_id}")

    def clear_video(self, video_id: str) -> bool:
        """Forget a video so its listing is rebuilt next time."""
        data = self._load()
        removed = data["videos"].pop(video_id, None) is not None
        if removed:
            self._save(data)
            logger.info(f"Cleared record for video {video_id}")
        return removed

    def get_stats(self) -> Dict[str, Any]:
        """Get record store statistics."""
        videos = self._load()["videos"]
        return {
            'video_count': len(videos),
            'records_file': str(self.path),
        }
