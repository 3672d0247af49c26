from pathlib import Path

import numpy as np
import pytest

from captionband.core.frames import FrameSource
from captionband.core.models import Caption, Frame
from captionband.exceptions import FrameLifecycleError, InvalidFrameError
from conftest import blank_band, caption_band, make_frame, write_frame_dir


class TestFrame:
    def test_from_file_parses_index_and_converts_to_grayscale(self, temp_dir):
        make_frame(12, caption_band(), temp_dir)

        frame = Frame.from_file(temp_dir / "00012.png")

        assert frame.index == 12
        assert frame.basename == "00012"
        assert frame.pixels.shape == (30, 1280)
        assert frame.pixels.dtype == np.uint8

    def test_dispose_removes_file_once(self, temp_dir):
        frame = make_frame(1, caption_band(), temp_dir)

        frame.dispose()

        assert frame.disposed
        assert not frame.path.exists()
        with pytest.raises(FrameLifecycleError):
            frame.dispose()

    def test_pixels_unavailable_after_dispose(self, temp_dir):
        frame = make_frame(1, caption_band(), temp_dir)
        frame.dispose()

        with pytest.raises(FrameLifecycleError):
            frame.require_pixels()

    def test_to_caption(self):
        frame = Frame(index=4, path=Path("00004.png"), caption="News", time=75)

        assert frame.to_caption() == Caption(text="News", time=75, frame_index=4)

    def test_to_caption_requires_text_and_time(self):
        with pytest.raises(ValueError):
            Frame(index=4, path=Path("00004.png"), time=75).to_caption()

    def test_caption_validate(self):
        with pytest.raises(ValueError):
            Caption(text="x", time=-1, frame_index=1).validate()


class TestFrameSource:
    def test_frames_are_yielded_in_numeric_order(self, temp_dir):
        write_frame_dir(
            temp_dir,
            {2: blank_band(), 10: blank_band(), 1: blank_band()},
            [0, 1, 2],
        )
        (temp_dir / "notes.png").write_bytes(b"")

        source = FrameSource(temp_dir)

        assert [f.index for f in source] == [1, 2, 10]
        assert len(source) == 3
        assert source.timecode_path == temp_dir / "frames.txt"

    def test_clear_removes_previous_run(self, temp_dir):
        write_frame_dir(temp_dir, {1: blank_band()}, [0])
        (temp_dir / "00001.txt").write_text("old")

        FrameSource(temp_dir).clear()

        assert list(temp_dir.iterdir()) == []

    def test_clear_creates_missing_directory(self, temp_dir):
        source = FrameSource(temp_dir / "fresh")
        source.clear()
        assert source.work_dir.is_dir()

    def test_clear_keeps_files_it_did_not_decode(self, temp_dir):
        write_frame_dir(temp_dir, {1: blank_band()}, [0])
        (temp_dir / "00001.txt").write_text("old")
        (temp_dir / "notes.txt").write_text("shopping list")
        make_frame(2, blank_band(width=64, height=64), temp_dir).path.rename(
            temp_dir / "holiday.png"
        )

        FrameSource(temp_dir).clear()

        assert sorted(p.name for p in temp_dir.iterdir()) == ["holiday.png", "notes.txt"]

    def test_frame_with_wrong_band_size_is_rejected(self, temp_dir):
        write_frame_dir(temp_dir, {1: blank_band(width=640)}, [0])

        with pytest.raises(InvalidFrameError, match="640x30"):
            list(FrameSource(temp_dir))

        assert not (temp_dir / "00001.png").exists()

    def test_band_size_is_configurable(self, temp_dir):
        write_frame_dir(temp_dir, {1: blank_band(width=640, height=20)}, [0])

        frames = list(FrameSource(temp_dir, width=640, height=20))

        assert frames[0].pixels.shape == (20, 640)
