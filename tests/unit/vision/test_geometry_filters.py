import numpy as np

from captionband.vision.geometry import (
    despeckle,
    detect_side_borders,
    filter_centered,
    filter_text_height,
    off_center_factor,
    text_crop_box,
)
from conftest import BAND_WIDTH, blank_band, caption_band, make_frame


def _band_with_columns(left: int, right: int) -> np.ndarray:
    band = blank_band()
    band[6:24, left : right + 1] = 0
    return band


class TestDespeckle:
    def test_isolated_pixel_is_removed(self):
        band = blank_band()
        band[10, 10] = 0

        removed = despeckle(band)

        assert removed == 1
        assert band[10, 10] == 255

    def test_pixel_with_single_neighbor_is_removed(self):
        band = blank_band()
        band[10, 10] = 0
        band[10, 11] = 0

        assert despeckle(band) == 2
        assert (band == 255).all()

    def test_strokes_survive(self):
        band = blank_band()
        band[10:13, 10:13] = 0

        assert despeckle(band) == 0
        assert np.count_nonzero(band == 0) == 9

    def test_line_ends_are_evaluated_before_removal(self):
        band = blank_band()
        band[10, 10:13] = 0

        despeckle(band)

        # ends have one neighbor each, the middle pixel had two
        assert band[10, 10] == 255
        assert band[10, 11] == 0
        assert band[10, 12] == 255

    def test_corner_pixel_treats_outside_as_white(self):
        band = blank_band()
        band[0, 0] = 0

        assert despeckle(band) == 1

    def test_non_black_gray_pixels_are_untouched(self):
        band = blank_band()
        band[10, 10] = 100

        assert despeckle(band) == 0
        assert band[10, 10] == 100


class TestCentering:
    def test_detect_side_borders(self):
        assert detect_side_borders(_band_with_columns(100, 300)) == (100, 300)

    def test_detect_side_borders_without_ink(self):
        assert detect_side_borders(blank_band()) is None

    def test_off_center_factor(self):
        assert off_center_factor(1280, 540, 739) == 1
        assert off_center_factor(1280, 0, 0) == 1280

    def test_factor_at_tolerance_is_kept(self, temp_dir):
        # 1280 - 535 - 735 = 10
        frame = make_frame(1, _band_with_columns(535, 735), temp_dir)

        kept = filter_centered([frame], tolerance=10)

        assert kept == [frame]
        assert (frame.leftmost_black_x, frame.rightmost_black_x) == (535, 735)

    def test_factor_above_tolerance_is_rejected(self, temp_dir):
        # 1280 - 535 - 734 = 11
        frame = make_frame(1, _band_with_columns(535, 734), temp_dir)

        kept = filter_centered([frame], tolerance=10)

        assert kept == []
        assert frame.disposed

    def test_frame_without_ink_is_rejected(self, temp_dir):
        band = blank_band()
        band[10, 600] = 0  # despeckled away
        frame = make_frame(1, band, temp_dir)

        assert filter_centered([frame]) == []
        assert frame.disposed

    def test_shifted_caption_is_rejected(self, temp_dir):
        frame = make_frame(1, caption_band(shift=40), temp_dir)

        assert filter_centered([frame]) == []

    def test_despeckle_happens_in_place(self, temp_dir):
        band = caption_band()
        band[15, 5] = 0  # stray pixel far left would break centering
        frame = make_frame(1, band, temp_dir)

        kept = filter_centered([frame])

        assert kept == [frame]
        assert frame.pixels[15, 5] == 255


class TestTextCrop:
    def test_crop_box_bounds_content(self):
        box = text_crop_box(caption_band(text_width=200, top=6, bottom=24))
        left = (BAND_WIDTH - 200) // 2
        assert box == (left, 6, left + 200, 24)

    def test_near_white_is_background(self):
        band = blank_band()
        band[3, 3] = 252
        assert text_crop_box(band, tolerance=4) is None

    def test_short_text_is_rejected(self, temp_dir):
        # cropped height 10 against a minimum of 14
        frame = make_frame(1, caption_band(top=10, bottom=20), temp_dir)

        kept = filter_text_height([frame], min_height=14)

        assert kept == []
        assert frame.disposed

    def test_height_at_minimum_is_kept(self, temp_dir):
        frame = make_frame(1, caption_band(top=8, bottom=22), temp_dir)

        kept = filter_text_height([frame], min_height=14)

        assert kept == [frame]
        assert frame.crop_box[3] - frame.crop_box[1] == 14
