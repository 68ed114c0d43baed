"""
Tests for Skin Segmentation Module
===================================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from handquiz.segmentation.skin_segmenter import RegionOfInterest, SegmenterConfig, SkinSegmenter

SKIN_BGR = (120, 160, 220)   # HSV ~ (12, 116, 220), inside the skin band
BACKGROUND_BGR = (255, 0, 0)  # Pure blue, hue 120


def make_frame(width=640, height=480, color=BACKGROUND_BGR):
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:] = color
    return frame


class TestRegionOfInterest:
    """Test suite for RegionOfInterest."""

    def test_defaults(self):
        roi = RegionOfInterest()

        assert roi.top_left == (50, 50)
        assert roi.bottom_right == (350, 350)

    def test_crop_shape(self):
        crop = RegionOfInterest().crop(make_frame())

        assert crop.shape == (300, 300, 3)

    def test_crop_frame_too_small(self):
        assert RegionOfInterest().crop(make_frame(width=320, height=240)) is None

    def test_crop_empty(self):
        roi = RegionOfInterest()

        assert roi.crop(None) is None
        assert roi.crop(np.zeros((0, 0, 3), dtype=np.uint8)) is None

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"height": -10},
        {"x": -1},
    ])
    def test_invalid_roi(self, kwargs):
        with pytest.raises(ValueError):
            RegionOfInterest(**kwargs)

    def test_from_dict(self):
        roi = RegionOfInterest.from_dict({"x": 10, "width": 200})

        assert roi.top_left == (10, 50)
        assert roi.bottom_right == (210, 350)


class TestSegmenterConfig:
    """Test suite for SegmenterConfig."""

    def test_default_values(self):
        config = SegmenterConfig()

        assert config.lower_hsv == (0, 20, 70)
        assert config.upper_hsv == (20, 255, 255)
        assert config.erode_iterations == 2
        assert config.dilate_iterations == 2
        assert config.blur_kernel == 5

    def test_from_dict(self):
        config = SegmenterConfig.from_dict({
            "roi": {"x": 0, "y": 0, "width": 100, "height": 100},
            "lower_hsv": [0, 30, 60],
            "blur_kernel": 7,
        })

        assert config.roi.bottom_right == (100, 100)
        assert config.lower_hsv == (0, 30, 60)
        assert config.upper_hsv == (20, 255, 255)
        assert config.blur_kernel == 7

    def test_inverted_band_rejected(self):
        with pytest.raises(ValueError):
            SegmenterConfig(lower_hsv=(30, 20, 70), upper_hsv=(20, 255, 255))

    def test_even_blur_kernel_rejected(self):
        with pytest.raises(ValueError):
            SegmenterConfig(blur_kernel=4)


class TestSkinSegmenter:
    """Test suite for SkinSegmenter."""

    @pytest.fixture
    def segmenter(self):
        return SkinSegmenter()

    def test_skin_region_is_foreground(self, segmenter):
        frame = make_frame()
        frame[150:250, 150:250] = SKIN_BGR  # Frame coords, inside the ROI

        mask = segmenter.segment_frame(frame)

        assert mask.shape == (300, 300)
        assert mask.dtype == np.uint8
        # ROI-local center of the skin patch
        assert mask[150, 150] == 255
        assert mask[10, 10] == 0

    def test_background_only(self, segmenter):
        mask = segmenter.segment_frame(make_frame())

        assert mask is not None
        assert not mask.any()

    def test_skin_outside_roi_ignored(self, segmenter):
        frame = make_frame()
        frame[400:470, 400:620] = SKIN_BGR

        mask = segmenter.segment_frame(frame)

        assert not mask.any()

    def test_small_speck_removed(self, segmenter):
        roi_image = make_frame(300, 300)
        roi_image[100:103, 100:103] = SKIN_BGR

        mask = segmenter.segment(roi_image)

        assert not mask.any()

    def test_dark_pixels_rejected(self, segmenter):
        roi_image = make_frame(300, 300, color=(0, 0, 0))

        assert not segmenter.segment(roi_image).any()

    def test_pure_function(self, segmenter):
        roi_image = make_frame(300, 300)
        roi_image[50:200, 80:220] = SKIN_BGR
        original = roi_image.copy()

        first = segmenter.segment(roi_image)
        second = segmenter.segment(roi_image)

        np.testing.assert_array_equal(first, second)
        np.testing.assert_array_equal(roi_image, original)

    def test_no_data_inputs(self, segmenter):
        assert segmenter.segment(None) is None
        assert segmenter.segment(np.zeros((0, 0, 3), dtype=np.uint8)) is None
        assert segmenter.segment(np.zeros((300, 300), dtype=np.uint8)) is None
        assert segmenter.segment_frame(None) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
