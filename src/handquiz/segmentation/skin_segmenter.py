"""
Skin Segmentation Module
=========================

Isolates the hand silhouette inside a fixed region of interest
using an HSV skin-color band and morphological cleanup.
"""

import cv2
import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionOfInterest:
    """Fixed axis-aligned rectangle in frame pixel coordinates."""
    x: int = 50
    y: int = 50
    width: int = 300
    height: int = 300

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"ROI size must be positive, got {self.width}x{self.height}")
        if self.x < 0 or self.y < 0:
            raise ValueError(f"ROI origin must be non-negative, got ({self.x}, {self.y})")

    @property
    def top_left(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return (self.x + self.width, self.y + self.height)

    def crop(self, frame: Optional[np.ndarray]) -> Optional[np.ndarray]:
        """
        Cut the ROI out of a frame.

        Returns:
            View into the frame, or None if the frame is empty or too small
        """
        if frame is None or frame.size == 0:
            return None
        frame_h, frame_w = frame.shape[:2]
        x2, y2 = self.bottom_right
        if x2 > frame_w or y2 > frame_h:
            logger.debug("Frame %dx%d does not contain ROI %s", frame_w, frame_h, self)
            return None
        return frame[self.y:y2, self.x:x2]

    @classmethod
    def from_dict(cls, config: dict) -> "RegionOfInterest":
        return cls(
            x=config.get("x", 50),
            y=config.get("y", 50),
            width=config.get("width", 300),
            height=config.get("height", 300),
        )


@dataclass
class SegmenterConfig:
    """Skin segmentation settings (calibration constants)."""
    roi: RegionOfInterest = field(default_factory=RegionOfInterest)
    # 8-bit OpenCV HSV scale (H in 0..179)
    lower_hsv: Tuple[int, int, int] = (0, 20, 70)
    upper_hsv: Tuple[int, int, int] = (20, 255, 255)
    kernel_size: int = 3
    erode_iterations: int = 2
    dilate_iterations: int = 2
    blur_kernel: int = 5

    def __post_init__(self):
        if any(lo > hi for lo, hi in zip(self.lower_hsv, self.upper_hsv)):
            raise ValueError(
                f"lower_hsv {self.lower_hsv} exceeds upper_hsv {self.upper_hsv}")
        if self.blur_kernel % 2 == 0:
            raise ValueError(f"blur_kernel must be odd, got {self.blur_kernel}")

    @classmethod
    def from_dict(cls, config: dict) -> "SegmenterConfig":
        """Create config from dictionary."""
        return cls(
            roi=RegionOfInterest.from_dict(config.get("roi", {})),
            lower_hsv=tuple(config.get("lower_hsv", [0, 20, 70])),
            upper_hsv=tuple(config.get("upper_hsv", [20, 255, 255])),
            kernel_size=config.get("kernel_size", 3),
            erode_iterations=config.get("erode_iterations", 2),
            dilate_iterations=config.get("dilate_iterations", 2),
            blur_kernel=config.get("blur_kernel", 5),
        )


class SkinSegmenter:
    """
    Converts an ROI crop into a binary skin mask.

    Stateless: every call is a pure function of its input. Steps:
    HSV conversion, skin-band threshold, erode then dilate, Gaussian blur.

    Example:
        >>> segmenter = SkinSegmenter()
        >>> mask = segmenter.segment_frame(frame.image)
        >>> if mask is None:
        ...     pass  # skip this tick
    """

    def __init__(self, config: Optional[SegmenterConfig] = None):
        self.config = config or SegmenterConfig()
        self._lower = np.array(self.config.lower_hsv, dtype=np.uint8)
        self._upper = np.array(self.config.upper_hsv, dtype=np.uint8)
        self._kernel = np.ones((self.config.kernel_size, self.config.kernel_size), np.uint8)

    @property
    def roi(self) -> RegionOfInterest:
        return self.config.roi

    def segment(self, roi_image: Optional[np.ndarray]) -> Optional[np.ndarray]:
        """
        Segment skin pixels in a BGR crop.

        Args:
            roi_image: BGR image of the region of interest

        Returns:
            uint8 mask of the same height and width, or None for unusable input
        """
        if roi_image is None or roi_image.size == 0:
            return None
        if roi_image.ndim != 3 or roi_image.shape[2] != 3:
            logger.debug("Expected a 3-channel BGR image, got shape %s", roi_image.shape)
            return None

        hsv = cv2.cvtColor(roi_image, cv2.COLOR_BGR2HSV)
        mask = cv2.inRange(hsv, self._lower, self._upper)

        mask = cv2.erode(mask, self._kernel, iterations=self.config.erode_iterations)
        mask = cv2.dilate(mask, self._kernel, iterations=self.config.dilate_iterations)

        blur = self.config.blur_kernel
        return cv2.GaussianBlur(mask, (blur, blur), 0)

    def segment_frame(self, frame: Optional[np.ndarray]) -> Optional[np.ndarray]:
        """Crop the ROI out of a full frame and segment it."""
        return self.segment(self.config.roi.crop(frame))
