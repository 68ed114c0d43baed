"""
Finger Counter
===============

Counts raised fingers from a binary hand mask using contour geometry.

The dominant contour's convex hull is compared against the contour itself;
each sufficiently deep, sufficiently sharp convexity defect is the valley
between two raised fingers, so N valleys mean N + 1 fingers.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

# convexityDefects reports depth as fixed-point with 8 fractional bits
DEPTH_SCALE = 256.0


@dataclass
class FingerCounterConfig:
    """Contour analysis thresholds, calibrated for a 300x300 ROI."""
    min_area: float = 3000.0        # Dominant region must exceed this (px^2)
    min_defect_depth: float = 10.0  # Shallower concavities are noise
    max_gap_angle: float = 90.0     # Degrees; finger valleys are acute
    max_fingers: int = 5

    @classmethod
    def from_dict(cls, config: dict) -> "FingerCounterConfig":
        """Create config from dictionary."""
        return cls(
            min_area=config.get("min_area", 3000.0),
            min_defect_depth=config.get("min_defect_depth", 10.0),
            max_gap_angle=config.get("max_gap_angle", 90.0),
            max_fingers=config.get("max_fingers", 5),
        )


def _squared_distance(p: Point, q: Point) -> float:
    dx, dy = p[0] - q[0], p[1] - q[1]
    return dx * dx + dy * dy


def interior_angle(start: Point, far: Point, end: Point) -> float:
    """
    Angle at ``far`` of the triangle (start, far, end), in degrees.

    Uses the law of cosines on the three side lengths. A degenerate
    triangle (far coincides with an endpoint) reports 180 so it is
    never mistaken for a finger valley.
    """
    # Squared side lengths keep integer inputs exact
    a2 = _squared_distance(start, end)
    b2 = _squared_distance(start, far)
    c2 = _squared_distance(end, far)
    if b2 == 0 or c2 == 0:
        return 180.0
    cosine = (b2 + c2 - a2) / (2 * math.sqrt(b2 * c2))
    cosine = max(-1.0, min(1.0, cosine))
    return math.degrees(math.acos(cosine))


@dataclass(frozen=True)
class ConvexityDefect:
    """A concavity between the hull and the contour."""
    start: Point
    end: Point
    far: Point
    depth: float  # pixels

    @classmethod
    def from_raw(cls, contour: np.ndarray, row: Sequence[int]) -> "ConvexityDefect":
        """Build from one ``cv2.convexityDefects`` row (start_idx, end_idx, far_idx, fixed_depth)."""
        start_idx, end_idx, far_idx, fixed_depth = (int(v) for v in row)
        return cls(
            start=_point(contour, start_idx),
            end=_point(contour, end_idx),
            far=_point(contour, far_idx),
            depth=fixed_depth / DEPTH_SCALE,
        )

    @property
    def angle(self) -> float:
        return interior_angle(self.start, self.far, self.end)

    def is_finger_gap(self, min_depth: float = 10.0, max_angle: float = 90.0) -> bool:
        return self.depth > min_depth and self.angle <= max_angle


def _point(contour: np.ndarray, index: int) -> Point:
    x, y = contour[index].reshape(-1)[:2]
    return (int(x), int(y))


def largest_contour(contours: Sequence[np.ndarray]) -> Tuple[Optional[np.ndarray], float]:
    """Return the contour with the largest enclosed area, and that area."""
    best, best_area = None, 0.0
    for contour in contours:
        area = cv2.contourArea(contour)
        if best is None or area > best_area:
            best, best_area = contour, area
    return best, best_area


def find_defects(contour: Optional[np.ndarray]) -> Optional[List[ConvexityDefect]]:
    """
    Convexity defects of a contour.

    Returns:
        List of defects (possibly empty for a convex shape), or None when
        the hull has fewer than 4 points or the geometry is too degenerate
        for OpenCV to analyse.
    """
    if contour is None or len(contour) < 4:
        return None
    try:
        hull = cv2.convexHull(contour, returnPoints=False)
        if hull is None or len(hull) < 4:
            return None
        raw = cv2.convexityDefects(contour, hull)
    except cv2.error as e:
        logger.debug("Defect analysis failed on %d-point contour: %s", len(contour), e)
        return None

    if raw is None:
        return []
    return [ConvexityDefect.from_raw(contour, row) for row in raw.reshape(-1, 4)]


def count_fingers_from_defects(
    defects: Sequence[ConvexityDefect],
    min_depth: float = 10.0,
    max_angle: float = 90.0,
    max_fingers: int = 5,
) -> int:
    """Fingers = qualifying valleys + 1, clamped to ``max_fingers``."""
    gaps = sum(1 for d in defects if d.is_finger_gap(min_depth, max_angle))
    return min(gaps + 1, max_fingers)


@dataclass
class FingerCountResult:
    """Per-tick outcome of contour analysis."""
    count: int
    area: float = 0.0
    contour: Optional[np.ndarray] = None
    defects: List[ConvexityDefect] = field(default_factory=list)

    @property
    def hand_found(self) -> bool:
        return self.count > 0

    @staticmethod
    def none(area: float = 0.0) -> "FingerCountResult":
        """No hand this tick."""
        return FingerCountResult(count=0, area=area)


class FingerCounter:
    """
    Raw finger count from a binary mask.

    Never raises on malformed input: anything it cannot analyse is
    reported as count 0 ("no hand").

    Example:
        >>> counter = FingerCounter()
        >>> result = counter.count(mask)
        >>> result.count
        3
    """

    def __init__(self, config: Optional[FingerCounterConfig] = None):
        self.config = config or FingerCounterConfig()

    def count(self, mask: Optional[np.ndarray]) -> FingerCountResult:
        if mask is None or mask.size == 0 or mask.ndim != 2:
            return FingerCountResult.none()
        if mask.dtype != np.uint8:
            mask = mask.astype(np.uint8)

        contours, _ = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
        if not contours:
            return FingerCountResult.none()

        contour, area = largest_contour(contours)
        if area <= self.config.min_area:
            return FingerCountResult.none(area)

        return self.count_contour(contour, area)

    def count_contour(self, contour: np.ndarray, area: Optional[float] = None) -> FingerCountResult:
        """Analyse an already-selected hand contour."""
        if area is None:
            area = cv2.contourArea(contour)

        defects = find_defects(contour)
        if defects is None:
            return FingerCountResult.none(area)

        count = count_fingers_from_defects(
            defects,
            min_depth=self.config.min_defect_depth,
            max_angle=self.config.max_gap_angle,
            max_fingers=self.config.max_fingers,
        )
        return FingerCountResult(count=count, area=area, contour=contour, defects=defects)
