"""
Visualization Module
=====================

Diagnostic preview of the gesture ROI. Purely observational:
nothing drawn here is ever read back by the recognizer.
"""

import cv2
import logging
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass

from ..recognition.finger_counter import FingerCountResult
from ..recognition.stability import GestureState, HoldPhase
from ..segmentation.skin_segmenter import RegionOfInterest

logger = logging.getLogger(__name__)


def status_text(state: GestureState) -> str:
    """Overlay label for the current debounce state."""
    if state.phase is not HoldPhase.HOLDING:
        return "Detecting..."
    if state.trigger_armed:
        return f"LOCKED: {state.last_stable_count}"
    return f"Hold: {state.last_stable_count}"


@dataclass
class PreviewConfig:
    """Preview window settings."""
    enabled: bool = True
    window_name: str = "Gesture Control"
    show_contour: bool = True
    show_defects: bool = True
    hold_bar_length: int = 200

    # Colors (BGR format)
    roi_color: Tuple[int, int, int] = (255, 0, 0)        # Blue
    detecting_color: Tuple[int, int, int] = (0, 0, 255)  # Red
    holding_color: Tuple[int, int, int] = (0, 255, 255)  # Yellow
    locked_color: Tuple[int, int, int] = (0, 255, 0)     # Green

    font_scale: float = 1.0
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "PreviewConfig":
        """Create config from dictionary."""
        colors = config.get("colors", {})
        return cls(
            enabled=config.get("enabled", True),
            window_name=config.get("window_name", "Gesture Control"),
            show_contour=config.get("show_contour", True),
            show_defects=config.get("show_defects", True),
            hold_bar_length=config.get("hold_bar_length", 200),
            roi_color=tuple(colors.get("roi", [255, 0, 0])),
            detecting_color=tuple(colors.get("detecting", [0, 0, 255])),
            holding_color=tuple(colors.get("holding", [0, 255, 255])),
            locked_color=tuple(colors.get("locked", [0, 255, 0])),
            font_scale=config.get("font_scale", 1.0),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """
    Annotates camera frames and manages the preview window.

    Example:
        >>> viz = Visualizer(PreviewConfig())
        >>> viz.draw_roi(frame.image, roi)
        >>> viz.draw_status(frame.image, classifier.state, classifier.hold_progress)
        >>> viz.show(frame.image)
        >>> viz.close()
    """

    def __init__(self, config: Optional[PreviewConfig] = None):
        self.config = config or PreviewConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX
        self._window_open = False

    def draw_roi(self, image: np.ndarray, roi: RegionOfInterest) -> np.ndarray:
        """Outline the region the user should hold their hand in."""
        cv2.rectangle(image, roi.top_left, roi.bottom_right, self.config.roi_color, 2)
        return image

    def draw_analysis(
        self,
        image: np.ndarray,
        result: FingerCountResult,
        roi: RegionOfInterest,
        min_depth: float = 10.0,
        max_angle: float = 90.0
    ) -> np.ndarray:
        """Draw the hand contour and finger valleys, offset into frame space."""
        if result.contour is None:
            return image

        offset = roi.top_left
        if self.config.show_contour:
            cv2.drawContours(image, [result.contour], -1, self.config.locked_color, 2,
                             offset=offset)

        if self.config.show_defects:
            for defect in result.defects:
                if defect.is_finger_gap(min_depth, max_angle):
                    far = (defect.far[0] + offset[0], defect.far[1] + offset[1])
                    cv2.circle(image, far, 5, self.config.detecting_color, -1)
        return image

    def draw_status(
        self,
        image: np.ndarray,
        state: GestureState,
        progress: float = 0.0
    ) -> np.ndarray:
        """
        Draw the debounce status label and hold progress bar.

        Args:
            image: BGR image to draw on
            state: Current classifier state
            progress: Hold progress in [0, 1]

        Returns:
            Image with status drawn
        """
        if state.phase is not HoldPhase.HOLDING:
            color = self.config.detecting_color
        elif state.trigger_armed:
            color = self.config.locked_color
        else:
            color = self.config.holding_color

        cv2.putText(image, status_text(state), (50, 40),
                    self._font, self.config.font_scale,
                    color, self.config.font_thickness)

        length = int(max(0.0, min(1.0, progress)) * self.config.hold_bar_length)
        if length > 0:
            cv2.line(image, (50, 80), (50 + length, 80), self.config.holding_color, 5)
        return image

    def show(self, image: np.ndarray) -> int:
        """
        Display the preview and pump the window event queue.

        Returns:
            Key code from cv2.waitKey (-1 if none)
        """
        cv2.imshow(self.config.window_name, image)
        self._window_open = True
        return cv2.waitKey(1)

    def close(self) -> None:
        """Close the preview window if it is open."""
        if not self._window_open:
            return
        try:
            cv2.destroyWindow(self.config.window_name)
        except cv2.error as e:
            logger.debug("Preview window already gone: %s", e)
        self._window_open = False

    @property
    def is_open(self) -> bool:
        return self._window_open
