"""
Gesture Tracker
================

Shell around the vision core: owns the camera handle and the preview
window, feeds frames through segmentation and classification once per
render tick, and hands out finger-count triggers.

Runs on the caller's thread. A tick blocks for as long as the camera
takes to deliver a frame.
"""

import logging
from typing import Optional

from .capture.camera import Camera, CameraConfig
from .recognition.gesture_classifier import GestureClassifier, GestureClassifierConfig
from .recognition.stability import GestureState
from .segmentation.skin_segmenter import SegmenterConfig, SkinSegmenter
from .utils.performance import PerformanceMonitor
from .utils.visualization import PreviewConfig, Visualizer

logger = logging.getLogger(__name__)


class GestureTracker:
    """
    Camera-driven finger-count input.

    Example:
        >>> tracker = GestureTracker()
        >>> tracker.set_enabled(True)
        >>> while running:
        ...     tracker.update(dt, active=in_quiz)
        ...     fingers = tracker.consume_trigger()
        ...     if fingers is not None:
        ...         handle(fingers)
        >>> tracker.close()
    """

    def __init__(
        self,
        camera_config: Optional[CameraConfig] = None,
        segmenter_config: Optional[SegmenterConfig] = None,
        classifier_config: Optional[GestureClassifierConfig] = None,
        preview_config: Optional[PreviewConfig] = None,
        performance: Optional[PerformanceMonitor] = None,
    ):
        self.camera = Camera(camera_config)
        self.segmenter = SkinSegmenter(segmenter_config)
        self.classifier = GestureClassifier(classifier_config)
        self.visualizer = Visualizer(preview_config)
        self.performance = performance

        self._enabled = False
        self._last_key = -1

    def set_enabled(self, enabled: bool) -> bool:
        """
        Turn gesture input on or off.

        Enabling opens the camera (primary index, then secondary), and
        reopens it if the device was lost while enabled. If no
        device opens, gesture input stays off and the rest of the
        application carries on without it. Disabling releases the device,
        closes the preview and drops any pending trigger.

        Returns:
            Whether gesture input is enabled afterwards
        """
        if enabled:
            if not self._enabled or not self.camera.is_open:
                self._enabled = self.camera.open()
                if not self._enabled:
                    logger.warning("Gesture input unavailable: no camera")
            return self._enabled

        self.camera.release()
        self.visualizer.close()
        self.classifier.reset()
        if self._enabled:
            logger.info("Gesture input disabled")
        self._enabled = False
        return False

    def update(self, elapsed: float, active: bool) -> Optional[int]:
        """
        Run one tick of the pipeline.

        Args:
            elapsed: Seconds since the previous tick
            active: Whether the UI currently accepts gesture input. When
                False no vision work is done and the preview is closed.

        Returns:
            Raw finger count for this tick, or None if the tick was skipped
        """
        self._last_key = -1
        if not self._enabled:
            return None

        if not active:
            self.visualizer.close()
            return None

        frame = self._measure("capture", self.camera.read)
        if frame is None:
            return None

        mask = self._measure("segmentation", self.segmenter.segment_frame, frame.image)
        if mask is None:
            return None

        raw_count = self._measure("classification", self.classifier.update, mask, elapsed)

        if self.visualizer.config.enabled:
            self._draw_preview(frame.image)

        return raw_count

    def consume_trigger(self) -> Optional[int]:
        """Finger count of a confirmed gesture, at most once per hold."""
        return self.classifier.consume_trigger()

    def close(self) -> None:
        """Release every resource the tracker holds."""
        self.set_enabled(False)

    def _measure(self, stage: str, func, *args):
        if self.performance is None:
            return func(*args)
        with self.performance.measure(stage):
            return func(*args)

    def _draw_preview(self, image) -> None:
        roi = self.segmenter.roi
        self.visualizer.draw_roi(image, roi)
        counter = self.classifier.config.counter
        self.visualizer.draw_analysis(image, self.classifier.last_result, roi,
                                      counter.min_defect_depth, counter.max_gap_angle)
        self.visualizer.draw_status(image, self.classifier.state, self.classifier.hold_progress)
        self._last_key = self.visualizer.show(image)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def state(self) -> GestureState:
        return self.classifier.state

    @property
    def last_key(self) -> int:
        """Key pressed in the preview window on the last drawn tick (-1 if none)."""
        return self._last_key

    def __enter__(self):
        self.set_enabled(True)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
