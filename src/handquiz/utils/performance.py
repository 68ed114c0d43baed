"""
Performance Monitoring Module
==============================

Rolling frame-rate and per-stage timing for the gesture loop.
"""

import time
import logging
from dataclasses import dataclass
from typing import Optional, Dict
from collections import deque
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@dataclass
class PerformanceMetrics:
    """Container for performance metrics snapshot."""
    fps: float = 0.0
    frame_time_ms: float = 0.0
    capture_time_ms: float = 0.0
    segmentation_time_ms: float = 0.0
    classification_time_ms: float = 0.0
    total_frames: int = 0
    slow_frames: int = 0


class PerformanceMonitor:
    """
    Per-tick timing for the gesture pipeline.

    Example:
        >>> monitor = PerformanceMonitor()
        >>> monitor.start()
        >>> while running:
        ...     monitor.frame_start()
        ...     with monitor.measure("capture"):
        ...         frame = camera.read()
        ...     monitor.frame_complete()
    """

    def __init__(self, window_size: int = 30, target_fps: float = 30.0):
        """
        Args:
            window_size: Number of frames for rolling average
            target_fps: Frames slower than 1/target_fps count as slow
        """
        self.window_size = window_size
        self.target_fps = target_fps
        self._frame_times: deque = deque(maxlen=window_size)
        self._stage_times: Dict[str, deque] = {}
        self._frame_start: Optional[float] = None
        self._total_frames: int = 0
        self._slow_frames: int = 0

    def start(self) -> None:
        """Reset counters."""
        self._total_frames = 0
        self._slow_frames = 0
        self._frame_times.clear()
        self._stage_times.clear()
        logger.debug("Performance monitor started")

    def stop(self) -> None:
        logger.info("Performance monitor stopped. Total frames: %d, slow: %d",
                    self._total_frames, self._slow_frames)

    def frame_start(self) -> None:
        """Mark the start of a tick."""
        self._frame_start = time.perf_counter()

    def frame_complete(self) -> None:
        """Mark the tick complete and update metrics."""
        if self._frame_start is None:
            return

        frame_time = time.perf_counter() - self._frame_start
        self._frame_times.append(frame_time)
        self._total_frames += 1
        if self.target_fps > 0 and frame_time > (1.0 / self.target_fps):
            self._slow_frames += 1

        self._frame_start = None

    @contextmanager
    def measure(self, stage: str):
        """
        Context manager to time one pipeline stage.

        Args:
            stage: Name of the stage (e.g., "capture", "segmentation")
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            if stage not in self._stage_times:
                self._stage_times[stage] = deque(maxlen=self.window_size)
            self._stage_times[stage].append(elapsed)

    @property
    def fps(self) -> float:
        """Current FPS (rolling average)."""
        if not self._frame_times:
            return 0.0
        avg_frame_time = sum(self._frame_times) / len(self._frame_times)
        return 1.0 / avg_frame_time if avg_frame_time > 0 else 0.0

    @property
    def frame_time_ms(self) -> float:
        if not self._frame_times:
            return 0.0
        return (sum(self._frame_times) / len(self._frame_times)) * 1000

    def stage_time_ms(self, stage: str) -> float:
        """Average time for a specific stage in milliseconds."""
        times = self._stage_times.get(stage)
        if not times:
            return 0.0
        return (sum(times) / len(times)) * 1000

    def get_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            fps=self.fps,
            frame_time_ms=self.frame_time_ms,
            capture_time_ms=self.stage_time_ms("capture"),
            segmentation_time_ms=self.stage_time_ms("segmentation"),
            classification_time_ms=self.stage_time_ms("classification"),
            total_frames=self._total_frames,
            slow_frames=self._slow_frames,
        )

    def get_report(self) -> str:
        """Formatted performance report."""
        metrics = self.get_metrics()
        return (
            f"Performance Report\n"
            f"{'=' * 40}\n"
            f"FPS: {metrics.fps:.1f} (target: {self.target_fps})\n"
            f"Frame time: {metrics.frame_time_ms:.1f}ms\n"
            f"\nPer-Stage Breakdown:\n"
            f"  Capture: {metrics.capture_time_ms:.2f}ms\n"
            f"  Segmentation: {metrics.segmentation_time_ms:.2f}ms\n"
            f"  Classification: {metrics.classification_time_ms:.2f}ms\n"
            f"\nFrame Stats:\n"
            f"  Total: {metrics.total_frames}\n"
            f"  Slow: {metrics.slow_frames} "
            f"({100 * metrics.slow_frames / max(1, metrics.total_frames):.1f}%)\n"
        )
