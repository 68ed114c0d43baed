"""
Tests for Performance Module
=============================
"""

import pytest
import time
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from handquiz.utils.performance import PerformanceMetrics, PerformanceMonitor


class TestPerformanceMonitor:
    """Test suite for PerformanceMonitor class."""

    @pytest.fixture
    def monitor(self):
        """Create performance monitor."""
        mon = PerformanceMonitor(window_size=5)
        mon.start()
        return mon

    def test_empty_monitor(self, monitor):
        assert monitor.fps == 0.0
        assert monitor.frame_time_ms == 0.0
        assert monitor.stage_time_ms("capture") == 0.0

    def test_fps_calculation(self, monitor):
        """Frames of ~33ms come out around 30 FPS."""
        for _ in range(10):
            monitor.frame_start()
            time.sleep(0.033)
            monitor.frame_complete()

        assert 15 < monitor.fps <= 31

    def test_frame_complete_without_start(self, monitor):
        monitor.frame_complete()

        assert monitor.get_metrics().total_frames == 0

    def test_stage_timing(self, monitor):
        """Test per-stage timing."""
        for _ in range(5):
            monitor.frame_start()

            with monitor.measure("capture"):
                time.sleep(0.005)

            with monitor.measure("classification"):
                time.sleep(0.020)

            monitor.frame_complete()

        capture_time = monitor.stage_time_ms("capture")
        classification_time = monitor.stage_time_ms("classification")

        assert capture_time >= 4
        assert classification_time >= 19
        assert classification_time > capture_time

    def test_measure_records_on_error(self, monitor):
        with pytest.raises(RuntimeError):
            with monitor.measure("segmentation"):
                raise RuntimeError("boom")

        assert monitor.stage_time_ms("segmentation") >= 0.0
        assert len(monitor._stage_times["segmentation"]) == 1

    def test_metrics_snapshot(self, monitor):
        monitor.frame_start()
        time.sleep(0.02)
        monitor.frame_complete()

        metrics = monitor.get_metrics()

        assert isinstance(metrics, PerformanceMetrics)
        assert metrics.total_frames == 1
        assert metrics.frame_time_ms >= 19

    def test_slow_frames_counted(self):
        monitor = PerformanceMonitor(target_fps=100)
        monitor.start()

        monitor.frame_start()
        time.sleep(0.02)  # Over the 10ms budget
        monitor.frame_complete()

        assert monitor.get_metrics().slow_frames == 1

    def test_rolling_window(self, monitor):
        for _ in range(8):
            monitor.frame_start()
            monitor.frame_complete()

        assert len(monitor._frame_times) == 5
        assert monitor.get_metrics().total_frames == 8

    def test_report_generation(self, monitor):
        monitor.frame_start()
        monitor.frame_complete()

        report = monitor.get_report()

        assert "FPS" in report
        assert "Segmentation" in report
        assert "Total: 1" in report

    def test_start_resets(self, monitor):
        monitor.frame_start()
        monitor.frame_complete()

        monitor.start()

        assert monitor.get_metrics().total_frames == 0
        assert monitor.fps == 0.0

    def test_stop(self, monitor):
        monitor.frame_start()
        monitor.frame_complete()

        # Should not raise
        monitor.stop()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
