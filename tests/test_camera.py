"""
Tests for Camera Module
========================
"""

import pytest
import numpy as np
import sys
from pathlib import Path
from unittest.mock import patch, MagicMock

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from handquiz.capture.camera import Camera, CameraConfig, Frame


def make_capture(opened=True, frame=None):
    """Mock cv2.VideoCapture instance."""
    cap = MagicMock()
    cap.isOpened.return_value = opened
    if frame is None:
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
    cap.read.return_value = (True, frame)
    cap.get.return_value = 640.0
    return cap


class TestCameraConfig:
    """Test suite for CameraConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = CameraConfig()

        assert config.device_ids == (0, 1)
        assert config.width == 640
        assert config.height == 480
        assert config.flip_horizontal is True

    def test_from_dict(self):
        """Test creating config from dictionary."""
        config = CameraConfig.from_dict({
            "device_ids": [2, 3],
            "width": 320,
            "height": 240,
            "fps": 60,
        })

        assert config.device_ids == (2, 3)
        assert config.width == 320
        assert config.height == 240
        assert config.fps == 60

    def test_from_dict_single_device(self):
        """A bare integer is accepted as a single device index."""
        config = CameraConfig.from_dict({"device_ids": 4})

        assert config.device_ids == (4,)
        assert config.width == 640  # Default


class TestFrame:
    """Test suite for Frame class."""

    def test_frame_creation(self):
        image = np.zeros((480, 640, 3), dtype=np.uint8)
        frame = Frame(image=image, timestamp=1234.5, frame_number=42)

        assert frame.frame_number == 42
        assert frame.timestamp == 1234.5
        assert frame.image.shape == (480, 640, 3)


class TestCamera:
    """Test suite for Camera class."""

    @pytest.fixture
    def mock_cv2(self):
        """Mock OpenCV VideoCapture."""
        with patch("handquiz.capture.camera.cv2") as mock:
            mock.VideoCapture.return_value = make_capture()
            mock.flip.side_effect = lambda image, code: image[:, ::-1]
            yield mock

    def test_camera_init(self):
        camera = Camera(CameraConfig())

        assert not camera.is_open
        assert camera.device_id is None

    def test_open_primary(self, mock_cv2):
        camera = Camera()

        assert camera.open() is True
        assert camera.is_open
        assert camera.device_id == 0
        mock_cv2.VideoCapture.assert_called_once_with(0)

        camera.release()

    def test_open_falls_back_to_secondary(self, mock_cv2):
        primary = make_capture(opened=False)
        secondary = make_capture()
        mock_cv2.VideoCapture.side_effect = [primary, secondary]

        camera = Camera()

        assert camera.open() is True
        assert camera.device_id == 1
        primary.release.assert_called_once()

    def test_open_fails_without_devices(self, mock_cv2):
        mock_cv2.VideoCapture.side_effect = lambda idx: make_capture(opened=False)

        camera = Camera()

        assert camera.open() is False
        assert not camera.is_open
        assert camera.read() is None

    def test_reopen_after_device_lost(self, mock_cv2):
        """A handle that stopped reporting open is dropped, not reused."""
        stale = make_capture()
        mock_cv2.VideoCapture.side_effect = [stale] + [make_capture(opened=False)] * 2

        camera = Camera()
        assert camera.open() is True

        stale.isOpened.return_value = False

        assert camera.open() is False
        assert not camera.is_open
        assert camera.device_id is None
        stale.release.assert_called_once()

    def test_reopen_finds_replacement_device(self, mock_cv2):
        stale = make_capture()
        replacement = make_capture()
        mock_cv2.VideoCapture.side_effect = [stale, make_capture(opened=False), replacement]

        camera = Camera()
        camera.open()
        stale.isOpened.return_value = False

        assert camera.open() is True
        assert camera.device_id == 1
        assert camera.read() is not None

    def test_release_is_idempotent(self, mock_cv2):
        cap = mock_cv2.VideoCapture.return_value
        camera = Camera()
        camera.open()

        camera.release()
        camera.release()

        cap.release.assert_called_once()
        assert not camera.is_open

    def test_release_without_open(self):
        camera = Camera()
        camera.release()

        assert not camera.is_open

    def test_read_returns_mirrored_frame(self, mock_cv2):
        image = np.zeros((480, 640, 3), dtype=np.uint8)
        image[:, 0] = 255
        mock_cv2.VideoCapture.return_value = make_capture(frame=image)

        camera = Camera()
        camera.open()
        frame = camera.read()

        assert frame is not None
        assert frame.frame_number == 1
        assert frame.image[0, -1, 0] == 255
        assert frame.image[0, 0, 0] == 0

    def test_read_failure_returns_none(self, mock_cv2):
        cap = mock_cv2.VideoCapture.return_value
        cap.read.return_value = (False, None)

        camera = Camera()
        camera.open()

        assert camera.read() is None

    def test_read_empty_frame_returns_none(self, mock_cv2):
        cap = mock_cv2.VideoCapture.return_value
        cap.read.return_value = (True, np.zeros((0, 0, 3), dtype=np.uint8))

        camera = Camera()
        camera.open()

        assert camera.read() is None

    def test_context_manager(self, mock_cv2):
        with Camera(CameraConfig(warmup_frames=0)) as camera:
            assert camera.is_open

        assert not camera.is_open


class TestCameraIntegration:
    """Integration tests requiring real camera."""

    @pytest.mark.skip(reason="Requires physical camera")
    def test_real_camera_capture(self):
        camera = Camera(CameraConfig(warmup_frames=5))

        try:
            if camera.open():
                frame = camera.read()

                assert frame is not None
                assert frame.image.shape[0] > 0
        finally:
            camera.release()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
