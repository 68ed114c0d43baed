"""
Camera Capture Module
======================

Synchronous webcam capture for the gesture input loop.
Frames are read on the render thread, one per tick.
"""

import cv2
import time
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    device_ids: Tuple[int, ...] = (0, 1)  # Primary, then secondary
    width: int = 640
    height: int = 480
    fps: int = 30
    buffer_size: int = 1  # Minimal buffering for low latency
    flip_horizontal: bool = True  # Mirror view
    warmup_frames: int = 0

    @classmethod
    def from_dict(cls, config: dict) -> "CameraConfig":
        """Create config from dictionary (YAML parsed)."""
        device_ids = config.get("device_ids", (0, 1))
        if isinstance(device_ids, int):
            device_ids = (device_ids,)
        return cls(
            device_ids=tuple(device_ids),
            width=config.get("width", 640),
            height=config.get("height", 480),
            fps=config.get("fps", 30),
            buffer_size=config.get("buffer_size", 1),
            flip_horizontal=config.get("flip_horizontal", True),
            warmup_frames=config.get("warmup_frames", 0),
        )


@dataclass
class Frame:
    """Container for captured frame with metadata."""
    image: np.ndarray
    timestamp: float
    frame_number: int


class Camera:
    """
    Webcam wrapper with device-index fallback.

    The device handle is a scoped resource: opened when gesture input is
    enabled and released when it is disabled. Releasing twice is a no-op.

    Example:
        >>> camera = Camera(CameraConfig())
        >>> if camera.open():
        ...     frame = camera.read()
        ...     if frame:
        ...         process(frame.image)
        >>> camera.release()
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._cap: Optional[cv2.VideoCapture] = None
        self._device_id: Optional[int] = None
        self._frame_number = 0

    def open(self) -> bool:
        """
        Open the first device index that works.

        Returns:
            True if a camera was opened
        """
        if self.is_open:
            return True
        if self._cap is not None:
            logger.warning("Camera %s stopped responding, reopening", self._device_id)
            self.release()

        for device_id in self.config.device_ids:
            logger.info("Trying camera device %d...", device_id)
            cap = cv2.VideoCapture(device_id)

            if not cap.isOpened():
                logger.debug("Camera device %d unavailable", device_id)
                cap.release()
                continue

            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
            cap.set(cv2.CAP_PROP_FPS, self.config.fps)
            cap.set(cv2.CAP_PROP_BUFFERSIZE, self.config.buffer_size)

            self._cap = cap
            self._device_id = device_id
            break

        if self._cap is None:
            logger.warning("No camera available (tried devices %s)",
                           list(self.config.device_ids))
            return False

        actual_width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        actual_height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info("Camera %d opened: %dx%d", self._device_id, actual_width, actual_height)

        # Let auto-exposure settle
        for _ in range(self.config.warmup_frames):
            self._cap.read()

        self._frame_number = 0
        return True

    def release(self) -> None:
        """Release the device. Safe to call when already released."""
        if self._cap is None:
            return
        self._cap.release()
        self._cap = None
        logger.info("Camera %s released", self._device_id)
        self._device_id = None

    def read(self) -> Optional[Frame]:
        """
        Capture one frame (blocking).

        Returns:
            Frame, or None if the camera is closed or the frame is empty
        """
        if self._cap is None:
            return None

        ret, image = self._cap.read()

        if not ret or image is None or image.size == 0:
            logger.debug("Empty frame from camera %s", self._device_id)
            return None

        if self.config.flip_horizontal:
            image = cv2.flip(image, 1)

        self._frame_number += 1

        return Frame(
            image=image,
            timestamp=time.time(),
            frame_number=self._frame_number
        )

    @property
    def is_open(self) -> bool:
        """Check if a device is currently held."""
        return self._cap is not None and self._cap.isOpened()

    @property
    def device_id(self) -> Optional[int]:
        """Index of the opened device, if any."""
        return self._device_id

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
