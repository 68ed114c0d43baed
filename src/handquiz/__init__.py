"""
Hand Gesture Quiz Input
========================

Webcam finger counting as an input device for a quiz game.

Modules:
    - capture: Camera frame acquisition
    - segmentation: HSV skin mask of the fixed region of interest
    - recognition: Contour/defect finger counting and hold-to-confirm debouncing
    - control: Finger count to quiz command mapping
    - utils: Configuration, logging, performance, preview overlay
"""

__version__ = "1.0.0"

from .tracker import GestureTracker

__all__ = ["GestureTracker"]
