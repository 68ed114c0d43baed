"""Finger-count gesture recognition."""
from .finger_counter import ConvexityDefect, FingerCounter, FingerCounterConfig, FingerCountResult
from .stability import GestureEvent, GestureState, HoldPhase, StabilityFilter
from .gesture_classifier import GestureClassifier, GestureClassifierConfig

__all__ = [
    "ConvexityDefect",
    "FingerCounter",
    "FingerCounterConfig",
    "FingerCountResult",
    "GestureEvent",
    "GestureState",
    "HoldPhase",
    "StabilityFilter",
    "GestureClassifier",
    "GestureClassifierConfig",
]
