"""
Finger-Count Gesture Classifier
================================

Turns a binary hand mask into a debounced, discrete finger-count event.
Contour analysis produces a raw count every tick; the stability filter
decides when that count has been held long enough to fire.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .finger_counter import FingerCounter, FingerCounterConfig, FingerCountResult
from .stability import GestureState, StabilityFilter

logger = logging.getLogger(__name__)


@dataclass
class GestureClassifierConfig:
    """Gesture classifier configuration."""
    counter: FingerCounterConfig = field(default_factory=FingerCounterConfig)
    # Seconds a count must be held before it fires
    required_hold_time: float = 0.2

    @classmethod
    def from_dict(cls, config: dict) -> "GestureClassifierConfig":
        """Create config from dictionary."""
        return cls(
            counter=FingerCounterConfig.from_dict(config),
            required_hold_time=config.get("required_hold_time", 0.2),
        )


class GestureClassifier:
    """
    Finger counter plus hold-to-confirm debouncing.

    The classifier owns the debounce state exclusively; callers only
    feed masks in and consume events out.

    Example:
        >>> classifier = GestureClassifier()
        >>> classifier.update(mask, elapsed=1 / 60)
        >>> fingers = classifier.consume_trigger()
        >>> if fingers is not None:
        ...     select_option(fingers)
    """

    def __init__(self, config: Optional[GestureClassifierConfig] = None):
        self.config = config or GestureClassifierConfig()
        self._counter = FingerCounter(self.config.counter)
        self._stability = StabilityFilter(self.config.required_hold_time)
        self._last_result = FingerCountResult.none()

    def classify(self, mask: Optional[np.ndarray]) -> int:
        """Raw finger count for a single mask, in [0, 5]. No state change."""
        return self._counter.count(mask).count

    def update(self, mask: Optional[np.ndarray], elapsed: float) -> int:
        """
        Process one tick.

        Args:
            mask: Binary hand mask for this tick
            elapsed: Seconds since the previous tick

        Returns:
            The raw finger count seen this tick
        """
        self._last_result = self._counter.count(mask)
        self._stability.update(self._last_result.count, elapsed)
        return self._last_result.count

    def consume_trigger(self) -> Optional[int]:
        """Finger count of the armed gesture, once per hold; else None."""
        event = self._stability.consume()
        if event is None:
            return None
        logger.info("Gesture triggered: %d finger(s)", event.finger_count)
        return event.finger_count

    def reset(self) -> None:
        """Return to SETTLING and drop any pending trigger."""
        self._stability.reset()
        self._last_result = FingerCountResult.none()

    @property
    def state(self) -> GestureState:
        return self._stability.state

    @property
    def hold_progress(self) -> float:
        return self._stability.progress

    @property
    def last_result(self) -> FingerCountResult:
        """Contour analysis from the most recent update."""
        return self._last_result
