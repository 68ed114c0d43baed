"""
Hold-to-Confirm Stability Filter
=================================

Debounces the per-tick raw finger count into one-shot gesture events.

Two phases plus a latch:
    SETTLING - raw count just changed, or no hand is visible
    HOLDING  - the same nonzero count was seen on consecutive ticks;
               hold time accumulates and arms the trigger once it
               reaches the required duration

The armed trigger is cleared only by consume() or by a change in the
raw count. Consuming restarts the hold timer, so a sustained gesture
re-arms after another full hold period rather than on every tick.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class HoldPhase(Enum):
    """Debounce phase."""
    SETTLING = "settling"
    HOLDING = "holding"


@dataclass
class GestureState:
    """Cross-tick debounce state."""
    last_stable_count: int = 0
    hold_time: float = 0.0
    trigger_armed: bool = False
    phase: HoldPhase = HoldPhase.SETTLING


@dataclass(frozen=True)
class GestureEvent:
    """A confirmed finger-count gesture (1..5)."""
    finger_count: int


class StabilityFilter:
    """
    Hold-to-confirm state machine.

    Example:
        >>> stability = StabilityFilter(required_hold_time=0.2)
        >>> for raw, dt in [(3, 0.05), (3, 0.1), (3, 0.1)]:
        ...     stability.update(raw, dt)
        >>> stability.consume()
        GestureEvent(finger_count=3)
        >>> stability.consume() is None
        True
    """

    def __init__(self, required_hold_time: float = 0.2):
        if required_hold_time < 0:
            raise ValueError(f"required_hold_time must be >= 0, got {required_hold_time}")
        self.required_hold_time = required_hold_time
        self._state = GestureState()

    def update(self, raw_count: int, elapsed: float) -> GestureState:
        """
        Feed one tick's raw finger count.

        Args:
            raw_count: Finger count for this tick (0 = no hand)
            elapsed: Seconds since the previous tick

        Returns:
            Snapshot of the state after this tick
        """
        state = self._state
        elapsed = max(0.0, elapsed)

        if raw_count > 0 and raw_count == state.last_stable_count:
            state.phase = HoldPhase.HOLDING
            state.hold_time += elapsed
            if state.hold_time >= self.required_hold_time and not state.trigger_armed:
                state.trigger_armed = True
                logger.debug("Locked %d finger(s) after %.2fs", raw_count, state.hold_time)
        else:
            if state.last_stable_count != raw_count:
                logger.debug("Raw count %d -> %d, settling", state.last_stable_count, raw_count)
            self._settle(raw_count)

        return self.state

    def consume(self) -> Optional[GestureEvent]:
        """
        Take the armed trigger, if any.

        Returns:
            The held gesture once per arming, otherwise None
        """
        state = self._state
        if not state.trigger_armed:
            return None

        event = GestureEvent(finger_count=state.last_stable_count)
        state.hold_time = 0.0
        state.trigger_armed = False
        return event

    def reset(self) -> None:
        """Drop any hold progress and pending trigger."""
        self._settle(0)

    def _settle(self, raw_count: int) -> None:
        self._state.last_stable_count = raw_count
        self._state.hold_time = 0.0
        self._state.trigger_armed = False
        self._state.phase = HoldPhase.SETTLING

    @property
    def state(self) -> GestureState:
        """Copy of the current state."""
        return replace(self._state)

    @property
    def is_armed(self) -> bool:
        return self._state.trigger_armed

    @property
    def progress(self) -> float:
        """Hold progress in [0, 1]; 0 while settling."""
        if self._state.phase is not HoldPhase.HOLDING:
            return 0.0
        if self.required_hold_time <= 0:
            return 1.0
        return min(1.0, self._state.hold_time / self.required_hold_time)
