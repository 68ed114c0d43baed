"""
Quiz Controller Module
=======================

Maps confirmed finger-count gestures onto quiz commands.

    1-4 fingers  select answer A-D (only while a question is open)
    5 fingers    pause / resume
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

logger = logging.getLogger(__name__)


class QuizCommand(Enum):
    """Commands a gesture can issue to the quiz."""
    SELECT_OPTION = auto()
    TOGGLE_PAUSE = auto()


@dataclass(frozen=True)
class QuizAction:
    """A command plus its argument."""
    command: QuizCommand
    option_index: Optional[int] = None

    @property
    def label(self) -> str:
        if self.command is QuizCommand.TOGGLE_PAUSE:
            return "pause/resume"
        return f"option {QuizController.OPTION_LABELS[self.option_index]}"


class QuizController:
    """
    Translates finger counts into quiz actions based on quiz state.

    Example:
        >>> controller = QuizController()
        >>> controller.handle(2, in_quiz=True)
        QuizAction(command=<QuizCommand.SELECT_OPTION: 1>, option_index=1)
    """

    OPTION_LABELS = ("A", "B", "C", "D")
    PAUSE_FINGERS = 5

    def __init__(self, option_count: int = 4):
        if not 1 <= option_count <= len(self.OPTION_LABELS):
            raise ValueError(f"option_count must be 1..{len(self.OPTION_LABELS)}, got {option_count}")
        self.option_count = option_count

    def handle(
        self,
        finger_count: int,
        in_quiz: bool,
        paused: bool = False,
        answer_locked: bool = False,
    ) -> Optional[QuizAction]:
        """
        Decide what a gesture means right now.

        Args:
            finger_count: Confirmed finger count
            in_quiz: A question is on screen
            paused: The quiz is paused
            answer_locked: The current question has already been answered

        Returns:
            Action to apply, or None if the gesture means nothing here
        """
        if finger_count == self.PAUSE_FINGERS:
            if in_quiz or paused:
                return QuizAction(QuizCommand.TOGGLE_PAUSE)
            return None

        if not in_quiz or paused or answer_locked:
            logger.debug("Ignoring %d-finger gesture (in_quiz=%s, paused=%s, locked=%s)",
                         finger_count, in_quiz, paused, answer_locked)
            return None

        if 1 <= finger_count <= self.option_count:
            return QuizAction(QuizCommand.SELECT_OPTION, option_index=finger_count - 1)
        return None
