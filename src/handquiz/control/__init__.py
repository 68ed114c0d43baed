"""Gesture-to-quiz command mapping."""
from .quiz_controller import QuizAction, QuizCommand, QuizController

__all__ = ["QuizAction", "QuizCommand", "QuizController"]
