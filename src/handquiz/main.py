"""
Hand Gesture Quiz Input - Demo Application
===========================================

Runs the finger-count tracker in a single-threaded render loop and shows
what each confirmed gesture would do to a quiz: 1-4 fingers answer A-D,
5 fingers pause or resume.
"""

import argparse
import logging
import signal
import sys
import time

import cv2

from .control.quiz_controller import QuizCommand, QuizController
from .tracker import GestureTracker
from .utils.config import AppConfig, DEFAULT_CONFIG_PATH, create_app_config, load_config
from .utils.logger import TriggerLogger, setup_logging
from .utils.performance import PerformanceMonitor

logger = logging.getLogger(__name__)

# Seconds an answered question stays locked before the next one opens
ANSWER_FEEDBACK_TIME = 1.5


class QuizDemo:
    """
    Gesture-driven stand-in for the quiz screen.

    Keyboard Controls (preview window focused):
        q/ESC - Quit
        p     - Print performance report
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self.performance = PerformanceMonitor(target_fps=config.target_fps)
        self.tracker = GestureTracker(
            camera_config=config.camera,
            segmenter_config=config.segmentation,
            classifier_config=config.recognition,
            preview_config=config.preview,
            performance=self.performance,
        )
        self.controller = QuizController()
        self.trigger_log = TriggerLogger()

        self._running = False
        self._paused = False
        self._answer_locked = False
        self._locked_at = 0.0
        self._question = 1

    def run(self) -> int:
        """Run until quit. Returns a process exit code."""
        if not self.tracker.set_enabled(True):
            logger.error("No camera available; gesture input cannot run")
            return 1

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        self._running = True
        self.performance.start()
        logger.info("Question %d: show 1-4 fingers to answer, 5 to pause", self._question)
        try:
            self._main_loop()
        finally:
            self.tracker.close()
            self.performance.stop()
            cv2.destroyAllWindows()
        return 0

    def _main_loop(self) -> None:
        frame_budget = 1.0 / self.config.target_fps if self.config.target_fps > 0 else 0.0
        last_tick = time.perf_counter()

        while self._running:
            now = time.perf_counter()
            elapsed = now - last_tick
            last_tick = now

            self.performance.frame_start()
            self._advance_question(now)

            # No gesture input while answer feedback is showing
            self.tracker.update(elapsed, active=not self._answer_locked)
            fingers = self.tracker.consume_trigger()
            if fingers is not None:
                self._handle_gesture(fingers, now)

            self.performance.frame_complete()
            self._handle_key(self.tracker.last_key)

            spare = frame_budget - (time.perf_counter() - now)
            if spare > 0:
                time.sleep(spare)

    def _handle_gesture(self, fingers: int, now: float) -> None:
        action = self.controller.handle(
            fingers,
            in_quiz=not self._paused,
            paused=self._paused,
            answer_locked=self._answer_locked,
        )
        if action is None:
            self.trigger_log.log_trigger(fingers)
            return

        if action.command is QuizCommand.TOGGLE_PAUSE:
            self._paused = not self._paused
            detail = "paused" if self._paused else "resumed"
        else:
            self._answer_locked = True
            self._locked_at = now
            detail = f"question {self._question}"
        self.trigger_log.log_trigger(fingers, action.label, detail)

    def _advance_question(self, now: float) -> None:
        if self._answer_locked and now - self._locked_at >= ANSWER_FEEDBACK_TIME:
            self._answer_locked = False
            self._question += 1
            logger.info("Question %d", self._question)

    def _handle_key(self, key: int) -> None:
        if key < 0:
            return
        key &= 0xFF
        if key in (ord("q"), 27):
            self._running = False
        elif key == ord("p"):
            print(self.performance.get_report())

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self._running = False


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Finger-count gesture input for the quiz",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keyboard Controls (preview window):
  q/ESC     - Quit
  p         - Print performance report

Examples:
  handquiz
  handquiz --config custom_config.yaml --debug
        """
    )
    parser.add_argument(
        "--config", "-c",
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to configuration file"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--no-preview",
        action="store_true",
        help="Do not open the camera preview window"
    )
    args = parser.parse_args(argv)

    app_config = create_app_config(load_config(args.config))
    if args.no_preview:
        app_config.preview.enabled = False

    setup_logging(app_config.log, debug=args.debug)

    return QuizDemo(app_config).run()


if __name__ == "__main__":
    sys.exit(main())
