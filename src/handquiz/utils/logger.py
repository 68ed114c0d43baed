"""
Logging setup and gesture trigger logging.
"""

import os
import logging
import logging.handlers
import time
from dataclasses import dataclass
from typing import Optional


@dataclass
class LoggingConfig:
    """The ``logging`` section of the config file."""
    level: str = "INFO"
    file: Optional[str] = None
    console_format: str = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format: str = "%(asctime)s [%(levelname)-7s] %(name)-25s | %(message)s"
    date_format: str = "%H:%M:%S"
    max_size_mb: int = 10
    backup_count: int = 3
    # Per-tick debug chatter from the vision core
    quiet_vision: bool = True

    @classmethod
    def from_dict(cls, config: dict) -> "LoggingConfig":
        """Create config from dictionary."""
        defaults = cls()
        return cls(
            level=config.get("level", defaults.level),
            file=config.get("file", defaults.file),
            console_format=config.get("console_format", defaults.console_format),
            file_format=config.get("file_format", defaults.file_format),
            date_format=config.get("date_format", defaults.date_format),
            max_size_mb=config.get("max_size_mb", defaults.max_size_mb),
            backup_count=config.get("backup_count", defaults.backup_count),
            quiet_vision=config.get("quiet_vision", defaults.quiet_vision),
        )


# Loggers that emit on every tick at DEBUG
VISION_LOGGERS = (
    "handquiz.capture",
    "handquiz.segmentation",
    "handquiz.recognition.finger_counter",
)


def setup_logging(config: Optional[LoggingConfig] = None, debug: bool = False):
    """
    Configure console (and optional rotating file) logging.

    Args:
        config: Logging section; defaults when omitted
        debug: Force DEBUG level and let the vision core log per tick
    """
    config = config or LoggingConfig()
    level = "DEBUG" if debug else config.level

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(config.console_format, datefmt=config.date_format))
    root_logger.addHandler(console)

    if config.file:
        log_dir = os.path.dirname(config.file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(config.file_format, datefmt=config.date_format))
        root_logger.addHandler(file_handler)

    vision_level = logging.NOTSET if debug or not config.quiet_vision else logging.INFO
    for name in VISION_LOGGERS:
        logging.getLogger(name).setLevel(vision_level)

    return root_logger


class TriggerLogger:
    """Records fired gesture triggers and what the quiz did with them."""

    def __init__(self):
        self.logger = logging.getLogger("gesture_events")
        self._history = []

    def log_trigger(self, finger_count, command=None, detail=""):
        """Log one consumed gesture trigger."""
        entry = {
            "timestamp": time.time(),
            "fingers": finger_count,
            "command": command,
            "detail": detail,
        }
        self._history.append(entry)
        self.logger.info(
            "Fingers: %d | Command: %-14s | %s",
            finger_count,
            command or "ignored",
            detail,
        )

    def get_history(self, last_n=None):
        """Recent trigger history."""
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    @property
    def total_triggers(self):
        return len(self._history)

