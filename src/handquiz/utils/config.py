"""
Configuration loading.

Reads the YAML config and builds the typed per-component configs.
Every value has a default, so a missing file or section is not an error.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from ..capture.camera import CameraConfig
from ..recognition.gesture_classifier import GestureClassifierConfig
from ..segmentation.skin_segmenter import SegmenterConfig
from .logger import LoggingConfig
from .visualization import PreviewConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "config.yaml"

_SECTIONS = ("camera", "segmentation", "recognition", "preview", "logging", "performance")


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    segmentation: SegmenterConfig = field(default_factory=SegmenterConfig)
    recognition: GestureClassifierConfig = field(default_factory=GestureClassifierConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)
    target_fps: float = 60.0


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load the YAML configuration file.

    A missing file yields an empty dict (all defaults). Malformed YAML
    raises ``yaml.YAMLError``.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", path)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}

    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        logger.warning("Ignoring unknown config sections: %s", ", ".join(unknown))

    logger.info("Loaded config from %s", path)
    return data


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    return AppConfig(
        camera=CameraConfig.from_dict(config_dict.get("camera", {})),
        segmentation=SegmenterConfig.from_dict(config_dict.get("segmentation", {})),
        recognition=GestureClassifierConfig.from_dict(config_dict.get("recognition", {})),
        preview=PreviewConfig.from_dict(config_dict.get("preview", {})),
        log=LoggingConfig.from_dict(config_dict.get("logging", {})),
        target_fps=config_dict.get("performance", {}).get("target_fps", 60.0),
    )
