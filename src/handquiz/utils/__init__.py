"""Utility modules for configuration, logging, timing and the preview overlay."""
from .performance import PerformanceMonitor
from .visualization import PreviewConfig, Visualizer

__all__ = ["PerformanceMonitor", "PreviewConfig", "Visualizer"]
