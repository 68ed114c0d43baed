"""Hand silhouette segmentation."""
from .skin_segmenter import RegionOfInterest, SegmenterConfig, SkinSegmenter

__all__ = ["RegionOfInterest", "SegmenterConfig", "SkinSegmenter"]
