"""Deterministic, rule-based PPE detection for still images."""

from safetysnap.detections import BBox, Detection
from safetysnap.errors import DecodeFailure, SafetySnapError
from safetysnap.pipeline import AnalysisResult, analyze, analyze_upload, summarize
from safetysnap.pixels import PixelBuffer, decode_image, load_image

__version__ = "1.0.0"

__all__ = [
    "AnalysisResult", "BBox", "DecodeFailure", "Detection", "PixelBuffer", "SafetySnapError",
    "analyze", "analyze_upload", "decode_image", "load_image", "summarize",
]
