"""
Pattern Detector Service

Detects chart formations (head and shoulders, double top/bottom,
Fibonacci retracement zones, support/resistance proximity).
"""

from fxforecast.services.patterns.interface import PatternServiceInterface
from fxforecast.services.patterns.service import PatternService, get_pattern_service
from fxforecast.services.patterns.detectors import (
    DetectionResult,
    detect_head_and_shoulders,
    detect_double_top_bottom,
    detect_fibonacci_retracement,
    detect_support_resistance,
)

__all__ = [
    "PatternServiceInterface",
    "PatternService",
    "get_pattern_service",
    "DetectionResult",
    "detect_head_and_shoulders",
    "detect_double_top_bottom",
    "detect_fibonacci_retracement",
    "detect_support_resistance",
]
