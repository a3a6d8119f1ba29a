"""
FX Forecast Engine

Technical indicators, chart-pattern detection and weighted directional
forecasts for FX price series.
"""

from fxforecast.engine import (
    ForecastEngine,
    get_engine,
    compute_indicators,
    detect_patterns,
    predict,
    analyze,
)
from fxforecast.services.forecast import PredictionCache, SentimentSource, StaticSentimentSource

__version__ = "0.1.0"

__all__ = [
    "ForecastEngine",
    "get_engine",
    "compute_indicators",
    "detect_patterns",
    "predict",
    "analyze",
    "PredictionCache",
    "SentimentSource",
    "StaticSentimentSource",
]
