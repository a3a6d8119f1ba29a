"""
Forecast Scorer Service

Blends a market-sentiment proxy, a technical score and a pattern score
into a directional price prediction. Also provides the vote-based
BUY/SELL/NEUTRAL analysis and a caller-owned prediction cache.
"""

from fxforecast.services.forecast.interface import ForecastServiceInterface, ForecastRequest
from fxforecast.services.forecast.service import ForecastService, get_forecast_service
from fxforecast.services.forecast.sentiment import (
    SentimentSource,
    StaticSentimentSource,
    DEFAULT_EVENTS,
    sentiment_score,
)
from fxforecast.services.forecast.scoring import (
    technical_score,
    pattern_score,
    blend_scores,
    direction_for,
    build_prediction,
)
from fxforecast.services.forecast.cache import PredictionCache

__all__ = [
    "ForecastServiceInterface",
    "ForecastRequest",
    "ForecastService",
    "get_forecast_service",
    "SentimentSource",
    "StaticSentimentSource",
    "DEFAULT_EVENTS",
    "sentiment_score",
    "technical_score",
    "pattern_score",
    "blend_scores",
    "direction_for",
    "build_prediction",
    "PredictionCache",
]
