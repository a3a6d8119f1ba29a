"""
FX Forecast Schema Contracts

This module defines all data contracts between engine components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from fxforecast.schemas.market import (
    Timeframe,
    PriceBar,
    PriceSeries,
)
from fxforecast.schemas.indicators import (
    SignalType,
    MomentumStrength,
    RSIReading,
    MACDReading,
    BollingerReading,
    MovingAverageReading,
    VolumeProfileReading,
    MomentumReading,
    IndicatorSet,
)
from fxforecast.schemas.patterns import (
    Pattern,
    PatternName,
    PatternDirection,
)
from fxforecast.schemas.forecast import (
    EventType,
    EventImpact,
    EventSentiment,
    MarketEvent,
    PredictionDirection,
    ForecastScores,
    Prediction,
    AnalysisResult,
)

__all__ = [
    # Market
    "Timeframe",
    "PriceBar",
    "PriceSeries",
    # Indicators
    "SignalType",
    "MomentumStrength",
    "RSIReading",
    "MACDReading",
    "BollingerReading",
    "MovingAverageReading",
    "VolumeProfileReading",
    "MomentumReading",
    "IndicatorSet",
    # Patterns
    "Pattern",
    "PatternName",
    "PatternDirection",
    # Forecast
    "EventType",
    "EventImpact",
    "EventSentiment",
    "MarketEvent",
    "PredictionDirection",
    "ForecastScores",
    "Prediction",
    "AnalysisResult",
]
