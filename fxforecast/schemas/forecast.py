"""
CONTRACT 4: Forecast Scorer

Input: PriceSeries + MarketEvent list + horizon
Output: Prediction / AnalysisResult

The "probability" on a Prediction is the blended score itself, not a
calibrated probability.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from fxforecast.schemas.indicators import IndicatorSet, SignalType
from fxforecast.schemas.patterns import Pattern


# =============================================================================
# ENUMS
# =============================================================================


class EventType(str, Enum):
    ECONOMIC = "economic"
    POLITICAL = "political"
    TECHNICAL = "technical"


class EventImpact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EventSentiment(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PredictionDirection(str, Enum):
    UP = "UP"
    DOWN = "DOWN"


# =============================================================================
# INPUT: MarketEvent
# =============================================================================


class MarketEvent(BaseModel):
    """Weighted market event feeding the sentiment proxy."""

    type: EventType
    impact: EventImpact
    sentiment: EventSentiment
    weight: float = Field(..., ge=0, le=1)


# =============================================================================
# OUTPUT: Prediction
# =============================================================================


class ForecastScores(BaseModel):
    """Sub-scores blended into the final score."""

    sentiment: float = Field(..., ge=0, le=1)
    technical: float = Field(..., ge=0, le=1)
    pattern: float = Field(..., ge=0, le=1)
    final: float = Field(..., ge=0, le=1)


class Prediction(BaseModel):
    """
    Directional price forecast.
    Returned by: Forecast Service
    Consumed by: UI layer (caches it via PredictionCache)
    """

    predicted_price: float
    confidence: float = Field(..., ge=0, le=1)
    direction: PredictionDirection
    probability: float = Field(..., ge=0, le=1, description="Blended score before thresholding")
    base_price: float = Field(..., gt=0)
    horizon_hours: float = Field(..., ge=0)
    volatility: float = Field(..., ge=0)
    scores: ForecastScores
    patterns: list[Pattern] = Field(default_factory=list)
    insufficient_data: bool = False
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def price_change(self) -> float:
        return self.predicted_price - self.base_price


# =============================================================================
# OUTPUT: AnalysisResult
# =============================================================================


class AnalysisResult(BaseModel):
    """Vote-based BUY/SELL/NEUTRAL summary of indicators and patterns."""

    signal: SignalType
    confidence: float = Field(..., ge=0, le=1)
    indicators: IndicatorSet
    patterns: list[Pattern] = Field(default_factory=list)
    insufficient_data: bool = False
    generated_at: Optional[datetime] = None
