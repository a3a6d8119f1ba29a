"""
Forecast Scoring

Pure functions mapping indicator readings and patterns to 0-1 scores,
blending them, and turning the blend into a Prediction.
"""

from typing import Iterable, Optional

from fxforecast.schemas.indicators import IndicatorSet
from fxforecast.schemas.patterns import Pattern, PatternDirection
from fxforecast.schemas.forecast import (
    ForecastScores,
    Prediction,
    PredictionDirection,
)

DEFAULT_WEIGHTS = (0.3, 0.4, 0.3)  # sentiment, technical, pattern


def rsi_score(value: float, overbought: float = 70.0, oversold: float = 30.0) -> float:
    if value > overbought:
        return 0.2
    if value < oversold:
        return 0.8
    return 0.5


def macd_score(histogram: float) -> float:
    if histogram > 0:
        return 0.7
    if histogram < 0:
        return 0.3
    return 0.5


def bollinger_score(position: float, upper_zone: float = 0.8, lower_zone: float = 0.2) -> float:
    if position > upper_zone:
        return 0.2
    if position < lower_zone:
        return 0.8
    return 0.5


def technical_score(
    indicators: IndicatorSet,
    overbought: float = 70.0,
    oversold: float = 30.0,
    upper_zone: float = 0.8,
    lower_zone: float = 0.2,
) -> float:
    """Mean of the RSI, MACD and Bollinger buckets (insufficient readings score 0.5)."""
    rsi_part = (
        0.5
        if indicators.rsi.insufficient_data
        else rsi_score(indicators.rsi.value, overbought, oversold)
    )
    macd_part = (
        0.5
        if indicators.macd.insufficient_data
        else macd_score(indicators.macd.histogram)
    )
    bollinger_part = (
        0.5
        if indicators.bollinger.insufficient_data
        else bollinger_score(indicators.bollinger.position, upper_zone, lower_zone)
    )
    return (rsi_part + macd_part + bollinger_part) / 3


def pattern_score(patterns: Iterable[Pattern], directional: bool = False) -> float:
    """
    Mean confidence of the detected patterns, 0.5 when there are none.

    With `directional`, a bearish pattern of confidence c counts as 1 - c.
    """
    values = [
        1 - p.confidence
        if directional and p.direction == PatternDirection.BEARISH
        else p.confidence
        for p in patterns
    ]
    if not values:
        return 0.5
    return sum(values) / len(values)


def blend_scores(
    sentiment: float,
    technical: float,
    pattern: float,
    weights: tuple[float, float, float] = DEFAULT_WEIGHTS,
) -> float:
    """Weighted blend of the three sub-scores, clamped to [0, 1]."""
    w_sentiment, w_technical, w_pattern = weights
    total = w_sentiment + w_technical + w_pattern
    if abs(total - 1.0) > 1e-9:
        raise ValueError(f"Score weights must sum to 1.0, got {total}")

    final = sentiment * w_sentiment + technical * w_technical + pattern * w_pattern
    return max(0.0, min(1.0, final))


def direction_for(final_score: float) -> PredictionDirection:
    """UP strictly above 0.5; a score of exactly 0.5 resolves to DOWN."""
    return PredictionDirection.UP if final_score > 0.5 else PredictionDirection.DOWN


def build_prediction(
    scores: ForecastScores,
    base_price: float,
    volatility: float,
    horizon_hours: float,
    patterns: Optional[list[Pattern]] = None,
    insufficient_data: bool = False,
) -> Prediction:
    """
    Turn a blended score into a price forecast.

    price change = (final - 0.5) * volatility * horizon
    confidence   = |final - 0.5| * 2
    """
    final = scores.final
    price_change = (final - 0.5) * volatility * horizon_hours

    return Prediction(
        predicted_price=base_price + price_change,
        confidence=min(1.0, abs(final - 0.5) * 2),
        direction=direction_for(final),
        probability=final,
        base_price=base_price,
        horizon_hours=horizon_hours,
        volatility=volatility,
        scores=scores,
        patterns=patterns or [],
        insufficient_data=insufficient_data,
    )
