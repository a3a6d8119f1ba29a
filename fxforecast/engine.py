"""
Forecast Engine

Single entry point over the three engine layers:

    compute_indicators(series)               -> IndicatorSet
    detect_patterns(series)                  -> list[Pattern]
    predict(series, events, horizon_hours)   -> Prediction
    analyze(series)                          -> AnalysisResult

Data flows strictly bottom-up: indicators, then patterns, then the
forecast blend. Nothing is shared between calls.
"""

import random
from typing import Optional, Sequence

from fxforecast.core.config import Settings, get_settings
from fxforecast.schemas.forecast import AnalysisResult, MarketEvent, Prediction
from fxforecast.schemas.indicators import IndicatorSet
from fxforecast.schemas.patterns import Pattern
from fxforecast.services.indicators import IndicatorService, SeriesInput
from fxforecast.services.patterns import PatternService
from fxforecast.services.forecast import ForecastService, SentimentSource


class ForecastEngine:
    """
    Parameterized technical-analysis and forecast engine.

    Usage:
        engine = ForecastEngine()
        indicators = engine.compute_indicators(series)
        prediction = engine.predict(series, horizon_hours=4)

        # Reproducible jittered pattern confidence
        engine = ForecastEngine(rng=random.Random(7))
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        sentiment_source: Optional[SentimentSource] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = config or get_settings()
        self.indicators = IndicatorService(self.settings)
        self.patterns = PatternService(self.settings, rng=rng)
        self.forecast = ForecastService(
            self.settings,
            indicator_service=self.indicators,
            pattern_service=self.patterns,
            sentiment_source=sentiment_source,
        )

    def compute_indicators(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> IndicatorSet:
        return self.indicators.compute(series, current_price=current_price)

    def detect_patterns(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> list[Pattern]:
        return self.patterns.detect(series, current_price=current_price)

    def predict(
        self,
        series: SeriesInput,
        events: Optional[Sequence[MarketEvent]] = None,
        horizon_hours: Optional[float] = None,
        reference_price: Optional[float] = None,
    ) -> Prediction:
        return self.forecast.predict(
            series,
            events=events,
            horizon_hours=horizon_hours,
            reference_price=reference_price,
        )

    def analyze(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> AnalysisResult:
        return self.forecast.analyze(series, current_price=current_price)


_engine: Optional[ForecastEngine] = None


def get_engine() -> ForecastEngine:
    """Get or create the default engine."""
    global _engine
    if _engine is None:
        _engine = ForecastEngine()
    return _engine


def compute_indicators(series: SeriesInput) -> IndicatorSet:
    return get_engine().compute_indicators(series)


def detect_patterns(series: SeriesInput) -> list[Pattern]:
    return get_engine().detect_patterns(series)


def predict(
    series: SeriesInput,
    events: Optional[Sequence[MarketEvent]] = None,
    horizon_hours: Optional[float] = None,
    reference_price: Optional[float] = None,
) -> Prediction:
    return get_engine().predict(
        series,
        events=events,
        horizon_hours=horizon_hours,
        reference_price=reference_price,
    )


def analyze(series: SeriesInput) -> AnalysisResult:
    return get_engine().analyze(series)
