"""
End-to-end tests through the ForecastEngine facade.
"""

import random

import pytest

import fxforecast
from fxforecast import ForecastEngine, PredictionCache, StaticSentimentSource
from fxforecast.schemas.forecast import (
    EventImpact,
    EventSentiment,
    EventType,
    MarketEvent,
    PredictionDirection,
)
from fxforecast.schemas.indicators import SignalType
from fxforecast.schemas.patterns import PatternName

from tests.conftest import make_bars_from_highs


class TestFlatScenario:
    """60 identical bars: every indicator at its neutral point."""

    def test_indicators(self, settings, flat_bars):
        indicators = ForecastEngine(settings).compute_indicators(flat_bars)

        assert indicators.bollinger.position == 0.5
        assert indicators.rsi.value == 50.0
        assert indicators.momentum.value == 0.0
        assert indicators.volatility == 0.0
        assert not indicators.insufficient_data

    def test_no_patterns(self, settings, flat_bars):
        assert ForecastEngine(settings).detect_patterns(flat_bars) == []

    def test_prediction_leans_on_sentiment(self, settings, flat_bars):
        prediction = ForecastEngine(settings).predict(flat_bars)

        # technical and pattern sit at 0.5, default sentiment is 0.56
        assert prediction.scores.final == pytest.approx(0.518)
        assert prediction.direction == PredictionDirection.UP
        assert prediction.confidence == pytest.approx(0.036)
        assert prediction.predicted_price == 1.2

    def test_analysis_votes_sell_on_sma_tie(self, settings, flat_bars):
        result = ForecastEngine(settings).analyze(flat_bars)

        assert result.signal == SignalType.SELL
        assert result.confidence == 0.5


class TestEngine:
    def test_accepts_price_series(self, settings, rising_series):
        engine = ForecastEngine(settings)

        assert engine.compute_indicators(rising_series).bars_used == 60
        assert engine.predict(rising_series).base_price == rising_series.last_close
        assert engine.analyze(rising_series).signal == SignalType.SELL

    def test_sentiment_source(self, settings, flat_bars):
        bearish = MarketEvent(
            type=EventType.POLITICAL,
            impact=EventImpact.HIGH,
            sentiment=EventSentiment.BEARISH,
            weight=1.0,
        )
        engine = ForecastEngine(settings, sentiment_source=StaticSentimentSource([bearish]))

        assert engine.predict(flat_bars).direction == PredictionDirection.DOWN

    def test_seeded_rng_is_reproducible(self, settings):
        bars = make_bars_from_highs([1.10] * 7 + [1.12] * 7 + [1.101] * 6)

        first = ForecastEngine(settings, rng=random.Random(11)).detect_patterns(bars)
        second = ForecastEngine(settings, rng=random.Random(11)).detect_patterns(bars)

        assert first[0].name == PatternName.HEAD_AND_SHOULDERS
        assert first == second

    def test_cached_prediction_is_stable(self, settings, rising_bars):
        engine = ForecastEngine(settings)
        cache = PredictionCache(config=settings)
        quote = rising_bars[-1].close

        first = cache.get_or_compute("EUR/USD", quote, lambda: engine.predict(rising_bars))
        second = cache.get_or_compute("EUR/USD", quote, lambda: engine.predict(rising_bars))

        assert first is second


class TestModuleFunctions:
    def test_default_engine_is_shared(self):
        assert fxforecast.get_engine() is fxforecast.get_engine()

    def test_module_level_operations(self, rising_bars):
        assert fxforecast.compute_indicators(rising_bars).bars_used == 60
        assert {p.name for p in fxforecast.detect_patterns(rising_bars)} == {
            PatternName.FIBONACCI_RETRACEMENT,
            PatternName.SUPPORT_RESISTANCE_BREAK,
        }
        assert fxforecast.predict(rising_bars, horizon_hours=1).horizon_hours == 1
        assert fxforecast.predict(rising_bars, reference_price=1.3).base_price == 1.3
        assert fxforecast.analyze(rising_bars).signal == SignalType.SELL
