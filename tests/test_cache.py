"""
Tests for the prediction cache.
"""

from datetime import timedelta

import pytest

from fxforecast.schemas.forecast import ForecastScores
from fxforecast.services.forecast import PredictionCache, build_prediction

from tests.conftest import START


@pytest.fixture
def prediction():
    scores = ForecastScores(sentiment=0.56, technical=0.5, pattern=0.5, final=0.518)
    return build_prediction(scores, base_price=1.1, volatility=0.02, horizon_hours=24)


@pytest.fixture
def cache():
    return PredictionCache(ttl_seconds=180, price_tolerance=0.001)


class TestPredictionCache:
    def test_miss(self, cache):
        assert cache.get("EUR/USD", 1.1, now=START) is None

    def test_hit(self, cache, prediction):
        cache.put("EUR/USD", prediction, 1.1, now=START)
        assert cache.get("EUR/USD", 1.1005, now=START + timedelta(seconds=60)) is prediction

    def test_expires_after_ttl(self, cache, prediction):
        cache.put("EUR/USD", prediction, 1.1, now=START)

        assert cache.get("EUR/USD", 1.1, now=START + timedelta(seconds=181)) is None
        assert len(cache) == 0

    def test_price_move_invalidates(self, cache, prediction):
        cache.put("EUR/USD", prediction, 1.1, now=START)
        assert cache.get("EUR/USD", 1.102, now=START + timedelta(seconds=1)) is None

    def test_pair_key_is_case_insensitive(self, cache, prediction):
        cache.put("eur/usd", prediction, 1.1, now=START)
        assert cache.get("EUR/USD", 1.1, now=START) is prediction

    def test_pairs_are_independent(self, cache, prediction):
        cache.put("EUR/USD", prediction, 1.1, now=START)
        assert cache.get("GBP/USD", 1.1, now=START) is None

    def test_get_or_compute(self, cache, prediction):
        calls = []

        def compute():
            calls.append(1)
            return prediction

        first = cache.get_or_compute("EUR/USD", 1.1, compute, now=START)
        second = cache.get_or_compute(
            "EUR/USD", 1.1, compute, now=START + timedelta(seconds=30)
        )
        third = cache.get_or_compute(
            "EUR/USD", 1.1, compute, now=START + timedelta(seconds=300)
        )

        assert first is second is third
        assert len(calls) == 2

    def test_invalidate(self, cache, prediction):
        cache.put("EUR/USD", prediction, 1.1, now=START)
        cache.put("GBP/USD", prediction, 1.3, now=START)

        cache.invalidate("eur/usd")
        assert len(cache) == 1

        cache.invalidate()
        assert len(cache) == 0

    def test_defaults_from_settings(self, settings, prediction):
        cache = PredictionCache(config=settings)
        cache.put("EUR/USD", prediction, 1.1, now=START)

        assert cache.get("EUR/USD", 1.1, now=START + timedelta(seconds=179)) is prediction
