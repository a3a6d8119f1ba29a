"""
Forecast Scorer Service Implementation

Orchestrates the scoring pipeline:
    Price Series -> Indicators -> Patterns -> Sentiment -> Blended Prediction

Each call is an independent pure computation over its inputs.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from fxforecast.core.config import Settings, get_settings
from fxforecast.schemas.forecast import (
    AnalysisResult,
    ForecastScores,
    MarketEvent,
    Prediction,
)
from fxforecast.schemas.indicators import IndicatorSet, SignalType
from fxforecast.schemas.patterns import Pattern, PatternDirection
from fxforecast.services.base import ValidationError
from fxforecast.services.indicators.calculations import OHLCVData, volatility
from fxforecast.services.indicators.interface import SeriesInput
from fxforecast.services.indicators.service import IndicatorService, as_bars
from fxforecast.services.patterns.service import PatternService
from fxforecast.services.forecast.interface import ForecastRequest, ForecastServiceInterface
from fxforecast.services.forecast.sentiment import (
    SentimentSource,
    StaticSentimentSource,
    sentiment_score,
)
from fxforecast.services.forecast.scoring import (
    technical_score,
    pattern_score,
    blend_scores,
    build_prediction,
)

logger = logging.getLogger(__name__)


class ForecastService(ForecastServiceInterface):
    """
    Forecast Scorer Service.

    Combines the sentiment proxy, the technical score and the pattern
    score into one directional prediction. Short history degrades to a
    flagged zero-confidence prediction rather than an error.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        indicator_service: Optional[IndicatorService] = None,
        pattern_service: Optional[PatternService] = None,
        sentiment_source: Optional[SentimentSource] = None,
    ):
        self._settings = config or get_settings()
        self._indicators = indicator_service or IndicatorService(self._settings)
        self._patterns = pattern_service or PatternService(self._settings)
        self._sentiment = sentiment_source or StaticSentimentSource()

    @property
    def name(self) -> str:
        return "ForecastService"

    @property
    def weights(self) -> tuple[float, float, float]:
        s = self._settings
        return (s.sentiment_weight, s.technical_weight, s.pattern_weight)

    def execute(self, input_data: ForecastRequest) -> Prediction:
        return self.predict(
            input_data.series,
            events=input_data.events,
            horizon_hours=input_data.horizon_hours,
            reference_price=input_data.reference_price,
        )

    def _load(self, series: SeriesInput, action: str) -> OHLCVData:
        bars = as_bars(series)
        if not bars:
            raise ValidationError(self.name, f"Cannot {action} an empty series")
        return OHLCVData.from_bars(bars)

    def predict(
        self,
        series: SeriesInput,
        events: Optional[Sequence[MarketEvent]] = None,
        horizon_hours: Optional[float] = None,
        reference_price: Optional[float] = None,
    ) -> Prediction:
        """Generate a prediction `horizon_hours` ahead."""
        s = self._settings
        data = self._load(series, "forecast")

        horizon = s.default_horizon_hours if horizon_hours is None else horizon_hours
        if horizon < 0:
            raise ValidationError(self.name, "Horizon must not be negative", {"horizon_hours": horizon})
        if reference_price is not None and reference_price <= 0:
            raise ValidationError(
                self.name,
                "Reference price must be positive",
                {"reference_price": reference_price},
            )

        base_price = float(data.closes[-1]) if reference_price is None else float(reference_price)
        event_list = self._sentiment.get_events() if events is None else list(events)
        sentiment = sentiment_score(event_list)

        if len(data) < s.min_forecast_bars:
            logger.debug(
                f"Only {len(data)} bars (need {s.min_forecast_bars}); returning neutral forecast"
            )
            scores = ForecastScores(sentiment=sentiment, technical=0.5, pattern=0.5, final=0.5)
            return build_prediction(scores, base_price, 0.0, horizon, insufficient_data=True)

        indicators = self._indicators.compute_from_arrays(data.tail(s.feature_window))
        patterns = self._patterns.detect_from_arrays(data)

        technical = technical_score(
            indicators,
            overbought=s.rsi_overbought,
            oversold=s.rsi_oversold,
            upper_zone=s.bollinger_upper_zone,
            lower_zone=s.bollinger_lower_zone,
        )
        pattern = pattern_score(patterns, directional=s.directional_pattern_score)
        final = blend_scores(sentiment, technical, pattern, self.weights)

        scores = ForecastScores(
            sentiment=sentiment,
            technical=technical,
            pattern=pattern,
            final=final,
        )
        vol = volatility(data.closes, s.volatility_window)
        prediction = build_prediction(scores, base_price, vol, horizon, patterns=patterns)

        logger.info(
            f"Forecast {prediction.direction.value} {base_price:.5f} -> "
            f"{prediction.predicted_price:.5f} over {horizon}h "
            f"(score {final:.3f}, confidence {prediction.confidence:.2f})"
        )
        return prediction

    def analyze(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> AnalysisResult:
        """Vote-based BUY/SELL/NEUTRAL analysis."""
        s = self._settings
        data = self._load(series, "analyze")
        if current_price is not None and current_price <= 0:
            raise ValidationError(
                self.name,
                "Current price must be positive",
                {"current_price": current_price},
            )

        indicators = self._indicators.compute_from_arrays(data, current_price)
        now = datetime.now(timezone.utc)

        if len(data) < s.min_analysis_bars:
            logger.debug(f"Only {len(data)} bars; returning default analysis")
            return AnalysisResult(
                signal=SignalType.NEUTRAL,
                confidence=0.5,
                indicators=indicators,
                patterns=[],
                insufficient_data=True,
                generated_at=now,
            )

        patterns = self._patterns.detect_from_arrays(data, current_price)

        return AnalysisResult(
            signal=self._vote(indicators, patterns),
            confidence=self._analysis_confidence(indicators, patterns),
            indicators=indicators,
            patterns=patterns,
            generated_at=now,
        )

    @staticmethod
    def _vote(indicators: IndicatorSet, patterns: list[Pattern]) -> SignalType:
        bullish = 0
        bearish = 0

        for signal in (
            indicators.rsi.signal,
            indicators.macd.signal,
            indicators.bollinger.signal,
            indicators.sma.signal,
        ):
            if signal == SignalType.BUY:
                bullish += 1
            elif signal == SignalType.SELL:
                bearish += 1

        for pattern in patterns:
            if pattern.direction == PatternDirection.BULLISH:
                bullish += 1
            else:
                bearish += 1

        if bullish > bearish:
            return SignalType.BUY
        if bearish > bullish:
            return SignalType.SELL
        return SignalType.NEUTRAL

    def _analysis_confidence(
        self, indicators: IndicatorSet, patterns: list[Pattern]
    ) -> float:
        s = self._settings
        total = 4 + len(patterns)
        strong = 0

        rsi_value = indicators.rsi.value
        if rsi_value > s.rsi_overbought or rsi_value < s.rsi_oversold:
            strong += 1
        if abs(indicators.macd.line) > s.macd_strong_threshold:
            strong += 1
        position = indicators.bollinger.position
        if position > s.bollinger_upper_zone or position < s.bollinger_lower_zone:
            strong += 1
        strong += sum(1 for p in patterns if p.confidence > s.strong_pattern_confidence)

        return min(s.max_analysis_confidence, 0.5 + (strong / total) * 0.4)


# Singleton instance
_service_instance: Optional[ForecastService] = None


def get_forecast_service() -> ForecastService:
    """Get or create forecast service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ForecastService()
    return _service_instance
