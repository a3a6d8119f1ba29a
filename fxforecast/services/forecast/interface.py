"""
Forecast Scorer Service Interface

Defines the contract for the prediction layer.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from fxforecast.services.base import BaseService
from fxforecast.services.indicators.interface import SeriesInput
from fxforecast.schemas.forecast import AnalysisResult, MarketEvent, Prediction


@dataclass
class ForecastRequest:
    """Input for a forecast."""

    series: SeriesInput
    events: Optional[Sequence[MarketEvent]] = None
    horizon_hours: Optional[float] = None
    reference_price: Optional[float] = None


class ForecastServiceInterface(BaseService[ForecastRequest, Prediction]):
    """
    Forecast Scorer Service Contract.

    INPUT: ForecastRequest
        - series: OHLCV bars, oldest first
        - events: Market events for the sentiment proxy (default: configured source)
        - horizon_hours: How far ahead to project
        - reference_price: Optional calibration anchor for the projected price

    OUTPUT: Prediction
        - direction UP/DOWN, predicted price, confidence, blended score

    SCORING:
        final = 0.3 * sentiment + 0.4 * technical + 0.3 * pattern
        UP if final > 0.5, otherwise DOWN
    """

    @property
    def name(self) -> str:
        return "ForecastService"

    @abstractmethod
    def execute(self, input_data: ForecastRequest) -> Prediction:
        """Produce a prediction for the request."""
        pass

    @abstractmethod
    def predict(
        self,
        series: SeriesInput,
        events: Optional[Sequence[MarketEvent]] = None,
        horizon_hours: Optional[float] = None,
        reference_price: Optional[float] = None,
    ) -> Prediction:
        """Blend sentiment, technical and pattern scores into a prediction."""
        pass

    @abstractmethod
    def analyze(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> AnalysisResult:
        """Vote indicator and pattern signals into a BUY/SELL/NEUTRAL summary."""
        pass
