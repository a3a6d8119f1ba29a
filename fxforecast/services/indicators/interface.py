"""
Indicator Library Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence, Union

from fxforecast.services.base import BaseService
from fxforecast.schemas.market import PriceBar, PriceSeries
from fxforecast.schemas.indicators import IndicatorSet

SeriesInput = Union[PriceSeries, Sequence[PriceBar]]


class IndicatorServiceInterface(BaseService[SeriesInput, IndicatorSet]):
    """
    Indicator Library Service Contract.

    INPUT: PriceSeries (or any sequence of PriceBar)
        - Chronologically ordered OHLCV bars

    OUTPUT: IndicatorSet
        - RSI, MACD, Bollinger, SMA, EMA, volume profile, momentum, volatility
        - Each reading flags insufficient history instead of raising
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    def execute(self, input_data: SeriesInput) -> IndicatorSet:
        """Calculate indicators over the full series."""
        pass

    @abstractmethod
    def compute(
        self,
        series: SeriesInput,
        window: Optional[int] = None,
        current_price: Optional[float] = None,
    ) -> IndicatorSet:
        """
        Calculate indicators for a series.

        Args:
            series: OHLCV bars, oldest first
            window: Restrict computation to the last `window` bars
            current_price: Live quote to evaluate price-vs-band signals against
                (defaults to the last close)

        Returns:
            Complete indicator readings

        Raises:
            ValidationError: If the series is empty
        """
        pass
