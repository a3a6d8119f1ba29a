"""
Pattern Detector Service Interface

Defines the contract for the chart pattern layer.
"""

from abc import abstractmethod
from typing import Optional

from fxforecast.services.base import BaseService
from fxforecast.services.indicators.interface import SeriesInput
from fxforecast.schemas.patterns import Pattern


class PatternServiceInterface(BaseService[SeriesInput, list[Pattern]]):
    """
    Pattern Detector Service Contract.

    INPUT: PriceSeries (or any sequence of PriceBar)

    OUTPUT: list[Pattern]
        - Zero or more formations, each with direction and confidence
        - Detectors below their minimum history contribute nothing

    MINIMUM HISTORY (bars):
        Head and Shoulders      20
        Double Top / Bottom     15
        Fibonacci Retracement   50
        Support/Resistance      30

    RAISES:
        ValidationError on an empty series or a non-positive current_price
    """

    @property
    def name(self) -> str:
        return "PatternService"

    @abstractmethod
    def execute(self, input_data: SeriesInput) -> list[Pattern]:
        """Detect patterns in the series."""
        pass

    @abstractmethod
    def detect(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> list[Pattern]:
        """
        Detect all enabled patterns.

        Args:
            series: OHLCV bars, oldest first
            current_price: Live quote used by the price-location detectors
                (defaults to the last close)
        """
        pass
