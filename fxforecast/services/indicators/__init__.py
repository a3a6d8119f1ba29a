"""
Indicator Library Service

CONTRACT:
    Input:  PriceSeries (OHLCV bars)
    Output: IndicatorSet

RESPONSIBILITIES:
    - Calculate RSI, MACD, Bollinger Bands, SMA/EMA
    - Calculate volume profile, momentum and volatility
    - Fall back to flagged neutral readings on short history

Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from fxforecast.services.indicators.interface import IndicatorServiceInterface, SeriesInput
from fxforecast.services.indicators.service import (
    IndicatorService,
    get_indicator_service,
    as_bars,
)

__all__ = [
    "IndicatorServiceInterface",
    "SeriesInput",
    "IndicatorService",
    "get_indicator_service",
    "as_bars",
]
