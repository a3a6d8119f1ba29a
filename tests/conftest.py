"""
Shared fixtures and bar builders.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

import pytest

from fxforecast.core.config import Settings
from fxforecast.schemas.market import PriceBar, PriceSeries, Timeframe

START = datetime(2024, 2, 5, 0, 0, tzinfo=timezone.utc)


def make_bars(
    closes: Sequence[float],
    volume: float = 1000.0,
    spread: float = 0.0,
    step: timedelta = timedelta(hours=1),
) -> list[PriceBar]:
    """Bars whose open is the previous close and whose range spans open/close +- spread."""
    bars = []
    prev = closes[0]
    for i, close in enumerate(closes):
        open_ = prev
        bars.append(
            PriceBar(
                timestamp=START + i * step,
                open=open_,
                high=max(open_, close) + spread,
                low=min(open_, close) - spread,
                close=close,
                volume=volume,
            )
        )
        prev = close
    return bars


def make_bars_from_highs(
    highs: Sequence[float], depth: float = 0.001, lows: Optional[Sequence[float]] = None
) -> list[PriceBar]:
    """Bars with the given highs; open/close sit at the middle of the bar."""
    bars = []
    for i, high in enumerate(highs):
        low = lows[i] if lows is not None else high - depth
        mid = (high + low) / 2
        bars.append(
            PriceBar(
                timestamp=START + timedelta(hours=i),
                open=mid,
                high=high,
                low=low,
                close=mid,
                volume=1000.0,
            )
        )
    return bars


def rising_closes(n: int = 60, start: float = 1.1000, step: float = 0.0005) -> list[float]:
    return [start + i * step for i in range(n)]


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def rising_bars() -> list[PriceBar]:
    """60 bars, each close 0.0005 above the last, starting at 1.1000."""
    return make_bars(rising_closes())


@pytest.fixture
def flat_bars() -> list[PriceBar]:
    """60 bars with open=high=low=close=1.2000 and volume 1000."""
    return make_bars([1.2000] * 60, volume=1000.0)


@pytest.fixture
def zigzag_bars() -> list[PriceBar]:
    """60 bars oscillating around 1.1000."""
    closes = [1.1000 + (0.0010 if i % 2 else -0.0010) + 0.00002 * (i % 7) for i in range(60)]
    return make_bars(closes, spread=0.0002)


@pytest.fixture
def rising_series(rising_bars) -> PriceSeries:
    return PriceSeries(pair="EUR/USD", timeframe=Timeframe.H1, bars=rising_bars)
