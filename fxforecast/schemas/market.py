"""
CONTRACT 1: Price Input

Input consumed by every engine operation: a chronologically ordered
sequence of OHLCV bars for one currency pair.

The engine never fetches or mutates this data; sourcing it (live feeds,
simulated feeds, CSV) is the caller's concern.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1M"
    M5 = "5M"
    M15 = "15M"
    H1 = "1H"
    H4 = "4H"
    D1 = "1D"


# =============================================================================
# PriceBar / PriceSeries
# =============================================================================


class PriceBar(BaseModel):
    """Single OHLCV observation."""

    timestamp: datetime
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: float = Field(default=0.0, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_range(self) -> "PriceBar":
        if self.high < self.low:
            raise ValueError(f"high {self.high} is below low {self.low}")
        for label, value in (("open", self.open), ("close", self.close)):
            if not self.low <= value <= self.high:
                raise ValueError(
                    f"{label} {value} outside bar range [{self.low}, {self.high}]"
                )
        return self


class PriceSeries(BaseModel):
    """
    Ordered bars for one pair.

    Insertion order is chronological order. Duplicate timestamps are
    not checked.
    """

    pair: str = Field(default="EUR/USD", description="Currency pair, e.g. 'EUR/USD'")
    timeframe: Timeframe = Timeframe.H1
    bars: list[PriceBar] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def closes(self) -> list[float]:
        return [b.close for b in self.bars]

    @property
    def last_close(self) -> Optional[float]:
        return self.bars[-1].close if self.bars else None

    class Config:
        json_schema_extra = {
            "example": {
                "pair": "EUR/USD",
                "timeframe": "1H",
                "bars": [
                    {
                        "timestamp": "2024-02-05T10:00:00Z",
                        "open": 1.0885,
                        "high": 1.0897,
                        "low": 1.0879,
                        "close": 1.0890,
                        "volume": 1250,
                    }
                ],
            }
        }
