"""
CONTRACT 2: Indicator Library

Input: PriceSeries
Output: IndicatorSet

Every reading carries an `insufficient_data` flag. When set, the numeric
fields hold the documented neutral default instead of a computed value.
"""

from enum import Enum
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class MomentumStrength(str, Enum):
    STRONG = "STRONG"
    WEAK = "WEAK"


# =============================================================================
# OUTPUT: Indicator Readings
# =============================================================================


class RSIReading(BaseModel):
    """Relative Strength Index."""

    value: float = Field(..., ge=0, le=100)
    signal: SignalType
    insufficient_data: bool = False


class MACDReading(BaseModel):
    """MACD line, signal line and histogram."""

    line: float
    signal_line: float
    histogram: float
    signal: SignalType
    insufficient_data: bool = False


class BollingerReading(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float
    position: float = Field(..., ge=0, le=1, description="Price position within bands (0-1)")
    signal: SignalType
    insufficient_data: bool = False


class MovingAverageReading(BaseModel):
    """SMA or EMA value with price-vs-average signal."""

    period: int = Field(..., ge=1)
    value: float
    signal: SignalType
    insufficient_data: bool = False


class VolumeProfileReading(BaseModel):
    """Current volume against the window average."""

    average: float = Field(..., ge=0)
    current: float = Field(..., ge=0)
    ratio: float = Field(..., ge=0, description="Current/Avg ratio")
    insufficient_data: bool = False


class MomentumReading(BaseModel):
    """Rate of change over the momentum lookback."""

    value: float
    strength: MomentumStrength
    insufficient_data: bool = False


# =============================================================================
# OUTPUT: IndicatorSet (Complete Response)
# =============================================================================


class IndicatorSet(BaseModel):
    """
    All indicator readings for one series.
    Returned by: Indicator Service
    Consumed by: Forecast Scorer, Aggregate Analysis
    """

    price: float = Field(..., gt=0, description="Price the readings were evaluated against")
    bars_used: int = Field(..., ge=0)
    rsi: RSIReading
    macd: MACDReading
    bollinger: BollingerReading
    sma: MovingAverageReading
    ema: MovingAverageReading
    volume_profile: VolumeProfileReading
    momentum: MomentumReading
    volatility: float = Field(..., ge=0, description="RMS of log returns x 100")

    @property
    def insufficient_data(self) -> bool:
        return any(
            reading.insufficient_data
            for reading in (
                self.rsi,
                self.macd,
                self.bollinger,
                self.sma,
                self.ema,
                self.volume_profile,
                self.momentum,
            )
        )

    class Config:
        json_schema_extra = {
            "example": {
                "price": 1.0890,
                "bars_used": 60,
                "rsi": {"value": 62.5, "signal": "NEUTRAL"},
                "macd": {
                    "line": 0.0004,
                    "signal_line": 0.00036,
                    "histogram": 0.00004,
                    "signal": "BUY",
                },
                "bollinger": {
                    "upper": 1.0921,
                    "middle": 1.0874,
                    "lower": 1.0827,
                    "position": 0.67,
                    "signal": "NEUTRAL",
                },
                "sma": {"period": 20, "value": 1.0874, "signal": "BUY"},
                "ema": {"period": 20, "value": 1.0877, "signal": "BUY"},
                "volume_profile": {"average": 1100, "current": 1250, "ratio": 1.14},
                "momentum": {"value": 0.0031, "strength": "WEAK"},
                "volatility": 0.042,
            }
        }
