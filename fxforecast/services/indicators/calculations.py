"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic: the same input always yields bit-identical output.

Array functions return NaN where a value is undefined (not enough history).
Degenerate inputs (flat prices, zero average loss) are special-cased so no
NaN or infinity escapes for a defined position.
"""

import numpy as np
from typing import Optional, Sequence
from dataclasses import dataclass

from fxforecast.schemas.market import PriceBar

# Relative width below which a band is treated as zero-width.
_FLAT_EPSILON = 1e-12


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    def __len__(self) -> int:
        return len(self.closes)

    @classmethod
    def from_bars(cls, bars: Sequence[PriceBar]) -> "OHLCVData":
        """Convert a bar list to numpy arrays."""
        return cls(
            timestamps=np.array([b.timestamp for b in bars], dtype=object),
            opens=np.array([b.open for b in bars], dtype=float),
            highs=np.array([b.high for b in bars], dtype=float),
            lows=np.array([b.low for b in bars], dtype=float),
            closes=np.array([b.close for b in bars], dtype=float),
            volumes=np.array([b.volume for b in bars], dtype=float),
        )

    def tail(self, n: int) -> "OHLCVData":
        """Last n bars (all of them when n >= len)."""
        start = max(0, len(self) - n)
        return OHLCVData(
            timestamps=self.timestamps[start:],
            opens=self.opens[start:],
            highs=self.highs[start:],
            lows=self.lows[start:],
            closes=self.closes[start:],
            volumes=self.volumes[start:],
        )


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    if len(data) < period:
        return np.full(len(data), np.nan)

    result = np.full(len(data), np.nan)
    for i in range(period - 1, len(data)):
        result[i] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the first price and defined from the first bar on
    (no warm-up discard), so EMA of a single element is that element.
    """
    if period <= 0:
        raise ValueError("period must be positive")

    result = np.full(len(data), np.nan)
    if len(data) == 0:
        return result

    multiplier = 2 / (period + 1)
    result[0] = data[0]
    for i in range(1, len(data)):
        result[i] = (data[i] * multiplier) + (result[i - 1] * (1 - multiplier))

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index.

    Plain average of the up and down moves over the trailing `period`
    deltas (not Wilder smoothing). An all-gain window reads 100, a window
    with no movement at all reads 50.
    """
    result = np.full(len(closes), np.nan)
    if len(closes) < period + 1:
        return result

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    for i in range(period, len(closes)):
        avg_gain = np.mean(gains[i - period : i])
        avg_loss = np.mean(losses[i - period : i])

        if avg_loss == 0:
            result[i] = 100.0 if avg_gain > 0 else 50.0
        else:
            rs = avg_gain / avg_loss
            result[i] = 100 - (100 / (1 + rs))

    return result


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    signal_mode: str = "scaled",
    signal_scale: float = 0.9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Signal modes:
        scaled: signal line = signal_scale * MACD line (dashboard behavior)
        ema:    signal line = EMA(signal_period) of the MACD line

    Returns: (macd_line, signal_line, histogram)
    """
    macd_line = ema(closes, fast_period) - ema(closes, slow_period)
    # Rounding residue on flat input is not a trend
    macd_line[np.abs(macd_line) <= np.abs(closes) * _FLAT_EPSILON] = 0.0

    if signal_mode == "scaled":
        signal_line = macd_line * signal_scale
    elif signal_mode == "ema":
        signal_line = ema(macd_line, signal_period)
    else:
        raise ValueError(f"Unknown MACD signal mode: {signal_mode}")

    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


def momentum(closes: np.ndarray, lookback: int = 10) -> np.ndarray:
    """Rate of change: close / close `lookback - 1` bars earlier - 1."""
    result = np.full(len(closes), np.nan)
    if lookback < 2 or len(closes) < lookback:
        return result

    result[lookback - 1 :] = closes[lookback - 1 :] / closes[: len(closes) - lookback + 1] - 1
    return result


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands (population standard deviation).

    Returns: (upper, middle, lower, percent_b)
    """
    middle = sma(closes, period)

    std = np.full(len(closes), np.nan)
    for i in range(period - 1, len(closes)):
        std[i] = np.std(closes[i - period + 1 : i + 1])

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    percent_b = np.full(len(closes), np.nan)
    for i in range(period - 1, len(closes)):
        percent_b[i] = band_position(closes[i], middle[i], upper[i], lower[i])

    return upper, middle, lower, percent_b


def band_position(price: float, middle: float, upper: float, lower: float) -> float:
    """
    Position of `price` within the bands, clamped to [0, 1].

    Written relative to the middle band so a price equal to the SMA reads
    exactly 0.5. Zero-width bands read 0.5.
    """
    width = upper - lower
    if not width > abs(middle) * _FLAT_EPSILON:
        return 0.5
    position = 0.5 + (price - middle) / width
    return float(min(1.0, max(0.0, position)))


def volatility(closes: np.ndarray, window: int = 20) -> float:
    """
    Root-mean-square of log returns over the last `window` closes, x 100.

    Returns are not de-meaned and not annualized.
    """
    recent = closes[-window:]
    if len(recent) < 2:
        return 0.0

    returns = np.diff(np.log(recent))
    return float(np.sqrt(np.mean(returns**2)) * 100)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_profile(volumes: np.ndarray, window: int = 20) -> tuple[float, float, float]:
    """
    Current volume against the window average.

    Returns: (average, current, ratio)
    """
    recent = volumes[-window:]
    if len(recent) == 0:
        return 0.0, 0.0, 1.0

    average = float(np.mean(recent))
    current = float(recent[-1])
    ratio = current / average if average > 0 else 1.0
    return average, current, ratio


# =============================================================================
# SUPPORT/RESISTANCE
# =============================================================================


def fibonacci_levels(high: float, low: float) -> dict:
    """Retracement levels measured up from the range low."""
    diff = high - low
    return {
        "high": high,
        "low": low,
        "level_236": low + diff * 0.236,
        "level_382": low + diff * 0.382,
        "level_618": low + diff * 0.618,
    }


def range_extremes(
    highs: np.ndarray, lows: np.ndarray, lookback: int
) -> tuple[float, float]:
    """
    Resistance (max high) and support (min low) over the last `lookback` bars.

    Returns: (support, resistance)
    """
    return float(np.min(lows[-lookback:])), float(np.max(highs[-lookback:]))


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_last_valid(arr: np.ndarray) -> Optional[float]:
    """Get last non-NaN value from array."""
    valid = arr[~np.isnan(arr)]
    return float(valid[-1]) if len(valid) > 0 else None


def signal_from_threshold(
    value: float, sell_above: float, buy_below: float
) -> str:
    """Oscillator zone signal: SELL above the upper bound, BUY below the lower."""
    if value > sell_above:
        return "SELL"
    if value < buy_below:
        return "BUY"
    return "NEUTRAL"
