"""
Indicator Library Service Implementation

Calculates all technical indicators from OHLCV data.
Pure Python/NumPy calculations.
"""

import logging
from typing import Optional
import numpy as np

from fxforecast.core.config import Settings, get_settings
from fxforecast.schemas.market import PriceBar, PriceSeries
from fxforecast.schemas.indicators import (
    IndicatorSet,
    RSIReading,
    MACDReading,
    BollingerReading,
    MovingAverageReading,
    VolumeProfileReading,
    MomentumReading,
    MomentumStrength,
    SignalType,
)
from fxforecast.services.base import ValidationError
from fxforecast.services.indicators.interface import IndicatorServiceInterface, SeriesInput
from fxforecast.services.indicators.calculations import (
    OHLCVData,
    sma,
    ema,
    rsi,
    macd,
    momentum,
    bollinger_bands,
    band_position,
    volatility,
    volume_profile,
    get_last_valid,
    signal_from_threshold,
)

logger = logging.getLogger(__name__)


def as_bars(series: SeriesInput) -> list[PriceBar]:
    """Accept a PriceSeries or a plain bar sequence."""
    if isinstance(series, PriceSeries):
        return list(series.bars)
    return list(series)


def _price_vs_average(price: float, average: float) -> SignalType:
    """BUY above the average, SELL below, NEUTRAL when they coincide (EMA reading)."""
    if abs(price - average) <= abs(average) * 1e-12:
        return SignalType.NEUTRAL
    return SignalType.BUY if price > average else SignalType.SELL


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Library Service.

    Calculates technical indicators for forecast scoring and analysis.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, config: Optional[Settings] = None):
        self._settings = config or get_settings()

    @property
    def name(self) -> str:
        return "IndicatorService"

    def execute(self, input_data: SeriesInput) -> IndicatorSet:
        """Calculate indicators over the full series."""
        return self.compute(input_data)

    def compute(
        self,
        series: SeriesInput,
        window: Optional[int] = None,
        current_price: Optional[float] = None,
    ) -> IndicatorSet:
        """Calculate all indicators for a series."""
        bars = as_bars(series)
        if not bars:
            raise ValidationError(self.name, "Cannot compute indicators for an empty series")
        if current_price is not None and current_price <= 0:
            raise ValidationError(
                self.name,
                "Current price must be positive",
                {"current_price": current_price},
            )

        data = OHLCVData.from_bars(bars)
        if window is not None:
            data = data.tail(window)

        return self.compute_from_arrays(data, current_price)

    def compute_from_arrays(
        self, data: OHLCVData, current_price: Optional[float] = None
    ) -> IndicatorSet:
        """Calculate indicators from pre-built arrays (must be non-empty)."""
        closes = data.closes
        price = float(current_price) if current_price is not None else float(closes[-1])

        result = IndicatorSet(
            price=price,
            bars_used=len(closes),
            rsi=self._calculate_rsi(closes),
            macd=self._calculate_macd(closes),
            bollinger=self._calculate_bollinger(closes, price),
            sma=self._calculate_sma(closes, price),
            ema=self._calculate_ema(closes, price),
            volume_profile=self._calculate_volume(data.volumes),
            momentum=self._calculate_momentum(closes),
            volatility=volatility(closes, self._settings.volatility_window),
        )

        if result.insufficient_data:
            logger.debug(f"Indicators computed on {len(closes)} bars with partial history")

        return result

    def _calculate_rsi(self, closes: np.ndarray) -> RSIReading:
        s = self._settings
        value = get_last_valid(rsi(closes, s.rsi_period))
        if value is None:
            return RSIReading(value=50.0, signal=SignalType.NEUTRAL, insufficient_data=True)

        signal = signal_from_threshold(value, s.rsi_overbought, s.rsi_oversold)
        return RSIReading(value=value, signal=SignalType(signal))

    def _calculate_macd(self, closes: np.ndarray) -> MACDReading:
        if len(closes) < 2:
            return MACDReading(
                line=0.0,
                signal_line=0.0,
                histogram=0.0,
                signal=SignalType.NEUTRAL,
                insufficient_data=True,
            )

        s = self._settings
        macd_line, signal_line, histogram = macd(
            closes,
            s.macd_fast,
            s.macd_slow,
            s.macd_signal_period,
            signal_mode=s.macd_signal_mode,
            signal_scale=s.macd_signal_scale,
        )
        line = float(macd_line[-1])

        if line > 0:
            signal = SignalType.BUY
        elif line < 0:
            signal = SignalType.SELL
        else:
            signal = SignalType.NEUTRAL

        return MACDReading(
            line=line,
            signal_line=float(signal_line[-1]),
            histogram=float(histogram[-1]),
            signal=signal,
        )

    def _calculate_bollinger(self, closes: np.ndarray, price: float) -> BollingerReading:
        s = self._settings
        if len(closes) < s.bollinger_period:
            return BollingerReading(
                upper=price,
                middle=price,
                lower=price,
                position=0.5,
                signal=SignalType.NEUTRAL,
                insufficient_data=True,
            )

        upper, middle, lower, _ = bollinger_bands(closes, s.bollinger_period, s.bollinger_std_dev)
        upper_val = float(upper[-1])
        middle_val = float(middle[-1])
        lower_val = float(lower[-1])

        position = band_position(price, middle_val, upper_val, lower_val)
        signal = signal_from_threshold(position, s.bollinger_upper_zone, s.bollinger_lower_zone)

        return BollingerReading(
            upper=upper_val,
            middle=middle_val,
            lower=lower_val,
            position=position,
            signal=SignalType(signal),
        )

    def _calculate_sma(self, closes: np.ndarray, price: float) -> MovingAverageReading:
        period = self._settings.sma_period
        value = get_last_valid(sma(closes, period))
        if value is None:
            return MovingAverageReading(
                period=period,
                value=price,
                signal=SignalType.NEUTRAL,
                insufficient_data=True,
            )

        signal = SignalType.BUY if price > value else SignalType.SELL
        return MovingAverageReading(period=period, value=value, signal=signal)

    def _calculate_ema(self, closes: np.ndarray, price: float) -> MovingAverageReading:
        period = self._settings.ema_period
        value = float(ema(closes, period)[-1])
        return MovingAverageReading(
            period=period, value=value, signal=_price_vs_average(price, value)
        )

    def _calculate_volume(self, volumes: np.ndarray) -> VolumeProfileReading:
        window = self._settings.volume_window
        average, current, ratio = volume_profile(volumes, window)
        return VolumeProfileReading(
            average=average,
            current=current,
            ratio=ratio,
            insufficient_data=len(volumes) < window,
        )

    def _calculate_momentum(self, closes: np.ndarray) -> MomentumReading:
        s = self._settings
        value = get_last_valid(momentum(closes, s.momentum_lookback))
        if value is None:
            return MomentumReading(
                value=0.0, strength=MomentumStrength.WEAK, insufficient_data=True
            )

        strength = (
            MomentumStrength.STRONG
            if abs(value) > s.momentum_strong_threshold
            else MomentumStrength.WEAK
        )
        return MomentumReading(value=value, strength=strength)


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
