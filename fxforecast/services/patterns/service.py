"""
Pattern Detector Service Implementation

Runs every enabled detector over a price series and collects the
formations that were found.
"""

import logging
import random
from typing import Optional

from fxforecast.core.config import Settings, get_settings
from fxforecast.schemas.patterns import Pattern
from fxforecast.services.base import ValidationError
from fxforecast.services.indicators.calculations import OHLCVData
from fxforecast.services.indicators.interface import SeriesInput
from fxforecast.services.indicators.service import as_bars
from fxforecast.services.patterns.interface import PatternServiceInterface
from fxforecast.services.patterns.detectors import (
    DetectionResult,
    detect_head_and_shoulders,
    detect_double_top_bottom,
    detect_fibonacci_retracement,
    detect_support_resistance,
)

logger = logging.getLogger(__name__)


class PatternService(PatternServiceInterface):
    """
    Pattern Detector Service.

    Usage:
        service = PatternService()
        patterns = service.detect(series)

        # Reproducible jittered confidence
        service = PatternService(rng=random.Random(42))
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self._settings = config or get_settings()
        self._rng = rng

    @property
    def name(self) -> str:
        return "PatternService"

    def execute(self, input_data: SeriesInput) -> list[Pattern]:
        return self.detect(input_data)

    def detect(
        self, series: SeriesInput, current_price: Optional[float] = None
    ) -> list[Pattern]:
        bars = as_bars(series)
        if not bars:
            raise ValidationError(self.name, "Cannot detect patterns in an empty series")
        if current_price is not None and current_price <= 0:
            raise ValidationError(
                self.name,
                "Current price must be positive",
                {"current_price": current_price},
            )
        return self.detect_from_arrays(OHLCVData.from_bars(bars), current_price)

    def detect_from_arrays(
        self, data: OHLCVData, current_price: Optional[float] = None
    ) -> list[Pattern]:
        """Run detectors over pre-built arrays."""
        s = self._settings
        highs, lows, closes = data.highs, data.lows, data.closes

        results: list[DetectionResult] = [
            detect_head_and_shoulders(
                highs,
                lookback=s.head_shoulders_bars,
                tolerance=s.head_shoulders_tolerance,
                rng=self._rng,
            ),
            detect_double_top_bottom(
                highs,
                lows,
                lookback=s.double_pattern_bars,
                tolerance=s.double_pattern_tolerance,
                rng=self._rng,
            ),
            detect_fibonacci_retracement(
                highs,
                lows,
                closes,
                lookback=s.fibonacci_bars,
                current_price=current_price,
            ),
        ]

        if s.detect_support_resistance:
            results.append(
                detect_support_resistance(
                    highs,
                    lows,
                    closes,
                    lookback=s.support_resistance_bars,
                    tolerance=s.support_resistance_tolerance,
                    current_price=current_price,
                )
            )

        patterns = [r.to_pattern() for r in results if r.detected]
        if patterns:
            logger.debug(
                f"Detected {len(patterns)} pattern(s) on {len(closes)} bars: "
                f"{', '.join(p.name.value for p in patterns)}"
            )
        return patterns


# Singleton instance
_service_instance: Optional[PatternService] = None


def get_pattern_service() -> PatternService:
    """Get or create pattern service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = PatternService()
    return _service_instance
