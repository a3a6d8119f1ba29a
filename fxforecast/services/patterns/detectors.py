"""
Pattern Detection Algorithms

Detects chart formations in FX price data.

Confidence is derived from how tightly a formation meets its matching
rule. Passing a `random.Random` switches to the jittered confidence the
dashboard used (base + uniform noise), reproducible when seeded.
"""

import random
import numpy as np
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

from fxforecast.schemas.patterns import Pattern, PatternName, PatternDirection
from fxforecast.services.indicators.calculations import fibonacci_levels, range_extremes


@dataclass
class DetectionResult:
    """Result of a single detector run."""
    detected: bool
    pattern_type: str
    signal: str  # BULLISH, BEARISH, NEUTRAL
    confidence: float  # 0-1
    details: Dict[str, Any] = field(default_factory=dict)
    timeframe: str = "1H"

    def to_pattern(self) -> Pattern:
        return Pattern(
            name=PatternName(self.pattern_type),
            confidence=self.confidence,
            direction=PatternDirection(self.signal),
            timeframe=self.timeframe,
            details=self.details,
        )


def _not_detected(pattern_type: str, **details) -> DetectionResult:
    return DetectionResult(
        detected=False,
        pattern_type=pattern_type,
        signal="NEUTRAL",
        confidence=0.0,
        details=details,
    )


def _confidence(
    base: float, span: float, tightness: float, rng: Optional[random.Random]
) -> float:
    """base + span scaled by tightness (or by a random draw when rng is given)."""
    if rng is not None:
        return base + rng.random() * span
    return base + span * min(1.0, max(0.0, tightness))


def detect_head_and_shoulders(
    highs: np.ndarray,
    lookback: int = 20,
    tolerance: float = 0.005,
    rng: Optional[random.Random] = None,
) -> DetectionResult:
    """
    Detect a head-and-shoulders top.

    The last `lookback` highs are cut into three windows separated by a
    one-bar gap ([0:6], [7:13], [14:20] for 20 bars). The middle peak must
    exceed both shoulders and the shoulders must match within `tolerance`
    of the left shoulder.
    """
    pattern_type = PatternName.HEAD_AND_SHOULDERS.value
    if lookback < 5 or len(highs) < lookback:
        return _not_detected(pattern_type, error="Insufficient data")

    recent = highs[-lookback:]
    seg = (lookback - 2) // 3

    left = float(np.max(recent[0:seg]))
    head = float(np.max(recent[seg + 1 : 2 * seg + 1]))
    right = float(np.max(recent[2 * seg + 2 : 3 * seg + 2]))

    shoulder_gap = abs(left - right)
    allowed_gap = left * tolerance
    is_valid = head > left and head > right and shoulder_gap < allowed_gap

    details = {
        "left_shoulder": left,
        "head": head,
        "right_shoulder": right,
        "shoulder_gap_percent": round(shoulder_gap / left * 100, 4),
    }

    if not is_valid:
        return _not_detected(pattern_type, **details)

    return DetectionResult(
        detected=True,
        pattern_type=pattern_type,
        signal="BEARISH",
        confidence=_confidence(0.75, 0.2, 1 - shoulder_gap / allowed_gap, rng),
        details=details,
        timeframe="4H",
    )


def detect_double_top_bottom(
    highs: np.ndarray,
    lows: np.ndarray,
    lookback: int = 15,
    tolerance: float = 0.002,
    rng: Optional[random.Random] = None,
) -> DetectionResult:
    """
    Detect a double top or a double bottom.

    The last `lookback` bars are split into two halves around a one-bar
    gap ([0:7] and [8:15] for 15 bars).
    Double top: the two highest highs match within `tolerance`.
    Double bottom: the two lowest lows match within `tolerance`.
    A range that satisfies both is flat and yields nothing.
    """
    if lookback < 3 or len(highs) < lookback:
        return _not_detected(PatternName.DOUBLE_TOP.value, error="Insufficient data")

    recent_highs = highs[-lookback:]
    recent_lows = lows[-lookback:]
    half = (lookback - 1) // 2

    first_peak = float(np.max(recent_highs[0:half]))
    second_peak = float(np.max(recent_highs[half + 1 : 2 * half + 1]))
    first_trough = float(np.min(recent_lows[0:half]))
    second_trough = float(np.min(recent_lows[half + 1 : 2 * half + 1]))

    peak_gap = abs(first_peak - second_peak)
    trough_gap = abs(first_trough - second_trough)
    peak_allowed = first_peak * tolerance
    trough_allowed = first_trough * tolerance

    is_top = peak_gap < peak_allowed
    is_bottom = trough_gap < trough_allowed

    details = {
        "first_peak": first_peak,
        "second_peak": second_peak,
        "first_trough": first_trough,
        "second_trough": second_trough,
    }

    if is_top and is_bottom:
        return _not_detected(PatternName.DOUBLE_TOP.value, reason="flat range", **details)

    if is_top:
        return DetectionResult(
            detected=True,
            pattern_type=PatternName.DOUBLE_TOP.value,
            signal="BEARISH",
            confidence=_confidence(0.7, 0.25, 1 - peak_gap / peak_allowed, rng),
            details=details,
            timeframe="1H",
        )

    if is_bottom:
        return DetectionResult(
            detected=True,
            pattern_type=PatternName.DOUBLE_BOTTOM.value,
            signal="BULLISH",
            confidence=_confidence(0.7, 0.25, 1 - trough_gap / trough_allowed, rng),
            details=details,
            timeframe="1H",
        )

    return _not_detected(PatternName.DOUBLE_TOP.value, **details)


def detect_fibonacci_retracement(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    lookback: int = 50,
    current_price: Optional[float] = None,
) -> DetectionResult:
    """
    Detect price sitting in a Fibonacci retracement zone.

    Between the 23.6% and 38.2% levels reads bullish, above 61.8% bearish,
    anywhere else nothing.
    """
    pattern_type = PatternName.FIBONACCI_RETRACEMENT.value
    if len(closes) < lookback:
        return _not_detected(pattern_type, error="Insufficient data")

    support, resistance = range_extremes(highs, lows, lookback)
    if resistance <= support:
        return _not_detected(pattern_type, reason="flat range")

    levels = fibonacci_levels(resistance, support)
    current = float(closes[-1]) if current_price is None else current_price
    details = {**levels, "current_price": current}

    if levels["level_236"] < current < levels["level_382"]:
        signal, confidence = "BULLISH", 0.8
    elif current > levels["level_618"]:
        signal, confidence = "BEARISH", 0.75
    else:
        return _not_detected(pattern_type, **details)

    return DetectionResult(
        detected=True,
        pattern_type=pattern_type,
        signal=signal,
        confidence=confidence,
        details=details,
        timeframe="1D",
    )


def detect_support_resistance(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    lookback: int = 30,
    tolerance: float = 0.001,
    current_price: Optional[float] = None,
) -> DetectionResult:
    """
    Detect price pressing against the range high or low.

    Resistance is the highest high and support the lowest low of the last
    `lookback` bars. Near resistance reads bearish; otherwise near support
    reads bullish.
    """
    pattern_type = PatternName.SUPPORT_RESISTANCE_BREAK.value
    if len(closes) < lookback:
        return _not_detected(pattern_type, error="Insufficient data")

    support, resistance = range_extremes(highs, lows, lookback)
    if resistance <= support:
        return _not_detected(pattern_type, reason="flat range")

    current = float(closes[-1]) if current_price is None else current_price
    near_resistance = abs(current - resistance) < resistance * tolerance
    near_support = abs(current - support) < support * tolerance

    details = {
        "support": support,
        "resistance": resistance,
        "current_price": current,
    }

    if near_resistance:
        signal = "BEARISH"
        details["level"] = "resistance"
    elif near_support:
        signal = "BULLISH"
        details["level"] = "support"
    else:
        return _not_detected(pattern_type, **details)

    return DetectionResult(
        detected=True,
        pattern_type=pattern_type,
        signal=signal,
        confidence=0.8,
        details=details,
        timeframe="1H",
    )
