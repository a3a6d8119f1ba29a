"""
CONTRACT 3: Pattern Detector

Input: PriceSeries (+ optional live quote)
Output: list[Pattern]
"""

from enum import Enum
from typing import Any
from pydantic import BaseModel, Field


class PatternName(str, Enum):
    HEAD_AND_SHOULDERS = "Head and Shoulders"
    DOUBLE_TOP = "Double Top"
    DOUBLE_BOTTOM = "Double Bottom"
    FIBONACCI_RETRACEMENT = "Fibonacci Retracement"
    SUPPORT_RESISTANCE_BREAK = "Support/Resistance Break"


class PatternDirection(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"


class Pattern(BaseModel):
    """A detected chart formation."""

    name: PatternName
    confidence: float = Field(..., ge=0, le=1)
    direction: PatternDirection
    timeframe: str = Field(default="1H", description="Informational label only")
    details: dict[str, Any] = Field(default_factory=dict)
