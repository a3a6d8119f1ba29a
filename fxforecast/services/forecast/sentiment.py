"""
Market Sentiment Sources

The forecast blends a sentiment proxy built from weighted market events.
Sources are pluggable: the engine only asks for the current event list.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from fxforecast.schemas.forecast import (
    EventImpact,
    EventSentiment,
    EventType,
    MarketEvent,
)

logger = logging.getLogger(__name__)

IMPACT_WEIGHTS = {
    EventImpact.HIGH: 0.3,
    EventImpact.MEDIUM: 0.2,
    EventImpact.LOW: 0.1,
}

SENTIMENT_VALUES = {
    EventSentiment.BULLISH: 1.0,
    EventSentiment.BEARISH: 0.0,
    EventSentiment.NEUTRAL: 0.5,
}

DEFAULT_EVENTS = (
    MarketEvent(
        type=EventType.ECONOMIC,
        impact=EventImpact.HIGH,
        sentiment=EventSentiment.BULLISH,
        weight=0.8,
    ),
    MarketEvent(
        type=EventType.TECHNICAL,
        impact=EventImpact.MEDIUM,
        sentiment=EventSentiment.BEARISH,
        weight=0.6,
    ),
    MarketEvent(
        type=EventType.POLITICAL,
        impact=EventImpact.LOW,
        sentiment=EventSentiment.NEUTRAL,
        weight=0.3,
    ),
)


class SentimentSource(ABC):
    """Supplies the market events the sentiment score is built from."""

    @abstractmethod
    def get_events(self) -> list[MarketEvent]:
        pass


class StaticSentimentSource(SentimentSource):
    """Fixed event list (the built-in defaults unless given one)."""

    def __init__(self, events: Optional[Iterable[MarketEvent]] = None):
        self._events = tuple(DEFAULT_EVENTS if events is None else events)

    def get_events(self) -> list[MarketEvent]:
        return list(self._events)


def sentiment_score(events: Iterable[MarketEvent]) -> float:
    """
    Aggregate sentiment in [0, 1].

    Starts neutral at 0.5; each event shifts it by
    (sentiment - 0.5) * impact weight * event weight.
    """
    score = 0.5
    for event in events:
        impact = IMPACT_WEIGHTS[event.impact]
        value = SENTIMENT_VALUES[event.sentiment]
        score += (value - 0.5) * impact * event.weight

    return max(0.0, min(1.0, score))
