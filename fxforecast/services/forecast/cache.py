"""
Prediction cache.

Keeps a forecast stable across repeated requests for the same pair until
it goes stale. An entry is stale when it is older than the TTL or when the
price has moved more than the relative tolerance since it was stored.

The cache is an ordinary object owned by the caller; nothing here is
module-level state.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from fxforecast.core.config import Settings, get_settings
from fxforecast.schemas.forecast import Prediction

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    prediction: Prediction
    price: float
    stored_at: datetime


class PredictionCache:
    """
    Per-pair prediction cache with a time and price-move invalidation policy.

    Usage:
        cache = PredictionCache(ttl_seconds=180, price_tolerance=0.001)
        prediction = cache.get_or_compute(
            "EUR/USD", quote, lambda: engine.predict(series)
        )
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        price_tolerance: Optional[float] = None,
        config: Optional[Settings] = None,
    ):
        s = config or get_settings()
        if ttl_seconds is None:
            ttl_seconds = s.prediction_cache_ttl_seconds
        if price_tolerance is None:
            price_tolerance = s.prediction_cache_price_tolerance

        self._ttl = timedelta(seconds=ttl_seconds)
        self._price_tolerance = price_tolerance
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _key(pair: str) -> str:
        return pair.upper()

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return now or datetime.now(timezone.utc)

    def is_fresh(self, entry: CacheEntry, current_price: float, now: datetime) -> bool:
        """True while the entry is within TTL and the price has not moved too far."""
        if now - entry.stored_at > self._ttl:
            return False
        if entry.price <= 0:
            return False
        return abs(current_price - entry.price) / entry.price <= self._price_tolerance

    def get(
        self, pair: str, current_price: float, now: Optional[datetime] = None
    ) -> Optional[Prediction]:
        """Cached prediction for `pair`, or None if missing or stale."""
        key = self._key(pair)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if not self.is_fresh(entry, current_price, self._now(now)):
            logger.debug(f"Prediction cache stale for {key}")
            del self._entries[key]
            return None

        return entry.prediction

    def put(
        self,
        pair: str,
        prediction: Prediction,
        price: float,
        now: Optional[datetime] = None,
    ) -> None:
        """Store a prediction made at `price`."""
        self._entries[self._key(pair)] = CacheEntry(
            prediction=prediction,
            price=price,
            stored_at=self._now(now),
        )

    def get_or_compute(
        self,
        pair: str,
        current_price: float,
        compute: Callable[[], Prediction],
        now: Optional[datetime] = None,
    ) -> Prediction:
        """Return the cached prediction or compute, store and return a new one."""
        now = self._now(now)
        cached = self.get(pair, current_price, now)
        if cached is not None:
            return cached

        prediction = compute()
        self.put(pair, prediction, current_price, now)
        return prediction

    def invalidate(self, pair: Optional[str] = None) -> None:
        """Drop one pair, or everything when no pair is given."""
        if pair is None:
            self._entries.clear()
        else:
            self._entries.pop(self._key(pair), None)
