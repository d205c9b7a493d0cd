"""Exchange rate lookup and currency conversion.

Rates come from a Frankfurter-compatible endpoint returning
``{"base": ..., "rates": {"USD": 0.128, ...}}`` relative to a requested base
currency. When the request fails the service falls back to the last rates it
fetched, or to :data:`STATIC_RATES` when it has none.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional

import requests

from .config import BASE_CURRENCY, RATES_TIMEOUT, RATES_URL
from .exceptions import NetworkError

logger = logging.getLogger(__name__)

# Offline table, quoted per 1 HKD.
STATIC_BASE = 'HKD'
STATIC_RATES: Dict[str, float] = {
    'HKD': 1.0,
    'USD': 0.128,
    'JPY': 19.5,
    'GBP': 0.10,
    'EUR': 0.12,
}
SUPPORTED_CURRENCIES = tuple(STATIC_RATES)


@dataclass(frozen=True)
class RateSnapshot:
    """Rates relative to ``base`` as of ``fetched_at``.

    ``ok`` is False when the rates are a fallback rather than a fresh fetch.
    """

    base: str
    rates: Dict[str, float] = field(default_factory=dict)
    fetched_at: Optional[datetime] = None
    ok: bool = False


def fallback_snapshot(base: str = BASE_CURRENCY) -> RateSnapshot:
    """Static rates re-expressed relative to ``base``.

    Bases missing from the static table keep the HKD quotes.
    """
    if base not in STATIC_RATES:
        return RateSnapshot(base=STATIC_BASE, rates=dict(STATIC_RATES), fetched_at=None, ok=False)
    anchor = STATIC_RATES[base]
    rates = {code: rate / anchor for code, rate in STATIC_RATES.items()}
    rates[base] = 1.0
    return RateSnapshot(base=base, rates=rates, fetched_at=None, ok=False)


class RateLookupService:
    """Fetch exchange rates, degrading to cached or static rates on failure."""

    def __init__(
        self,
        url: str = RATES_URL,
        timeout: float = RATES_TIMEOUT,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = clock

    def _request(self, base: str) -> Dict[str, float]:
        try:
            response = self.session.get(self.url, params={'base': base}, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise NetworkError(f"Failed to fetch rates for {base}: {e}") from e

        rates = payload.get('rates') if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            raise NetworkError(f"Rates payload for {base} has no 'rates' mapping")
        cleaned: Dict[str, float] = {}
        for code, value in rates.items():
            try:
                rate = float(value)
            except (TypeError, ValueError):
                continue
            if math.isfinite(rate) and rate > 0:
                cleaned[str(code)] = rate
        cleaned[base] = 1.0
        return cleaned

    def fetch(self, base: str = BASE_CURRENCY, previous: Optional[RateSnapshot] = None) -> RateSnapshot:
        """Fetch rates for ``base``.

        Args:
            base: Currency the returned rates are relative to.
            previous: Last known snapshot, reused when the fetch fails.
        """
        try:
            rates = self._request(base)
        except NetworkError as e:
            logger.warning("Error fetching exchange rates: %s", e)
            if previous is not None and previous.rates:
                return RateSnapshot(previous.base, dict(previous.rates), previous.fetched_at, ok=False)
            return fallback_snapshot(base)
        logger.debug("Fetched %d rates for %s", len(rates), base)
        return RateSnapshot(base=base, rates=rates, fetched_at=self.clock(), ok=True)


def convert(amount: float, from_currency: str, to_currency: str, rates: Dict[str, float]) -> float:
    """Convert ``amount`` between two currencies through the rates' base.

    Unknown currencies leave the amount unchanged.
    """
    if from_currency == to_currency:
        return amount
    if rates.get(from_currency) and rates.get(to_currency):
        in_base = amount / rates[from_currency]
        return in_base * rates[to_currency]
    return amount
