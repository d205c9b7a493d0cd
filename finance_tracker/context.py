"""Presentation state owned by the app session.

The dashboard keeps exchange rates and refresh timestamps here instead of in
module globals; render helpers receive the context explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .config import BASE_CURRENCY, RATE_REFRESH_SECONDS
from .rates import RateLookupService, RateSnapshot, convert, fallback_snapshot


def _is_due(last: Optional[datetime], now: datetime, seconds: int) -> bool:
    return last is None or now - last >= timedelta(seconds=seconds)


@dataclass
class PresentationContext:
    """Per-session state for the presentation layer."""

    rates: RateSnapshot = field(default_factory=fallback_snapshot)
    rates_base: Optional[str] = None
    rates_checked_at: Optional[datetime] = None
    summary_refreshed_at: Optional[datetime] = None

    def rates_due(self, now: datetime, base: Optional[str] = None) -> bool:
        """True when rates are older than the refresh interval or were requested for another base."""
        if base is not None and base != self.rates_base:
            return True
        return _is_due(self.rates_checked_at, now, RATE_REFRESH_SECONDS)

    def mark_summary_refreshed(self, now: datetime) -> None:
        self.summary_refreshed_at = now

    def refresh_rates(self, service: RateLookupService, now: datetime, base: str = BASE_CURRENCY) -> RateSnapshot:
        """Fetch rates when due and cache them; otherwise return the cached snapshot."""
        if self.rates_due(now, base):
            self.rates = service.fetch(base, previous=self.rates)
            self.rates_base = base
            self.rates_checked_at = now
        return self.rates

    def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        return convert(amount, from_currency, to_currency, self.rates.rates)

    def rate_label(self, from_currency: str, to_currency: str) -> str:
        rate = self.convert(1, from_currency, to_currency)
        return f"1 {from_currency} = {rate:.4f} {to_currency}"
