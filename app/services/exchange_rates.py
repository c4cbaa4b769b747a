"""
Exchange rate service using the Frankfurter API (ECB reference rates).

Falls back to a built-in rate table if the upstream is unavailable.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Optional

import requests

from app.calculations.currency import (
    FALLBACK_RATES,
    REFERENCE_CURRENCY,
    SUPPORTED_CURRENCIES,
)
from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class RateSnapshot:
    """Exchange rates relative to the reference currency."""

    rates: Dict[str, float]
    date: str
    success: bool
    source: str = "frankfurter"
    fetched_at: float = field(default=0.0, compare=False)

    def to_dict(self) -> dict:
        return {
            "rates": dict(self.rates),
            "date": self.date,
            "success": self.success,
            "source": self.source,
        }


def fallback_snapshot() -> RateSnapshot:
    """Snapshot built from the default rate table, dated today."""
    return RateSnapshot(
        rates=dict(FALLBACK_RATES),
        date=date.today().isoformat(),
        success=False,
        source="fallback",
    )


class ExchangeRateService:
    """Fetches and caches live exchange rates."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        cache_ttl: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api_url = api_url or settings.exchange_rate_api_url
        self.reference_currency = REFERENCE_CURRENCY
        self.timeout = timeout if timeout is not None else settings.exchange_rate_timeout_seconds
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.exchange_rate_cache_ttl_seconds
        self.clock = clock
        self._cached: Optional[RateSnapshot] = None
        self._lock = threading.Lock()

    @property
    def symbols(self) -> str:
        """Comma-separated target currency codes for the upstream query."""
        return ",".join(
            c.code for c in SUPPORTED_CURRENCIES if c.code != self.reference_currency
        )

    def _fetch(self) -> Optional[RateSnapshot]:
        """
        Query the upstream API once.

        Returns:
            Snapshot of live rates, or None if the request fails
        """
        params = {"base": self.reference_currency, "symbols": self.symbols}

        try:
            response = requests.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            upstream_rates = data["rates"]
            rate_date = data.get("date") or date.today().isoformat()
        except requests.exceptions.Timeout:
            logger.error(f"Timeout fetching exchange rates from {self.api_url}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching exchange rates: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Invalid exchange rate response: {e}")
            return None

        if not isinstance(upstream_rates, dict):
            logger.error("Invalid exchange rate response: rates is not an object")
            return None

        rates: Dict[str, float] = {self.reference_currency: 1.0}
        for currency in SUPPORTED_CURRENCIES:
            if currency.code == self.reference_currency:
                continue
            value = upstream_rates.get(currency.code)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                rates[currency.code] = float(value)
            else:
                logger.warning(
                    f"Upstream rate for {currency.code} missing or invalid, using fallback"
                )
                rates[currency.code] = FALLBACK_RATES[currency.code]

        return RateSnapshot(
            rates=rates,
            date=rate_date,
            success=True,
            fetched_at=self.clock(),
        )

    def get_rates(self) -> RateSnapshot:
        """
        Get the current exchange rates.

        Live rates are served from cache while fresh. When the upstream
        fails the fallback table is returned and nothing is cached, so the
        next call retries. Concurrent callers share a single upstream fetch.
        """
        with self._lock:
            if self._cached is not None:
                age = self.clock() - self._cached.fetched_at
                if age <= self.cache_ttl:
                    logger.debug(f"Exchange rates served from cache (age {age:.0f}s)")
                    return self._cached
                self._cached = None

            snapshot = self._fetch()
            if snapshot is None:
                logger.error("Exchange rates unavailable, using fallback rates")
                return fallback_snapshot()

            logger.info(f"Fetched live exchange rates dated {snapshot.date}")
            self._cached = snapshot
            return snapshot

    def invalidate(self) -> None:
        """Drop cached rates."""
        with self._lock:
            self._cached = None


# Singleton instance
_exchange_rate_service: Optional[ExchangeRateService] = None


def get_exchange_rate_service() -> ExchangeRateService:
    """Get the exchange rate service singleton."""
    global _exchange_rate_service
    if _exchange_rate_service is None:
        _exchange_rate_service = ExchangeRateService()
    return _exchange_rate_service
