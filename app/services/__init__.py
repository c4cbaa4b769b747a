"""
Application services module.
"""

from app.services.exchange_rates import (
    ExchangeRateService,
    RateSnapshot,
    get_exchange_rate_service,
)

__all__ = ["ExchangeRateService", "RateSnapshot", "get_exchange_rate_service"]
