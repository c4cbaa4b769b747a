"""
Exchange rate API endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Dict

from app.services.exchange_rates import ExchangeRateService, get_exchange_rate_service

router = APIRouter()


class ExchangeRateResponse(BaseModel):
    """Current exchange rates, 1 reference unit = rate units."""

    rates: Dict[str, float]
    date: str
    success: bool
    source: str


@router.get("/", response_model=ExchangeRateResponse)
def get_exchange_rates(
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Get live exchange rates, or the fallback table if unavailable."""
    return ExchangeRateResponse(**service.get_rates().to_dict())
