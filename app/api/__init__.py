"""
API routes for the investment calculator.
"""

from fastapi import APIRouter

from app.api import calculator, exchange_rates

router = APIRouter()

# Include sub-routers
router.include_router(calculator.router, prefix="/calculator", tags=["calculator"])
router.include_router(exchange_rates.router, prefix="/exchange-rates", tags=["exchange-rates"])
