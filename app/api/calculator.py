"""
Investment calculator API endpoints.

Stateless: the client sends its current configuration on every request
and receives the re-derived projection and display values.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Dict, List, Literal, Optional

from app.calculations.amount import apply_typed_amount, commit_typed_amount
from app.calculations.currency import (
    REFERENCE_CURRENCY,
    SUPPORTED_CURRENCIES,
    convert_to_display,
    convert_to_reference,
    get_currency,
    resolve_rate,
)
from app.calculations.formatting import (
    MAX_INPUT_VALUE,
    format_currency,
    format_input_text,
)
from app.calculations.projection import build_projection, clamp, summarize_projection
from app.config import get_settings
from app.services.exchange_rates import ExchangeRateService, get_exchange_rate_service

settings = get_settings()

router = APIRouter()


class CurrencyResponse(BaseModel):
    """Supported display currency."""

    code: str
    symbol: str
    name: str


class CurrencyListResponse(BaseModel):
    """Supported currencies and the reference currency code."""

    reference: str
    currencies: List[CurrencyResponse]


class CalculatorDefaults(BaseModel):
    """Control bounds and starting values for the calculator."""

    reference_currency: str
    min_investment: float
    max_investment: float
    investment_step: float
    default_investment: float
    min_timeline_years: int
    max_timeline_years: int
    default_timeline_years: int
    min_return_percent: float
    max_return_percent: float
    default_return_percent: float
    baseline_return_percent: float


class ProjectionInput(BaseModel):
    """Input for a projection calculation."""

    base_amount_reference: float
    timeline_years: int
    annual_return_percent: float
    display_currency_code: str = REFERENCE_CURRENCY
    exchange_rate_table: Optional[Dict[str, float]] = None


class ProjectionPointResponse(BaseModel):
    """One chart row."""

    year_label: str
    projected_value: float
    baseline_value: float


class ProjectionSummaryResponse(BaseModel):
    """Headline figures in display currency."""

    initial_value: float
    final_value: float
    total_return: float
    percentage_gain: float


class ProjectionResponse(BaseModel):
    """Projection series plus the display values for the amount controls."""

    points: List[ProjectionPointResponse]
    base_amount_reference: float
    display_amount: float
    input_text: str
    formatted_amount: str
    summary: ProjectionSummaryResponse
    currency: CurrencyResponse
    rate: float
    using_fallback_rate: bool
    rates_live: bool
    rate_date: Optional[str] = None
    timeline_years: int
    annual_return_percent: float


class AmountInput(BaseModel):
    """Text typed into the amount field."""

    text: str
    display_currency_code: str = REFERENCE_CURRENCY
    base_amount_reference: float
    commit: bool = False
    exchange_rate_table: Optional[Dict[str, float]] = None


class AmountResponse(BaseModel):
    """Amount state after applying an edit."""

    base_amount_reference: float
    display_amount: float
    input_text: str
    using_fallback_rate: bool


class ConvertInput(BaseModel):
    """Input for a single conversion."""

    amount: float
    display_currency_code: str
    direction: Literal["to_display", "to_reference"] = "to_display"
    exchange_rate_table: Optional[Dict[str, float]] = None


class ConvertResponse(BaseModel):
    """Converted amount."""

    amount: float
    converted_amount: float
    direction: str
    rate: float
    using_fallback_rate: bool


def _rate_table(
    supplied: Optional[Dict[str, float]], service: ExchangeRateService
) -> tuple:
    """Return (rates, live, date) from the request or the rate service."""
    if supplied is not None:
        return supplied, True, None
    snapshot = service.get_rates()
    return snapshot.rates, snapshot.success, snapshot.date


@router.get("/currencies", response_model=CurrencyListResponse)
async def list_currencies():
    """List supported display currencies."""
    return CurrencyListResponse(
        reference=REFERENCE_CURRENCY,
        currencies=[
            CurrencyResponse(code=c.code, symbol=c.symbol, name=c.name)
            for c in SUPPORTED_CURRENCIES
        ],
    )


@router.get("/defaults", response_model=CalculatorDefaults)
async def get_defaults():
    """Get control bounds and default values."""
    return CalculatorDefaults(
        reference_currency=REFERENCE_CURRENCY,
        min_investment=settings.min_investment,
        max_investment=settings.max_investment,
        investment_step=settings.investment_slider_step,
        default_investment=settings.default_investment,
        min_timeline_years=settings.min_timeline_years,
        max_timeline_years=settings.max_timeline_years,
        default_timeline_years=settings.default_timeline_years,
        min_return_percent=settings.min_return_percent,
        max_return_percent=settings.max_return_percent,
        default_return_percent=settings.default_return_percent,
        baseline_return_percent=settings.baseline_return_percent,
    )


@router.post("/projection", response_model=ProjectionResponse)
def calculate_projection(
    inputs: ProjectionInput,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Calculate the year-by-year projection in the display currency."""
    rates, rates_live, rate_date = _rate_table(inputs.exchange_rate_table, service)
    rate, used_fallback = resolve_rate(rates, inputs.display_currency_code)

    base_ref = clamp(
        inputs.base_amount_reference, settings.min_investment, settings.max_investment
    )
    timeline_years = int(
        clamp(
            inputs.timeline_years,
            settings.min_timeline_years,
            settings.max_timeline_years,
        )
    )
    annual_return = clamp(
        inputs.annual_return_percent,
        settings.min_return_percent,
        settings.max_return_percent,
    )

    try:
        series = build_projection(
            base_ref,
            timeline_years,
            annual_return,
            settings.baseline_return_percent,
            rate,
        )
        points = series.to_list()
        summary = summarize_projection(series)
        display_amount = convert_to_display(base_ref, rate)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    currency = get_currency(inputs.display_currency_code)

    return ProjectionResponse(
        points=[ProjectionPointResponse(**point) for point in points],
        base_amount_reference=base_ref,
        display_amount=display_amount,
        input_text=format_input_text(display_amount),
        formatted_amount=format_currency(display_amount, currency.symbol),
        summary=ProjectionSummaryResponse(
            initial_value=summary.initial_value,
            final_value=summary.final_value,
            total_return=summary.total_return,
            percentage_gain=summary.percentage_gain,
        ),
        currency=CurrencyResponse(
            code=currency.code, symbol=currency.symbol, name=currency.name
        ),
        rate=rate,
        using_fallback_rate=used_fallback,
        rates_live=rates_live,
        rate_date=rate_date,
        timeline_years=timeline_years,
        annual_return_percent=annual_return,
    )


@router.post("/amount", response_model=AmountResponse)
def apply_amount(
    inputs: AmountInput,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Apply text typed into the amount field (live or on commit)."""
    rates, _, _ = _rate_table(inputs.exchange_rate_table, service)
    rate, used_fallback = resolve_rate(rates, inputs.display_currency_code)

    current_ref = clamp(
        inputs.base_amount_reference, settings.min_investment, settings.max_investment
    )

    try:
        if inputs.commit:
            state = commit_typed_amount(
                inputs.text, rate, settings.min_investment, settings.max_investment
            )
        else:
            state = apply_typed_amount(
                inputs.text,
                current_ref,
                rate,
                settings.min_investment,
                settings.max_investment,
            )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AmountResponse(
        base_amount_reference=state.base_amount_reference,
        display_amount=state.display_amount,
        input_text=state.input_text,
        using_fallback_rate=used_fallback,
    )


@router.post("/convert", response_model=ConvertResponse)
def convert_amount(
    inputs: ConvertInput,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Convert an amount between the reference and a display currency."""
    if not 0 <= inputs.amount <= MAX_INPUT_VALUE:
        raise HTTPException(
            status_code=400,
            detail=f"Amount must be between 0 and {MAX_INPUT_VALUE:,}",
        )

    rates, _, _ = _rate_table(inputs.exchange_rate_table, service)
    rate, used_fallback = resolve_rate(rates, inputs.display_currency_code)

    try:
        if inputs.direction == "to_display":
            converted = convert_to_display(inputs.amount, rate)
        else:
            converted = convert_to_reference(inputs.amount, rate)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ConvertResponse(
        amount=inputs.amount,
        converted_amount=converted,
        direction=inputs.direction,
        rate=rate,
        using_fallback_rate=used_fallback,
    )
