"""
Investment Projection

Year-by-year compound growth of an investment, alongside a conservative
baseline series for comparison. Growth is computed in the reference
currency and each point is converted to the display currency.
"""

from dataclasses import dataclass, replace
from typing import Iterator, List, Sequence, Union

import numpy as np

from app.calculations.currency import (
    DEFAULT_ROUNDING_BRACKETS,
    RoundingBracket,
    convert_to_display,
    round_half_up,
)

DEFAULT_BASELINE_RETURN_PERCENT = 3.0


def clamp(value: float, minimum: float, maximum: float) -> float:
    """
    Clamp a value to [minimum, maximum].

    Raises:
        ValueError: If minimum is greater than maximum
    """
    if minimum > maximum:
        raise ValueError(f"Invalid bounds: minimum {minimum} exceeds maximum {maximum}")
    return max(minimum, min(maximum, value))


@dataclass(frozen=True)
class ProjectionPoint:
    """A single year of the projection, in display currency."""

    year_index: int
    projected_value: float
    baseline_value: float

    @property
    def year_label(self) -> str:
        return f"Year {self.year_index}"

    def to_dict(self) -> dict:
        return {
            "year_label": self.year_label,
            "projected_value": self.projected_value,
            "baseline_value": self.baseline_value,
        }


@dataclass(frozen=True)
class ProjectionConfig:
    """
    Immutable calculator configuration.

    Callers derive a new config with ``with_changes`` on every edit and
    rebuild the projection from it.
    """

    base_amount_reference: float
    timeline_years: int
    annual_return_percent: float
    rate: float = 1.0
    baseline_return_percent: float = DEFAULT_BASELINE_RETURN_PERCENT

    def with_changes(self, **changes) -> "ProjectionConfig":
        return replace(self, **changes)


class ProjectionSeries(Sequence):
    """
    Finite, restartable sequence of ProjectionPoints.

    Points are computed when iterated or indexed; the series itself holds
    only its inputs, so iterating twice yields identical points.
    """

    def __init__(
        self,
        config: ProjectionConfig,
        brackets: Sequence[RoundingBracket] = DEFAULT_ROUNDING_BRACKETS,
    ):
        self.config = config
        self.brackets = brackets

    def __len__(self) -> int:
        return self.config.timeline_years + 1

    def _growth_factors(self, year: int) -> tuple:
        """Projected and baseline compound factors for one year."""
        exponent = float(year)
        projected = np.power(1 + self.config.annual_return_percent / 100, exponent)
        baseline = np.power(1 + self.config.baseline_return_percent / 100, exponent)
        return float(projected), float(baseline)

    def _point(self, year: int) -> ProjectionPoint:
        projected_factor, baseline_factor = self._growth_factors(year)
        base = self.config.base_amount_reference
        projected_ref = round_half_up(base * projected_factor)
        baseline_ref = round_half_up(base * baseline_factor)
        return ProjectionPoint(
            year_index=year,
            projected_value=convert_to_display(projected_ref, self.config.rate, self.brackets),
            baseline_value=convert_to_display(baseline_ref, self.config.rate, self.brackets),
        )

    def __iter__(self) -> Iterator[ProjectionPoint]:
        for year in range(len(self)):
            yield self._point(year)

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return [self._point(year) for year in range(len(self))[index]]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("projection index out of range")
        return self._point(index)

    def to_list(self) -> List[dict]:
        """Chart-ready rows: year label, projected and baseline values."""
        return [point.to_dict() for point in self]


def build_projection(
    base_ref: float,
    timeline_years: int,
    annual_rate_percent: float,
    baseline_rate_percent: float = DEFAULT_BASELINE_RETURN_PERCENT,
    rate: float = 1.0,
    brackets: Sequence[RoundingBracket] = DEFAULT_ROUNDING_BRACKETS,
) -> ProjectionSeries:
    """
    Build the year-by-year projection for an investment.

    Args:
        base_ref: Starting amount in reference currency
        timeline_years: Number of years to project (0 yields only year 0)
        annual_rate_percent: Expected annual return (e.g., 18 for 18%)
        baseline_rate_percent: Comparison return (e.g., 3 for 3%)
        rate: Display currency units per reference unit
        brackets: Denomination rounding table

    Returns:
        ProjectionSeries covering years 0..timeline_years inclusive

    Raises:
        ValueError: If inputs are out of range, a return is -100% or lower,
            or growth overflows floating point
    """
    if timeline_years < 0:
        raise ValueError("Timeline must be zero or more years")
    if base_ref < 0:
        raise ValueError("Base amount must be non-negative")
    if rate <= 0:
        raise ValueError("Exchange rate must be positive")
    for percent in (annual_rate_percent, baseline_rate_percent):
        if not np.isfinite(percent) or percent <= -100:
            raise ValueError("Annual return must be greater than -100%")

    # Factors are largest in the final year for positive returns and at most 1 otherwise
    with np.errstate(over="ignore"):
        for percent in (annual_rate_percent, baseline_rate_percent):
            peak = np.power(1 + percent / 100, float(timeline_years)) * base_ref * max(rate, 1.0)
            if not np.isfinite(peak):
                raise ValueError("Projection exceeds the representable range")

    config = ProjectionConfig(
        base_amount_reference=base_ref,
        timeline_years=int(timeline_years),
        annual_return_percent=annual_rate_percent,
        rate=rate,
        baseline_return_percent=baseline_rate_percent,
    )
    return ProjectionSeries(config, brackets)


def projection_from_config(
    config: ProjectionConfig,
    brackets: Sequence[RoundingBracket] = DEFAULT_ROUNDING_BRACKETS,
) -> ProjectionSeries:
    """Build a projection from an existing configuration."""
    return build_projection(
        config.base_amount_reference,
        config.timeline_years,
        config.annual_return_percent,
        config.baseline_return_percent,
        config.rate,
        brackets,
    )


@dataclass(frozen=True)
class ProjectionSummary:
    """Headline figures shown above the chart."""

    initial_value: float
    final_value: float
    total_return: float
    percentage_gain: float


def summarize_projection(series: ProjectionSeries) -> ProjectionSummary:
    """
    Summarize a projection against the displayed starting amount.

    The percentage gain is rounded to one decimal place.
    """
    config = series.config
    initial = convert_to_display(config.base_amount_reference, config.rate, series.brackets)
    final = series[-1].projected_value

    if initial == 0:
        percentage = 0.0
    else:
        percentage = round((final - initial) / initial * 100, 1)

    return ProjectionSummary(
        initial_value=initial,
        final_value=final,
        total_return=final - initial,
        percentage_gain=percentage,
    )
