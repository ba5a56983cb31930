from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from investsim.core.formatting import DEFAULT_LOCALE, month_label


DEFAULT_BASE_YEAR = 2025
DEFAULT_ASSUMED_INFLATION_PERCENT = 2.0


class InvalidParameters(ValueError):
    """Raised when the engine receives numbers it cannot project."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


# -----------------------------
# Value records
# -----------------------------


class ProjectionParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    initial_capital: float
    monthly_contribution: float
    duration_months: int
    annual_rate: float  # decimal, 0.08 means 8%

    @classmethod
    def from_inputs(
        cls,
        initial_capital: float,
        monthly_contribution: float,
        years: int,
        annual_percent: float,
    ) -> "ProjectionParameters":
        """Build parameters from the units a user types (years, percent)."""
        return cls(
            initial_capital=initial_capital,
            monthly_contribution=monthly_contribution,
            duration_months=years * 12,
            annual_rate=annual_percent / 100,
        )

    @property
    def years(self) -> float:
        return self.duration_months / 12

    @property
    def annual_percent(self) -> float:
        return self.annual_rate * 100


class MonthlySample(BaseModel):
    """One display row; money values are rounded to whole units."""

    model_config = ConfigDict(frozen=True)

    month_label: str
    month_index: int
    balance: int
    cumulative_contribution: int
    cumulative_gain: int


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: List[MonthlySample]
    final_balance: float
    total_contribution: float
    total_gain: float
    yield_percent: float
    monthly_growth_rates: List[float]


class ProjectionSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    cagr: Optional[float]
    multiplier: float
    performance: str  # "excellent" | "positive" | "at_risk"
    inflation_advantage_percent: float


# -----------------------------
# Engine
# -----------------------------


def monthly_rate_for(annual_rate: float) -> float:
    """Geometric monthly equivalent of an annual rate (not annual_rate / 12)."""
    return (1 + annual_rate) ** (1 / 12) - 1


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; display rows round .5 upwards
    return int(math.floor(value + 0.5))


def _check_inputs(
    initial_capital: float,
    monthly_contribution: float,
    duration_months: int,
    annual_rate: float,
) -> None:
    errors: List[str] = []
    for name, value in (
        ("initial_capital", initial_capital),
        ("monthly_contribution", monthly_contribution),
        ("annual_rate", annual_rate),
    ):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"{name} must be a number")
        elif not math.isfinite(value):
            errors.append(f"{name} must be finite")

    if isinstance(duration_months, bool) or not isinstance(duration_months, (int, float)):
        errors.append("duration_months must be an integer")
    elif isinstance(duration_months, float) and not duration_months.is_integer():
        errors.append("duration_months must be an integer")
    elif duration_months < 1:
        errors.append("duration_months must be at least 1")

    if not errors and annual_rate < -1:
        errors.append("annual_rate below -100% has no monthly equivalent")

    if errors:
        raise InvalidParameters(errors)


def project(
    initial_capital: float,
    monthly_contribution: float,
    duration_months: int,
    annual_rate: float,
    *,
    base_year: int = DEFAULT_BASE_YEAR,
    locale: str = DEFAULT_LOCALE,
) -> ProjectionResult:
    """
    Month-by-month balance under monthly compounding.

    Order of operations (per month):
      1) Add the contribution at the START of the month.
      2) Apply one month of growth at the geometric monthly rate.
      3) Record the row, rounded for display only; the running balance
         carried into the next month is never rounded.

    base_year and locale only affect the month labels.
    """
    _check_inputs(initial_capital, monthly_contribution, duration_months, annual_rate)
    months = int(duration_months)

    rate = monthly_rate_for(annual_rate)
    balance = float(initial_capital)

    rows: List[MonthlySample] = []
    growth_rates: List[float] = []
    for m in range(1, months + 1):
        previous = balance
        balance += monthly_contribution
        balance *= 1 + rate

        contributed = initial_capital + monthly_contribution * m
        if not (math.isfinite(balance) and math.isfinite(contributed)):
            raise InvalidParameters([f"projection overflowed at month {m}"])

        growth_rates.append((balance - previous) / max(previous, 1) * 100)

        shown_balance = round_half_up(balance)
        shown_contribution = round_half_up(contributed)
        rows.append(
            MonthlySample(
                month_label=month_label(m, base_year=base_year, locale=locale),
                month_index=m,
                balance=shown_balance,
                cumulative_contribution=shown_contribution,
                cumulative_gain=shown_balance - shown_contribution,
            )
        )

    total_contribution = initial_capital + monthly_contribution * months
    total_gain = balance - total_contribution

    return ProjectionResult(
        rows=rows,
        final_balance=balance,
        total_contribution=total_contribution,
        total_gain=total_gain,
        yield_percent=100 * total_gain / max(1, total_contribution),
        monthly_growth_rates=growth_rates,
    )


def project_parameters(params: ProjectionParameters, **kwargs) -> ProjectionResult:
    return project(
        params.initial_capital,
        params.monthly_contribution,
        params.duration_months,
        params.annual_rate,
        **kwargs,
    )


# -----------------------------
# Summary metrics
# -----------------------------


def compound_annual_growth_rate(
    final_balance: float, initial_capital: float, years: float
) -> Optional[float]:
    """
    (final / max(initial, 1)) ** (1 / years) - 1, as a decimal fraction.

    Undefined (None) when nothing was invested up front, or when the ratio is
    negative and has no real root.
    """
    if initial_capital == 0 or years <= 0:
        return None
    ratio = final_balance / max(initial_capital, 1)
    if ratio < 0:
        return None
    return ratio ** (1 / years) - 1


def performance_label(total_gain: float, total_contribution: float) -> str:
    if total_gain > total_contribution:
        return "excellent"
    if total_gain > 0:
        return "positive"
    return "at_risk"


def summarize(
    params: ProjectionParameters,
    result: ProjectionResult,
    assumed_inflation_percent: float = DEFAULT_ASSUMED_INFLATION_PERCENT,
) -> ProjectionSummary:
    return ProjectionSummary(
        cagr=compound_annual_growth_rate(
            result.final_balance, params.initial_capital, params.years
        ),
        multiplier=result.final_balance / max(result.total_contribution, 1),
        performance=performance_label(result.total_gain, result.total_contribution),
        inflation_advantage_percent=(params.annual_percent - assumed_inflation_percent)
        * params.years,
    )


__all__ = [
    "DEFAULT_BASE_YEAR",
    "DEFAULT_ASSUMED_INFLATION_PERCENT",
    "InvalidParameters",
    "ProjectionParameters",
    "MonthlySample",
    "ProjectionResult",
    "ProjectionSummary",
    "monthly_rate_for",
    "round_half_up",
    "project",
    "project_parameters",
    "compound_annual_growth_rate",
    "performance_label",
    "summarize",
]
