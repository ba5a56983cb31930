"""Range checks applied at the boundary before the engine is called."""

from __future__ import annotations

from typing import List

MAX_INITIAL_CAPITAL = 1_000_000
MAX_MONTHLY_CONTRIBUTION = 50_000
MIN_YEARS, MAX_YEARS = 1, 50
MIN_ANNUAL_PERCENT, MAX_ANNUAL_PERCENT = -20, 50


class OutOfRange(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def validate_inputs(
    initial_capital: float,
    monthly_contribution: float,
    years: int,
    annual_percent: float,
) -> List[str]:
    """Return every violated rule; an empty list means the inputs are usable."""
    errors: List[str] = []

    if initial_capital < 0:
        errors.append("Initial capital cannot be negative")
    if initial_capital > MAX_INITIAL_CAPITAL:
        errors.append("Initial capital looks too large (max €1M)")
    if monthly_contribution < 0:
        errors.append("Monthly contribution cannot be negative")
    if monthly_contribution > MAX_MONTHLY_CONTRIBUTION:
        errors.append("Monthly contribution looks too large (max €50k)")
    if years < MIN_YEARS or years > MAX_YEARS:
        errors.append(f"Duration must be between {MIN_YEARS}-{MAX_YEARS} years")
    if annual_percent < MIN_ANNUAL_PERCENT or annual_percent > MAX_ANNUAL_PERCENT:
        errors.append(
            f"Annual return must be between {MIN_ANNUAL_PERCENT}% and {MAX_ANNUAL_PERCENT}%"
        )

    return errors


def ensure_in_range(
    initial_capital: float,
    monthly_contribution: float,
    years: int,
    annual_percent: float,
) -> None:
    errors = validate_inputs(initial_capital, monthly_contribution, years, annual_percent)
    if errors:
        raise OutOfRange(errors)
