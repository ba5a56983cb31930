from __future__ import annotations

import math
from math import isclose

import pytest

from investsim.core.projection import (
    InvalidParameters,
    ProjectionParameters,
    monthly_rate_for,
    project,
    project_parameters,
    round_half_up,
)


def test_monthly_rate_is_geometric_equivalent():
    rate = monthly_rate_for(0.08)

    assert isclose(rate, 0.006434, abs_tol=1e-6)
    assert isclose((1 + rate) ** 12, 1.08, rel_tol=1e-12)
    assert rate < 0.08 / 12


def test_reference_projection_beats_contributions():
    result = project(1000, 200, 12, 0.08)

    assert result.total_contribution == 3400
    assert result.final_balance > 3400
    assert result.total_gain > 0
    assert result.rows[-1].cumulative_contribution == 3400
    assert isclose(result.yield_percent, 100 * result.total_gain / 3400, rel_tol=1e-12)


def test_first_month_adds_contribution_before_growth():
    result = project(1000, 200, 12, 0.08)
    first = result.rows[0]

    # (1000 + 200) * 1.006434 = 1207.72
    assert first.month_index == 1
    assert first.balance == 1208
    assert first.cumulative_contribution == 1200
    assert first.cumulative_gain == 8


def test_zero_contribution_compounds_initial_capital():
    for months in (1, 12, 37, 600):
        result = project(2500, 0, months, 0.065)
        expected = 2500 * 1.065 ** (months / 12)
        assert isclose(result.final_balance, expected, rel_tol=1e-9)


def test_negative_rate_loses_value():
    result = project(1000, 0, 12, -0.1)

    assert result.final_balance < 1000
    assert isclose(result.final_balance, 900.0, rel_tol=1e-9)
    assert result.total_gain < 0
    assert result.yield_percent < 0


def test_total_loss_rate_wipes_balance():
    result = project(1000, 100, 3, -1.0)

    assert result.final_balance == 0.0
    assert [row.balance for row in result.rows] == [0, 0, 0]


def test_balance_is_monotonic_for_non_negative_inputs():
    result = project(500, 75, 120, 0.04)

    balances = [row.balance for row in result.rows]
    assert balances == sorted(balances)


def test_row_count_and_order():
    for months in (1, 13, 600):
        result = project(100, 10, months, 0.05)
        assert len(result.rows) == months
        assert len(result.monthly_growth_rates) == months
        assert [row.month_index for row in result.rows] == list(range(1, months + 1))


def test_gain_identity_holds_on_every_row():
    result = project(1234.56, 78.9, 240, 0.11)

    for row in result.rows:
        assert row.cumulative_gain == row.balance - row.cumulative_contribution


def test_final_balance_is_unrounded_running_balance():
    result = project(1000, 200, 12, 0.08)

    assert result.rows[-1].balance == round_half_up(result.final_balance)
    assert result.final_balance != result.rows[-1].balance


def test_rounding_does_not_accumulate():
    # 0.4 rounds to 0 on every row, yet the carried balance keeps its fraction
    result = project(0.4, 0, 3, 0.0)

    assert [row.balance for row in result.rows] == [0, 0, 0]
    assert result.final_balance == 0.4

    result = project(0, 0.4, 5, 0.0)
    assert [row.balance for row in result.rows] == [0, 1, 1, 2, 2]
    assert isclose(result.final_balance, 2.0, rel_tol=1e-12)


def test_round_half_up_matches_display_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4999) == 2
    assert round_half_up(-2.5) == -2


def test_projection_is_idempotent():
    first = project(1500, 250, 360, 0.072)
    second = project(1500, 250, 360, 0.072)

    assert first == second
    assert first.final_balance == second.final_balance
    assert first.monthly_growth_rates == second.monthly_growth_rates


def test_growth_rate_series_is_unrounded():
    result = project(1000, 0, 12, 0.08)

    expected = monthly_rate_for(0.08) * 100
    for rate in result.monthly_growth_rates:
        assert isclose(rate, expected, rel_tol=1e-9)


def test_month_labels_follow_base_year_and_locale():
    result = project(100, 0, 24, 0.05)
    assert result.rows[0].month_label == "ian."
    assert result.rows[11].month_label == "dec."
    assert result.rows[12].month_label == "ian. '26"

    result = project(100, 0, 14, 0.05, base_year=2030, locale="en-US")
    assert result.rows[0].month_label == "Jan"
    assert result.rows[13].month_label == "Feb '31"


def test_project_parameters_matches_positional_call():
    params = ProjectionParameters.from_inputs(1000, 200, 10, 8)

    assert params.duration_months == 120
    assert isclose(params.annual_rate, 0.08)
    assert project_parameters(params) == project(1000, 200, 120, 0.08)


def test_out_of_range_numbers_still_project():
    # range rules live at the boundary; the engine only refuses malformed numbers
    result = project(-500, 60_000, 12, 0.9)

    assert len(result.rows) == 12


@pytest.mark.parametrize(
    "args",
    [
        (math.nan, 0, 12, 0.05),
        (1000, math.inf, 12, 0.05),
        (1000, 0, 12, -math.inf),
        (1000, 0, 12.5, 0.05),
        (1000, 0, 0, 0.05),
        (1000, 0, -3, 0.05),
        (1000, 0, 12, -1.5),
        ("1000", 0, 12, 0.05),
    ],
)
def test_malformed_input_raises_invalid_parameters(args):
    with pytest.raises(InvalidParameters):
        project(*args)


def test_invalid_parameters_lists_every_problem():
    with pytest.raises(InvalidParameters) as excinfo:
        project(math.inf, math.nan, 1.5, 0.05)

    assert len(excinfo.value.errors) == 3
    assert isinstance(excinfo.value, ValueError)


def test_integral_float_duration_is_accepted():
    assert len(project(100, 0, 12.0, 0.05).rows) == 12


@pytest.mark.parametrize(
    "args",
    [
        (1000, 0, 600, 1e7),
        (1e308, 1e308, 12, 0.5),
    ],
)
def test_overflowing_balance_raises_invalid_parameters(args):
    with pytest.raises(InvalidParameters) as excinfo:
        project(*args)

    assert "overflowed" in excinfo.value.errors[0]


def test_overflow_reports_the_month_it_happened():
    with pytest.raises(InvalidParameters) as excinfo:
        project(1e308, 1e308, 12, 0.5)

    assert excinfo.value.errors == ["projection overflowed at month 1"]
