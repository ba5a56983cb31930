from __future__ import annotations

from investsim.core.projection import project


def test_zero_growth_accumulates_contributions_only():
    """
    With a zero annual rate the balance is initial capital plus contributions, no growth boost.
    """
    result = project(1000.0, 500.0, 24, 0.0)

    assert result.final_balance == 1000.0 + 500.0 * 24
    assert result.total_gain == 0.0
    assert result.yield_percent == 0.0

    prev = 0
    for row in result.rows:
        expected = 1000 + 500 * row.month_index
        assert row.balance == expected
        assert row.cumulative_contribution == expected
        assert row.cumulative_gain == 0
        assert row.balance >= prev, "balance should not decrease without losses"
        prev = row.balance


def test_zero_growth_rates_track_contribution_share():
    result = project(0.0, 100.0, 2, 0.0)

    # first month starts from 0 and divides by the max(previous, 1) floor
    assert result.monthly_growth_rates[0] == 10000.0
    assert result.monthly_growth_rates[1] == 100.0
