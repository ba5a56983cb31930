"""Plain-text (CSV) report of a projection and the saved scenarios."""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

from investsim.core.projection import MonthlySample
from investsim.core.scenarios import Scenario

REPORT_TITLE = "Investment Simulation - Report Export"
ROW_FIELDS = tuple(MonthlySample.model_fields)


def _plain(value: float) -> str:
    # 1000.0 -> "1000", 7.5 -> "7.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def scenario_line(scenario: Scenario) -> str:
    params = scenario.parameters
    return ",".join(
        [
            scenario.name,
            f"Initial: €{_plain(params.initial_capital)}",
            f"Monthly: €{_plain(params.monthly_contribution)}",
            f"Years: {_plain(params.years)}",
            f"Rate: {_plain(round(params.annual_percent, 10))}%",
        ]
    )


def to_csv(
    rows: Sequence[MonthlySample],
    scenarios: Sequence[Scenario],
    generated_on: date,
) -> str:
    """
    Title, date, one line per scenario, a blank line, then the row table.

    Fields are joined with bare commas; names containing a comma are not escaped.
    """
    if not rows:
        return ""

    lines: List[str] = [REPORT_TITLE, f"Date: {generated_on:%d.%m.%Y}", ""]

    lines.append("SCENARIOS:")
    lines.extend(scenario_line(scenario) for scenario in scenarios)
    lines.append("")

    lines.append(",".join(ROW_FIELDS))
    for row in rows:
        values = row.model_dump()
        lines.append(",".join(_plain(values[field]) for field in ROW_FIELDS))

    return "\n".join(lines) + "\n"


def export_filename(generated_on: date) -> str:
    return f"investment-simulation-{generated_on.isoformat()}.csv"
