"""Data contracts for the scenario endpoints."""

from typing import List, Optional

from pydantic import Field

from investsim.core.scenarios import Scenario, ScenarioComparison
from investsim.schemas.projection import CamelModel, ProjectionRequest, ProjectionTotals


class ScenarioRequest(ProjectionRequest):
    name: Optional[str] = Field(None, max_length=80)


class ScenarioOut(CamelModel):
    id: str
    name: str
    color: str
    parameters: ProjectionRequest

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> "ScenarioOut":
        return cls(
            id=scenario.id,
            name=scenario.name,
            color=scenario.color,
            parameters=ProjectionRequest.from_parameters(scenario.parameters),
        )


class ScenarioComparisonOut(CamelModel):
    scenario: ScenarioOut
    ok: bool
    result: Optional[ProjectionTotals] = None
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def from_comparison(cls, comparison: ScenarioComparison) -> "ScenarioComparisonOut":
        totals = None
        if comparison.result is not None:
            totals = ProjectionTotals.model_validate(comparison.result.model_dump())
        return cls(
            scenario=ScenarioOut.from_scenario(comparison.scenario),
            ok=comparison.ok,
            result=totals,
            errors=list(comparison.errors),
        )
