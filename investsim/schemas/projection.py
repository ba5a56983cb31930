"""Data contracts for the projection endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from investsim.core.projection import InvalidParameters, ProjectionParameters


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class ProjectionRequest(CamelModel):
    """Parameters as the user enters them. Ranges are checked separately."""

    initial_capital: float = Field(..., description="Starting capital.")
    monthly_contribution: float = Field(..., description="Added at the start of every month.")
    years: int = Field(..., description="Projection length in whole years.")
    annual_percent: float = Field(
        ...,
        description="Assumed annual return in percent (8 means 8%).",
    )

    def to_parameters(self) -> ProjectionParameters:
        return ProjectionParameters.from_inputs(
            initial_capital=self.initial_capital,
            monthly_contribution=self.monthly_contribution,
            years=self.years,
            annual_percent=self.annual_percent,
        )

    @classmethod
    def from_parameters(cls, params: ProjectionParameters) -> "ProjectionRequest":
        """Whole-year parameters only; the request form has no month-level duration."""
        if params.duration_months % 12:
            raise InvalidParameters(
                [f"duration of {params.duration_months} months is not a whole number of years"]
            )
        return cls(
            initial_capital=params.initial_capital,
            monthly_contribution=params.monthly_contribution,
            years=params.duration_months // 12,
            annual_percent=round(params.annual_percent, 10),
        )


class MonthlySampleOut(CamelModel):
    month_label: str
    month_index: int = Field(..., ge=1)
    balance: int
    cumulative_contribution: int
    cumulative_gain: int


class ProjectionTotals(CamelModel):
    final_balance: float
    total_contribution: float
    total_gain: float
    yield_percent: float


class ProjectionResultOut(ProjectionTotals):
    rows: List[MonthlySampleOut]
    monthly_growth_rates: List[float]


class ProjectionSummaryOut(CamelModel):
    cagr: Optional[float] = None
    multiplier: float
    performance: str
    inflation_advantage_percent: float


class DisplayValues(CamelModel):
    """Currency strings for the headline numbers."""

    final_balance: str
    total_contribution: str
    total_gain: str


class ProjectionResponse(CamelModel):
    parameters: ProjectionRequest
    result: ProjectionResultOut
    summary: ProjectionSummaryOut
    display: DisplayValues
