from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from investsim.core.projection import (
    InvalidParameters,
    ProjectionParameters,
    ProjectionResult,
    project_parameters,
)

logger = logging.getLogger(__name__)

SCENARIO_COLORS = ("#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4")


class ScenarioNotFound(KeyError):
    def __init__(self, scenario_id: str):
        super().__init__(scenario_id)
        self.scenario_id = scenario_id

    def __str__(self) -> str:
        return f"scenario {self.scenario_id} not found"


class Scenario(BaseModel):
    """A saved snapshot of parameters; never edited after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str
    parameters: ProjectionParameters


class ScenarioComparison(BaseModel):
    """One slot of a comparison: either a result or the errors that prevented it."""

    model_config = ConfigDict(frozen=True)

    scenario: Scenario
    result: Optional[ProjectionResult] = None
    errors: List[str] = []

    @property
    def ok(self) -> bool:
        return self.result is not None


def compare(scenarios: Iterable[Scenario], **project_kwargs) -> List[ScenarioComparison]:
    """
    Run the engine once per scenario, keeping input order.

    Each scenario is evaluated on its own parameters (durations may differ);
    a scenario the engine rejects gets its errors attached to its slot and
    does not stop the rest of the batch.
    """
    out: List[ScenarioComparison] = []
    for scenario in scenarios:
        try:
            result = project_parameters(scenario.parameters, **project_kwargs)
        except InvalidParameters as exc:
            logger.warning("scenario %s rejected by engine: %s", scenario.id, exc)
            out.append(ScenarioComparison(scenario=scenario, errors=exc.errors))
            continue
        out.append(ScenarioComparison(scenario=scenario, result=result))
    return out


class ScenarioBook:
    """
    Session-lifetime scenario store, in insertion order.

    Nothing is persisted; a new book starts empty.
    """

    def __init__(self) -> None:
        self._scenarios: Dict[str, Scenario] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._scenarios)

    def add(self, parameters: ProjectionParameters, name: Optional[str] = None) -> Scenario:
        with self._lock:
            count = len(self._scenarios)
            scenario = Scenario(
                id=uuid.uuid4().hex,
                name=name or f"Scenario {count + 1}",
                color=SCENARIO_COLORS[count % len(SCENARIO_COLORS)],
                parameters=parameters,
            )
            self._scenarios[scenario.id] = scenario
        logger.info("saved scenario %s (%s)", scenario.id, scenario.name)
        return scenario

    def get(self, scenario_id: str) -> Scenario:
        with self._lock:
            scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            raise ScenarioNotFound(scenario_id)
        return scenario

    def remove(self, scenario_id: str) -> Scenario:
        with self._lock:
            scenario = self._scenarios.pop(scenario_id, None)
        if scenario is None:
            raise ScenarioNotFound(scenario_id)
        logger.info("removed scenario %s", scenario_id)
        return scenario

    def reload(self, scenario_id: str) -> ProjectionParameters:
        """Copy of the scenario's parameters, to become the active ones."""
        return self.get(scenario_id).parameters.model_copy()

    def list(self) -> List[Scenario]:
        with self._lock:
            return list(self._scenarios.values())

    def clear(self) -> None:
        with self._lock:
            self._scenarios.clear()
        logger.info("cleared all scenarios")

    def compare(self, **project_kwargs) -> List[ScenarioComparison]:
        return compare(self.list(), **project_kwargs)
