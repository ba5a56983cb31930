"""HTTP routes for the Flask API."""

import logging
from datetime import date
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from investsim.core.export import export_filename, to_csv
from investsim.core.formatting import format_currency
from investsim.core.projection import InvalidParameters, project_parameters, summarize
from investsim.core.scenarios import ScenarioBook, ScenarioNotFound
from investsim.core.validation import OutOfRange, ensure_in_range
from investsim.schemas.projection import (
    DisplayValues,
    ProjectionRequest,
    ProjectionResponse,
    ProjectionResultOut,
    ProjectionSummaryOut,
)
from investsim.schemas.scenarios import (
    ScenarioComparisonOut,
    ScenarioOut,
    ScenarioRequest,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Malformed request bodies."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(OutOfRange)
def _handle_out_of_range(exc: OutOfRange):
    logger.info("rejected out-of-range parameters: %s", exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidParameters)
def _handle_invalid_parameters(exc: InvalidParameters):
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ScenarioNotFound)
def _handle_missing_scenario(exc: ScenarioNotFound):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


def _book() -> ScenarioBook:
    return current_app.extensions["scenario_book"]


def _engine_options() -> Dict[str, Any]:
    return {
        "base_year": current_app.config["LABEL_BASE_YEAR"],
        "locale": current_app.config["DISPLAY_LOCALE"],
    }


def _read_request(model):
    raw_payload = request.get_json(force=True, silent=False)
    payload = model.model_validate(raw_payload)
    ensure_in_range(
        payload.initial_capital,
        payload.monthly_contribution,
        payload.years,
        payload.annual_percent,
    )
    return payload


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify({"status": "ok"})


@api_bp.get("/defaults")
def defaults() -> Any:
    """Parameters the form starts with (and returns to on reset)."""
    payload = ProjectionRequest.model_validate(current_app.config["DEFAULT_PARAMETERS"])
    return jsonify(payload.model_dump(by_alias=True))


@api_bp.post("/projection")
def projection() -> Any:
    """Month-by-month projection plus summary metrics."""
    payload: ProjectionRequest = _read_request(ProjectionRequest)
    params = payload.to_parameters()
    result = project_parameters(params, **_engine_options())
    summary = summarize(params, result, current_app.config["ASSUMED_INFLATION_PERCENT"])

    currency = current_app.config["DISPLAY_CURRENCY"]
    locale = current_app.config["DISPLAY_LOCALE"]
    response = ProjectionResponse(
        parameters=payload,
        result=ProjectionResultOut.model_validate(result.model_dump()),
        summary=ProjectionSummaryOut.model_validate(summary.model_dump()),
        display=DisplayValues(
            final_balance=format_currency(result.final_balance, currency, locale),
            total_contribution=format_currency(result.total_contribution, currency, locale),
            total_gain=format_currency(result.total_gain, currency, locale),
        ),
    )
    logger.debug("projected %d months", params.duration_months)
    return jsonify(response.model_dump(by_alias=True))


@api_bp.post("/export")
def export() -> Response:
    """CSV report of the projection, listing every saved scenario."""
    payload: ProjectionRequest = _read_request(ProjectionRequest)
    result = project_parameters(payload.to_parameters(), **_engine_options())

    today = date.today()
    body = to_csv(result.rows, _book().list(), generated_on=today)
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(today)}"'},
    )


# ---------- Scenarios ----------


@api_bp.get("/scenarios")
def list_scenarios() -> Any:
    return jsonify(
        [ScenarioOut.from_scenario(s).model_dump(by_alias=True) for s in _book().list()]
    )


@api_bp.post("/scenarios")
def create_scenario() -> Any:
    """Save the given parameters as a new scenario."""
    payload: ScenarioRequest = _read_request(ScenarioRequest)
    scenario = _book().add(payload.to_parameters(), name=payload.name)
    return (
        jsonify(ScenarioOut.from_scenario(scenario).model_dump(by_alias=True)),
        HTTPStatus.CREATED,
    )


@api_bp.delete("/scenarios")
def reset_scenarios() -> Any:
    _book().clear()
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/scenarios/compare")
def compare_scenarios() -> Any:
    """One slot per saved scenario, in the order they were saved."""
    comparisons = _book().compare(**_engine_options())
    return jsonify(
        [ScenarioComparisonOut.from_comparison(c).model_dump(by_alias=True) for c in comparisons]
    )


@api_bp.get("/scenarios/<scenario_id>")
def get_scenario(scenario_id: str) -> Any:
    scenario = _book().get(scenario_id)
    return jsonify(ScenarioOut.from_scenario(scenario).model_dump(by_alias=True))


@api_bp.get("/scenarios/<scenario_id>/parameters")
def reload_scenario(scenario_id: str) -> Any:
    """Reload: a copy of the saved parameters, to become the active form values."""
    params = _book().reload(scenario_id)
    return jsonify(ProjectionRequest.from_parameters(params).model_dump(by_alias=True))


@api_bp.delete("/scenarios/<scenario_id>")
def delete_scenario(scenario_id: str) -> Any:
    _book().remove(scenario_id)
    return "", HTTPStatus.NO_CONTENT
