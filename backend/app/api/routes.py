"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.health import get_health_status
from backend.core.parsing import InputParseError
from backend.core.presentation import chart_series, summary_text
from backend.domain.inputs import inputs_from_form
from backend.domain.projection import ProjectionValidationError, run_projection
from backend.models import ProjectionInputs
from backend.schemas.health import HealthResponse
from backend.schemas.projection import ProjectionResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    return jsonify({"detail": errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InputParseError)
def _handle_parse_error(exc: InputParseError):
    """Unreadable form values block the projection entirely."""
    logger.info("Rejected form input %s: %s", exc.field, exc)
    return jsonify({"detail": str(exc), "field": exc.field}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ProjectionValidationError)
def _handle_projection_error(exc: ProjectionValidationError):
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


def _projection_response(inputs: ProjectionInputs) -> Dict[str, Any]:
    result = run_projection(inputs, max_years=current_app.config["MAX_PROJECTION_YEARS"])
    response = ProjectionResponse(
        result=result,
        charts=chart_series(result),
        summary=summary_text(result),
    )
    return response.model_dump(mode="json")


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(
        status=get_health_status(),
        environment=current_app.config["APP_ENV"],
    )
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Project an already-typed configuration."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    inputs = ProjectionInputs.model_validate(raw_payload)
    return jsonify(_projection_response(inputs))


@api_bp.post("/projection/form")
def projection_from_form() -> Any:
    """Project raw form values such as "$10,000" and "7" (percent)."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    if not isinstance(raw_payload, dict):
        raise InputParseError("Form payload must be a JSON object")
    inputs = inputs_from_form(raw_payload)
    return jsonify(_projection_response(inputs))
