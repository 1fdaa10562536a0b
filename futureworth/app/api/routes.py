"""HTTP routes for the Flask API."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable, Dict, Tuple, Type

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import BadRequest

from futureworth.core.compound import simulate_compound
from futureworth.core.ledger import aggregate_yearly
from futureworth.core.loan import simulate_loan
from futureworth.core.mortgage import simulate_mortgage
from futureworth.core.retirement import simulate_retirement
from futureworth.core.status import get_ping_message, python_version, uptime_seconds, utc_timestamp
from futureworth.schemas.amortization import LoanInput, MortgageInput
from futureworth.schemas.common import SimulationResult
from futureworth.schemas.growth import CompoundInput, RetirementInput
from futureworth.schemas.status import (
    EchoRequest,
    EchoResponse,
    HealthResponse,
    PingResponse,
    StatusResponse,
)

api_bp = Blueprint("api", __name__)

CALCULATORS: Dict[str, Tuple[Type[BaseModel], Callable[[Any], SimulationResult]]] = {
    "mortgage": (MortgageInput, simulate_mortgage),
    "loan": (LoanInput, simulate_loan),
    "compound": (CompoundInput, simulate_compound),
    "retirement": (RetirementInput, simulate_retirement),
}


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    current_app.logger.info("rejected %s: %d validation error(s)", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"error": exc.description}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


@api_bp.get("/health")
def health() -> Any:
    response = HealthResponse(status="ok", timestamp=utc_timestamp())
    return jsonify(response.model_dump())


@api_bp.get("/status")
def status() -> Any:
    response = StatusResponse(
        status="operational",
        environment=current_app.config["ENV_NAME"],
        version=current_app.config["API_VERSION"],
        uptime_seconds=uptime_seconds(),
        python=python_version(),
        timestamp=utc_timestamp(),
    )
    return jsonify(response.model_dump())


@api_bp.post("/echo")
def echo() -> Any:
    """Echo a message back for connectivity checks."""
    raw_payload = request.get_json(force=True, silent=True) or {}
    try:
        payload = EchoRequest.model_validate(raw_payload)
    except ValidationError:
        return jsonify({"error": "Message is required"}), HTTPStatus.BAD_REQUEST
    response = EchoResponse(echo=payload.message, length=len(payload.message), timestamp=utc_timestamp())
    return jsonify(response.model_dump())


@api_bp.post("/calc/<name>")
def calculate(name: str) -> Any:
    """Run one calculator over the posted inputs and return its ledger."""
    if name not in CALCULATORS:
        return jsonify({"error": f"unknown calculator: {name}"}), HTTPStatus.NOT_FOUND

    input_model, simulate = CALCULATORS[name]
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = input_model.model_validate(raw_payload)
    result = simulate(payload)

    body = result.model_dump(mode="json")
    if request.args.get("granularity") == "yearly":
        body["yearly"] = [bucket.model_dump(mode="json") for bucket in aggregate_yearly(result.ledger)]
    return jsonify(body)
