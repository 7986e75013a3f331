"""REST endpoints for the salary and compound interest calculators."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, request

from finanzas.backend.services import (
    compound_interest_service,
    export,
    request_parser,
    response_builder,
    salary_service,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1/calculations")


@blueprint.post("/salary")
def create_salary_calculation() -> tuple[Any, int]:
    """Calculate the net salary for the submitted JSON payload."""

    payload = request_parser.parse_calculation_payload(request)
    result = salary_service.calculate_salary(payload)

    return response_builder.build_calculation_response(result)


@blueprint.post("/salary/csv")
def export_salary_calculation() -> Response:
    """Return the net salary breakdown as a CSV download."""

    payload = request_parser.parse_calculation_payload(request)
    evaluation = salary_service.evaluate_salary(payload)
    content = export.render_salary_csv(evaluation.result, evaluation.translator)

    return response_builder.build_csv_response(content, "salario-neto.csv")


@blueprint.post("/compound-interest")
def create_compound_interest_calculation() -> tuple[Any, int]:
    """Project the growth of an investment for the submitted JSON payload."""

    payload = request_parser.parse_calculation_payload(request)
    result = compound_interest_service.calculate_compound_interest(payload)

    return response_builder.build_calculation_response(result)


@blueprint.post("/compound-interest/csv")
def export_compound_interest_calculation() -> Response:
    """Return the yearly growth series as a CSV download."""

    payload = request_parser.parse_calculation_payload(request)
    _, result, translator = compound_interest_service.evaluate_compound_interest(payload)
    content = export.render_compound_interest_csv(result, translator)

    return response_builder.build_csv_response(content, "interes-compuesto.csv")
