"""Service-layer helpers for the finanzas backend."""

from .compound_interest_service import calculate_compound_interest
from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response
from .salary_service import calculate_salary
from .validation import InputValidationError

__all__ = [
    "InputValidationError",
    "build_calculation_response",
    "calculate_compound_interest",
    "calculate_salary",
    "parse_calculation_payload",
]
