"""Validate compound interest requests and serialise the growth projection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from finanzas.backend.app.localization import Translator, get_translator
from finanzas.backend.app.models import (
    CompoundInterestInput,
    CompoundInterestRequest,
    CompoundInterestResponse,
    CompoundInterestResult,
    format_field_errors,
)
from finanzas.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from .calculators import project_compound_interest, round_currency
from .profiling import new_timings, profile_section, timings_in_ms
from .validation import InputValidationError, validate_compound_interest_input

_LOGGER = logging.getLogger(__name__)

_FREQUENCY_LABEL_KEYS = {
    1: "frequencies.annual",
    2: "frequencies.semiannual",
    4: "frequencies.quarterly",
    12: "frequencies.monthly",
}


def frequency_label(frequency: int, translator: Translator) -> str:
    """Return the localised label for a compounding ``frequency``."""

    key = _FREQUENCY_LABEL_KEYS.get(frequency)
    if key is not None:
        return translator(key)
    return translator("frequencies.times_per_year").format(count=frequency)


def compute_compound_interest(params: CompoundInterestInput) -> CompoundInterestResult:
    """Return the projection for already validated ``params``."""

    return project_compound_interest(params)


def _parse_request(
    payload: Mapping[str, Any] | CompoundInterestRequest, translator: Translator
) -> CompoundInterestRequest:
    if isinstance(payload, CompoundInterestRequest):
        data: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return CompoundInterestRequest.model_validate(data)
    except ValidationError as exc:
        errors = format_field_errors(exc, CompoundInterestRequest, translator)
        _LOGGER.debug("Rejected compound interest payload: %s", errors)
        raise InputValidationError(errors, translator("errors.validation_failed")) from exc


def _normalise_payload(
    request: CompoundInterestRequest, config: YearConfiguration
) -> CompoundInterestInput:
    frequency = request.frequency
    if frequency is None:
        frequency = config.savings.default_frequency

    return CompoundInterestInput(
        initial_balance=request.initial_balance,
        periodic_deposit=request.periodic_deposit,
        frequency=frequency,
        deposit_timing=request.deposit_timing,
        annual_interest_rate=request.annual_interest_rate,
        years=request.years,
        locale=request.locale,
    )


def evaluate_compound_interest(
    payload: Mapping[str, Any] | CompoundInterestRequest,
) -> tuple[CompoundInterestInput, CompoundInterestResult, Translator]:
    """Parse, validate and compute ``payload`` without serialising it."""

    locale_hint = payload.get("locale") if isinstance(payload, Mapping) else payload.locale
    translator = get_translator(locale_hint if isinstance(locale_hint, str) else None)

    request_model = _parse_request(payload, translator)
    translator = get_translator(request_model.locale)

    config = load_year_configuration(default_year())
    params = _normalise_payload(request_model, config)

    errors = validate_compound_interest_input(params, config, translator)
    if errors:
        _LOGGER.debug("Compound interest input failed validation: %s", errors)
        raise InputValidationError(errors, translator("errors.validation_failed"))

    timings = new_timings()
    overall_start = perf_counter() if timings is not None else None

    with profile_section("projection", timings):
        result = compute_compound_interest(params)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug("calculate_compound_interest timings (ms): %s", timings_in_ms(timings))

    return params, result, translator


def calculate_compound_interest(
    payload: Mapping[str, Any] | CompoundInterestRequest,
) -> dict[str, Any]:
    """Validate ``payload`` and return the serialised projection response."""

    params, result, translator = evaluate_compound_interest(payload)

    summary = {
        "future_value": round_currency(result.future_value),
        "total_deposits": round_currency(result.total_deposits),
        "total_interest": round_currency(result.total_interest),
        "labels": {
            "future_value": translator("summary.savings.future_value"),
            "total_deposits": translator("summary.savings.total_deposits"),
            "total_interest": translator("summary.savings.total_interest"),
        },
    }

    yearly = [
        {
            "year": snapshot.year,
            "balance": round_currency(snapshot.balance),
            "interest": round_currency(snapshot.interest),
            "deposits": round_currency(snapshot.deposits),
        }
        for snapshot in result.yearly
    ]

    meta_payload = {
        "locale": translator.locale,
        "frequency": params.frequency,
        "frequency_label": frequency_label(params.frequency, translator),
        "deposit_timing": params.deposit_timing,
    }

    response_model = CompoundInterestResponse.model_validate(
        {"summary": summary, "yearly": yearly, "meta": meta_payload}
    )

    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = [
    "calculate_compound_interest",
    "compute_compound_interest",
    "evaluate_compound_interest",
    "frequency_label",
]
