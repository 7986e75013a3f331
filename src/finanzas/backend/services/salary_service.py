"""Orchestrate validation and the net salary calculation.

The service turns a request payload into a :class:`SalaryInput`, runs the
field checks, and then chains the social security, MEI, solidarity quota and
IRPF calculators. ``compute_salary`` is the pure entry point used by tests
and scripts; ``calculate_salary`` adds parsing, validation and serialisation
for the HTTP layer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from finanzas.backend.app.localization import Translator, get_translator
from finanzas.backend.app.models import (
    IncomeTaxDetail,
    SalaryInput,
    SalaryRequest,
    SalaryResponse,
    SalaryResult,
    format_field_errors,
)
from finanzas.backend.config.year_config import (
    YearConfiguration,
    available_years,
    default_year,
    load_year_configuration,
)

from .calculators import (
    calculate_income_tax,
    calculate_mei,
    calculate_social_security,
    calculate_solidarity_quota,
    round_currency,
    round_rate,
)
from .calculators.social_security import (
    MEIContributions,
    SocialSecurityContributions,
    SolidarityQuota,
)
from .profiling import new_timings, profile_section, timings_in_ms
from .validation import InputValidationError, validate_salary_input

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalaryComponents:
    """Intermediate calculator outputs for a single salary."""

    social_security: SocialSecurityContributions
    mei: MEIContributions
    solidarity: SolidarityQuota
    income_tax: IncomeTaxDetail


def calculate_components(
    params: SalaryInput,
    config: YearConfiguration,
    timings: dict[str, float] | None = None,
) -> SalaryComponents:
    """Run every salary calculator in dependency order."""

    gross = params.gross_salary

    with profile_section("social_security", timings):
        social_security = calculate_social_security(gross, config.social_security)
    with profile_section("mei", timings):
        mei = calculate_mei(gross, config.social_security, config.mei)
    with profile_section("solidarity", timings):
        solidarity = calculate_solidarity_quota(gross, config.solidarity)

    deductible = social_security.worker + mei.worker + solidarity.worker
    with profile_section("income_tax", timings):
        income_tax = calculate_income_tax(gross, deductible, params, config.income_tax)

    return SalaryComponents(
        social_security=social_security,
        mei=mei,
        solidarity=solidarity,
        income_tax=income_tax,
    )


def build_salary_result(
    params: SalaryInput,
    config: YearConfiguration,
    components: SalaryComponents,
    translator: Translator,
) -> SalaryResult:
    """Assemble the :class:`SalaryResult` from calculator outputs."""

    gross_annual = params.gross_salary
    social_security = components.social_security
    mei = components.mei
    solidarity = components.solidarity
    irpf = components.income_tax.tax

    net_annual = gross_annual - (social_security.worker + mei.worker + solidarity.worker + irpf)
    periods = config.payroll.periods_for(params.pay_frequency)

    return SalaryResult(
        gross_annual=gross_annual,
        gross_periodic=gross_annual / periods,
        social_security_worker=social_security.worker,
        social_security_employer=social_security.employer,
        mei_worker=mei.worker,
        mei_employer=mei.employer,
        solidarity_worker=solidarity.worker,
        solidarity_employer=solidarity.employer,
        irpf=irpf,
        net_annual=net_annual,
        net_periodic=net_annual / periods,
        period_name=translator(f"periods.{params.pay_frequency}"),
        periods_per_year=periods,
    )


def compute_salary(
    params: SalaryInput,
    config: YearConfiguration,
    translator: Translator | None = None,
) -> SalaryResult:
    """Return the net salary breakdown for already validated ``params``."""

    translate = translator or get_translator(params.locale)
    components = calculate_components(params, config)
    return build_salary_result(params, config, components, translate)


def _resolve_year(requested: int | None) -> tuple[int, bool]:
    """Return the year to load and whether the requested year is supported."""

    if requested is None:
        return default_year(), True
    if requested in available_years():
        return requested, True
    return default_year(), False


def _parse_request(
    payload: Mapping[str, Any] | SalaryRequest, translator: Translator
) -> SalaryRequest:
    if isinstance(payload, SalaryRequest):
        data: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return SalaryRequest.model_validate(data)
    except ValidationError as exc:
        errors = format_field_errors(exc, SalaryRequest, translator)
        _LOGGER.debug("Rejected salary payload: %s", errors)
        raise InputValidationError(errors, translator("errors.validation_failed")) from exc


def _normalise_payload(request: SalaryRequest, year: int) -> SalaryInput:
    return SalaryInput(
        gross_salary=request.gross_salary,
        pay_frequency=request.pay_frequency,
        region=request.region,
        marital_status=request.marital_status,
        children_under_25=request.children_under_25,
        children_over_25=request.children_over_25,
        worker_disability=request.worker_disability,
        family_disability=request.family_disability,
        year=year,
        locale=request.locale,
    )


def _share_of_gross(amount: float, gross: float) -> float:
    return round_rate(amount / gross) if gross > 0 else 0.0


def _build_details(
    config: YearConfiguration,
    components: SalaryComponents,
    translator: Translator,
) -> list[dict[str, Any]]:
    social_security = components.social_security
    items = [
        {
            "concept": item.concept,
            "party": party,
            "label": translator(f"details.social_security.{item.concept}"),
            "rate": item.rate,
            "amount": round_currency(item.amount),
        }
        for party, party_items in (
            ("worker", social_security.worker_items),
            ("employer", social_security.employer_items),
        )
        for item in party_items
    ]

    mei = components.mei
    solidarity = components.solidarity
    income_tax = components.income_tax

    brackets = []
    for bracket, amount in zip(config.solidarity.brackets, solidarity.bracket_amounts):
        brackets.append(
            {
                "upper": bracket.upper_bound,
                "rate": bracket.rate,
                "amount": round_currency(amount),
            }
        )

    return [
        {
            "category": "social_security",
            "label": translator("details.social_security.title"),
            "contribution_base": round_currency(social_security.base),
            "worker_total": round_currency(social_security.worker),
            "employer_total": round_currency(social_security.employer),
            "items": items,
        },
        {
            "category": "mei",
            "label": translator("details.mei.title"),
            "contribution_base": round_currency(mei.base),
            "worker_rate": config.mei.worker_rate,
            "employer_rate": config.mei.employer_rate,
            "worker": round_currency(mei.worker),
            "employer": round_currency(mei.employer),
            "total": round_currency(mei.total),
        },
        {
            "category": "solidarity",
            "label": translator("details.solidarity.title"),
            "threshold": round_currency(solidarity.threshold),
            "excess": round_currency(solidarity.excess),
            "total": round_currency(solidarity.total),
            "worker": round_currency(solidarity.worker),
            "employer": round_currency(solidarity.employer),
            "brackets": brackets,
        },
        {
            "category": "irpf",
            "label": translator("details.irpf.title"),
            "taxable_income": round_currency(income_tax.taxable_income),
            "personal_minimum": round_currency(income_tax.personal_minimum),
            "taxable_base": round_currency(income_tax.taxable_base),
            "tax_before_region": round_currency(income_tax.tax_before_region),
            "region_multiplier": income_tax.region_multiplier,
            "tax": round_currency(income_tax.tax),
        },
    ]


def _summary_labels(translator: Translator) -> dict[str, str]:
    keys = (
        "gross_annual",
        "gross_periodic",
        "social_security_worker",
        "social_security_employer",
        "mei_worker",
        "mei_employer",
        "solidarity_worker",
        "solidarity_employer",
        "irpf",
        "net_annual",
        "net_periodic",
        "total_worker_deductions",
        "total_employer_cost",
        "effective_irpf_rate",
    )
    return {key: translator(f"summary.salary.{key}") for key in keys}


@dataclass(frozen=True)
class SalaryEvaluation:
    """Validated input together with every calculation output."""

    params: SalaryInput
    config: YearConfiguration
    components: SalaryComponents
    result: SalaryResult
    translator: Translator


def evaluate_salary(payload: Mapping[str, Any] | SalaryRequest) -> SalaryEvaluation:
    """Parse, validate and compute ``payload`` without serialising it."""

    locale_hint = payload.get("locale") if isinstance(payload, Mapping) else payload.locale
    translator = get_translator(locale_hint if isinstance(locale_hint, str) else None)

    request_model = _parse_request(payload, translator)
    translator = get_translator(request_model.locale)

    year, year_supported = _resolve_year(request_model.year)
    config = load_year_configuration(year)
    params = _normalise_payload(request_model, year)

    errors = validate_salary_input(params, config, translator)
    if not year_supported:
        errors["year"] = translator("errors.year.unsupported")
    if errors:
        _LOGGER.debug("Salary input failed validation: %s", errors)
        raise InputValidationError(errors, translator("errors.validation_failed"))

    timings = new_timings()
    overall_start = perf_counter() if timings is not None else None

    components = calculate_components(params, config, timings)
    result = build_salary_result(params, config, components, translator)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_salary timings (ms): %s",
            timings_in_ms(timings),
        )

    return SalaryEvaluation(
        params=params,
        config=config,
        components=components,
        result=result,
        translator=translator,
    )


def calculate_salary(payload: Mapping[str, Any] | SalaryRequest) -> dict[str, Any]:
    """Validate ``payload`` and return the serialised net salary response."""

    evaluation = evaluate_salary(payload)
    params = evaluation.params
    config = evaluation.config
    components = evaluation.components
    result = evaluation.result
    translator = evaluation.translator

    gross = result.gross_annual

    summary: dict[str, Any] = {
        "gross_annual": round_currency(result.gross_annual),
        "gross_periodic": round_currency(result.gross_periodic),
        "social_security_worker": round_currency(result.social_security_worker),
        "social_security_employer": round_currency(result.social_security_employer),
        "mei_worker": round_currency(result.mei_worker),
        "mei_employer": round_currency(result.mei_employer),
        "solidarity_worker": round_currency(result.solidarity_worker),
        "solidarity_employer": round_currency(result.solidarity_employer),
        "irpf": round_currency(result.irpf),
        "net_annual": round_currency(result.net_annual),
        "net_periodic": round_currency(result.net_periodic),
        "period_name": result.period_name,
        "periods_per_year": result.periods_per_year,
        "total_worker_deductions": round_currency(result.total_worker_deductions),
        "total_employer_cost": round_currency(result.total_employer_cost),
        "effective_irpf_rate": round_rate(result.effective_irpf_rate),
        "labels": _summary_labels(translator),
    }

    breakdown = {
        "net": _share_of_gross(result.net_annual, gross),
        "social_security_worker": _share_of_gross(result.social_security_worker, gross),
        "irpf": _share_of_gross(result.irpf, gross),
        "surcharges_worker": _share_of_gross(
            result.mei_worker + result.solidarity_worker, gross
        ),
        "social_security_employer": _share_of_gross(result.social_security_employer, gross),
    }

    region = config.income_tax.get_region(params.region)
    meta_payload: dict[str, Any] = {
        "year": params.year,
        "locale": translator.locale,
        "region": params.region,
        "region_name": region.name if region is not None else None,
        "pay_frequency": params.pay_frequency,
    }

    response_model = SalaryResponse.model_validate(
        {
            "summary": summary,
            "breakdown": breakdown,
            "details": _build_details(config, components, translator),
            "meta": meta_payload,
        }
    )

    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = [
    "SalaryComponents",
    "SalaryEvaluation",
    "build_salary_result",
    "calculate_components",
    "calculate_salary",
    "compute_salary",
    "evaluate_salary",
]
