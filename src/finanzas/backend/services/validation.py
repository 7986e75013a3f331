"""Field-level validation for calculator inputs.

Every rule runs on every call and failures accumulate into a ``{field:
message}`` mapping; an empty mapping means the input can be calculated.
Services raise :class:`InputValidationError` with the mapping so callers never
receive a partial result.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from finanzas.backend.app.localization import get_translator
from finanzas.backend.app.models import (
    DEPOSIT_TIMINGS,
    MARITAL_STATUSES,
    CompoundInterestInput,
    SalaryInput,
)
from finanzas.backend.config.year_config import YearConfiguration

FieldErrors = dict[str, str]
Translate = Callable[[str], str]


class InputValidationError(ValueError):
    """Raised when calculator inputs fail one or more field checks."""

    def __init__(self, errors: Mapping[str, str], message: str | None = None) -> None:
        self.errors: Mapping[str, str] = MappingProxyType(dict(errors))
        summary = message or "; ".join(
            f"{field}: {text}" for field, text in self.errors.items()
        )
        super().__init__(summary)


def format_amount(value: float, locale: str) -> str:
    """Format a whole euro amount with the locale's thousands separator."""

    text = f"{value:,.0f}"
    if locale == "es":
        return text.replace(",", ".")
    return text


def validate_salary_input(
    params: SalaryInput,
    config: YearConfiguration,
    translator: Translate | None = None,
) -> FieldErrors:
    """Return field errors for a salary calculation request."""

    translate = translator or get_translator(params.locale)
    limits = config.limits
    errors: FieldErrors = {}

    if params.gross_salary <= 0:
        errors["gross_salary"] = translate("errors.gross_salary.not_positive")
    elif params.gross_salary > limits.max_gross_salary:
        locale = getattr(translate, "locale", params.locale)
        errors["gross_salary"] = translate("errors.gross_salary.too_high").format(
            maximum=format_amount(limits.max_gross_salary, locale)
        )

    if params.children_under_25 < 0:
        errors["children_under_25"] = translate("errors.children.negative")
    if params.children_over_25 < 0:
        errors["children_over_25"] = translate("errors.children.negative")

    for field in ("worker_disability", "family_disability"):
        value = getattr(params, field)
        if value < 0 or value > limits.max_disability_percentage:
            errors[field] = translate("errors.disability.out_of_range")

    if not params.region:
        errors["region"] = translate("errors.region.required")
    elif params.region not in config.income_tax.region_codes:
        errors["region"] = translate("errors.region.unknown")

    if params.pay_frequency not in config.payroll.frequencies:
        errors["pay_frequency"] = translate("errors.pay_frequency.invalid")

    if params.marital_status not in MARITAL_STATUSES:
        errors["marital_status"] = translate("errors.marital_status.invalid")

    return errors


def validate_compound_interest_input(
    params: CompoundInterestInput,
    config: YearConfiguration,
    translator: Translate | None = None,
) -> FieldErrors:
    """Return field errors for a compound interest calculation request."""

    translate = translator or get_translator(params.locale)
    savings = config.savings
    errors: FieldErrors = {}

    if params.initial_balance < 0:
        errors["initial_balance"] = translate("errors.initial_balance.negative")
    if params.periodic_deposit < 0:
        errors["periodic_deposit"] = translate("errors.periodic_deposit.negative")
    if params.annual_interest_rate < 0:
        errors["annual_interest_rate"] = translate("errors.annual_interest_rate.negative")
    elif params.annual_interest_rate > savings.max_annual_interest_rate:
        errors["annual_interest_rate"] = translate(
            "errors.annual_interest_rate.too_high"
        ).format(maximum=f"{savings.max_annual_interest_rate:g}")
    if params.years <= 0:
        errors["years"] = translate("errors.years.not_positive")
    elif params.years > savings.max_years:
        errors["years"] = translate("errors.years.too_long").format(
            maximum=savings.max_years
        )

    if params.frequency not in savings.compounding_frequencies:
        errors["frequency"] = translate("errors.frequency.invalid")

    if params.deposit_timing not in DEPOSIT_TIMINGS:
        errors["deposit_timing"] = translate("errors.deposit_timing.invalid")

    return errors


__all__ = [
    "FieldErrors",
    "InputValidationError",
    "format_amount",
    "validate_compound_interest_input",
    "validate_salary_input",
]
