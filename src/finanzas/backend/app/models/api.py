"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

__all__ = [
    "SalaryRequest",
    "CompoundInterestRequest",
    "SalarySummaryLabels",
    "SalarySummary",
    "SalaryBreakdown",
    "DetailEntry",
    "ResponseMeta",
    "SalaryResponse",
    "CompoundInterestSummaryLabels",
    "CompoundInterestSummary",
    "YearlySnapshotEntry",
    "CompoundInterestResponse",
    "format_field_errors",
]

_ERROR_MESSAGE_KEYS = {
    "missing": "errors.required",
    "extra_forbidden": "errors.unknown_field",
    "float_parsing": "errors.not_a_number",
    "float_type": "errors.not_a_number",
    "finite_number": "errors.not_a_number",
    "int_parsing": "errors.not_an_integer",
    "int_type": "errors.not_an_integer",
    "int_from_float": "errors.not_an_integer",
    "string_type": "errors.not_text",
    "number_type": "errors.not_a_number",
}

_NUMERIC_FIELDS = (
    "year",
    "gross_salary",
    "children_under_25",
    "children_over_25",
    "worker_disability",
    "family_disability",
    "initial_balance",
    "periodic_deposit",
    "frequency",
    "annual_interest_rate",
    "years",
)


class RequestModel(BaseModel):
    """Base for request payloads accepting snake_case or camelCase keys."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    @field_validator("locale", mode="before", check_fields=False)
    @classmethod
    def _normalise_locale(cls, value: Any) -> str:
        if value is None:
            return "es"
        text = str(value).strip()
        return text or "es"

    @field_validator(*_NUMERIC_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        # JSON true/false would otherwise coerce to 1 and 0.
        if isinstance(value, bool):
            raise PydanticCustomError("number_type", "Input should be a number")
        return value


def _strip_text(value: Any, *, upper: bool = False) -> Any:
    if value is None:
        return ""
    if isinstance(value, str):
        text = value.strip()
        return text.upper() if upper else text.lower()
    return value


class SalaryRequest(RequestModel):
    """Payload accepted by the net salary endpoint."""

    year: int | None = None
    locale: str = "es"
    gross_salary: float
    pay_frequency: str = "monthly"
    region: str = ""
    marital_status: str = "single"
    children_under_25: int = 0
    children_over_25: int = 0
    worker_disability: int = 0
    family_disability: int = 0

    @field_validator("pay_frequency", "marital_status", mode="before")
    @classmethod
    def _normalise_choice(cls, value: Any) -> Any:
        return _strip_text(value)

    @field_validator("region", mode="before")
    @classmethod
    def _normalise_region(cls, value: Any) -> Any:
        return _strip_text(value, upper=True)

    @field_validator(
        "children_under_25",
        "children_over_25",
        "worker_disability",
        "family_disability",
        mode="before",
    )
    @classmethod
    def _default_missing_counts(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0
        return value


class CompoundInterestRequest(RequestModel):
    """Payload accepted by the compound interest endpoint."""

    locale: str = "es"
    initial_balance: float = 0.0
    periodic_deposit: float = 0.0
    frequency: int | None = None
    deposit_timing: str = "end"
    annual_interest_rate: float
    years: int

    @field_validator("initial_balance", "periodic_deposit", mode="before")
    @classmethod
    def _default_missing_amounts(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0.0
        return value

    @field_validator("deposit_timing", mode="before")
    @classmethod
    def _normalise_timing(cls, value: Any) -> Any:
        return _strip_text(value) or "end"


class SalarySummaryLabels(BaseModel):
    """Localized labels for salary summary fields."""

    model_config = ConfigDict(extra="forbid")

    gross_annual: str
    gross_periodic: str
    social_security_worker: str
    social_security_employer: str
    mei_worker: str
    mei_employer: str
    solidarity_worker: str
    solidarity_employer: str
    irpf: str
    net_annual: str
    net_periodic: str
    total_worker_deductions: str
    total_employer_cost: str
    effective_irpf_rate: str


class SalarySummary(BaseModel):
    """Aggregated net salary figures."""

    model_config = ConfigDict(extra="forbid")

    gross_annual: float
    gross_periodic: float
    social_security_worker: float
    social_security_employer: float
    mei_worker: float
    mei_employer: float
    solidarity_worker: float
    solidarity_employer: float
    irpf: float
    net_annual: float
    net_periodic: float
    period_name: str
    periods_per_year: int
    total_worker_deductions: float
    total_employer_cost: float
    effective_irpf_rate: float
    labels: SalarySummaryLabels


class SalaryBreakdown(BaseModel):
    """Share of the gross salary taken by each component."""

    model_config = ConfigDict(extra="forbid")

    net: float
    social_security_worker: float
    irpf: float
    surcharges_worker: float
    social_security_employer: float


class DetailEntry(BaseModel):
    """Flexible structure for detailed line items in the response."""

    model_config = ConfigDict(extra="allow")

    category: str
    label: str


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    locale: str
    year: int | None = None
    region: str | None = None
    region_name: str | None = None
    pay_frequency: str | None = None
    frequency: int | None = None
    frequency_label: str | None = None
    deposit_timing: str | None = None


class SalaryResponse(BaseModel):
    """Full response payload produced by the salary service."""

    model_config = ConfigDict(extra="forbid")

    summary: SalarySummary
    breakdown: SalaryBreakdown
    details: list[DetailEntry]
    meta: ResponseMeta


class CompoundInterestSummaryLabels(BaseModel):
    """Localized labels for compound interest summary fields."""

    model_config = ConfigDict(extra="forbid")

    future_value: str
    total_deposits: str
    total_interest: str


class CompoundInterestSummary(BaseModel):
    """Final figures of a compound interest projection."""

    model_config = ConfigDict(extra="forbid")

    future_value: float
    total_deposits: float
    total_interest: float
    labels: CompoundInterestSummaryLabels


class YearlySnapshotEntry(BaseModel):
    """Serialised year boundary of the growth series."""

    model_config = ConfigDict(extra="forbid")

    year: int
    balance: float
    interest: float
    deposits: float


class CompoundInterestResponse(BaseModel):
    """Full response payload produced by the compound interest service."""

    model_config = ConfigDict(extra="forbid")

    summary: CompoundInterestSummary
    yearly: list[YearlySnapshotEntry]
    meta: ResponseMeta


def format_field_errors(
    error: ValidationError,
    model: type[BaseModel],
    translator: Callable[[str], str],
) -> dict[str, str]:
    """Map Pydantic issues onto ``{field: message}`` using snake_case names."""

    aliases = {
        info.alias: name
        for name, info in model.model_fields.items()
        if info.alias is not None
    }

    messages: dict[str, str] = {}
    for issue in error.errors():
        location = issue.get("loc", ())
        field = str(location[0]) if location else "__root__"
        field = aliases.get(field, field)
        if field in messages:
            continue
        key = _ERROR_MESSAGE_KEYS.get(issue.get("type", ""))
        messages[field] = translator(key) if key else issue.get("msg", "Invalid value")
    return messages
