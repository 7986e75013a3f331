"""Pydantic models describing the fiscal year configuration schema."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _validate_bracket_sequence(brackets: Sequence[TaxBracket], scope: str) -> None:
    if not brackets:
        raise ConfigurationError(f"At least one {scope} bracket must be defined")
    last_upper: float | None = None
    for bracket in brackets[:-1]:
        upper = bracket.upper_bound
        if upper is None:
            raise ConfigurationError(f"Only the final {scope} bracket may be open")
        if last_upper is not None and upper <= last_upper:
            raise ConfigurationError(f"{scope.capitalize()} brackets must be in ascending order")
        last_upper = upper
    if brackets[-1].upper_bound is not None:
        raise ConfigurationError(f"Final {scope} bracket must have an open upper bound")


def _coerce_rate_mapping(value: Any, scope: str) -> Mapping[str, float]:
    if not isinstance(value, Mapping) or not value:
        raise ConfigurationError(f"{scope} must be a non-empty mapping of rates")
    return {str(key): float(rate) for key, rate in value.items()}


class TaxBracket(ImmutableModel):
    """Represents a single marginal bracket (income tax or surcharge)."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class AllowanceTier(ImmutableModel):
    """Amount granted once a count or percentage reaches ``minimum``."""

    minimum: float
    amount: float

    @model_validator(mode="after")
    def _validate_tier(self) -> AllowanceTier:
        if self.minimum < 0:
            raise ConfigurationError("Allowance tier minimums must be non-negative")
        if self.amount < 0:
            raise ConfigurationError("Allowance tier amounts must be non-negative")
        return self


def _highest_tier(tiers: Sequence[AllowanceTier], value: float) -> AllowanceTier | None:
    reached = [tier for tier in tiers if value >= tier.minimum]
    if not reached:
        return None
    return max(reached, key=lambda tier: tier.minimum)


class ChildrenAllowanceConfig(ImmutableModel):
    """Mutually exclusive child allowance tiers plus a per-child extension."""

    tiers: Sequence[AllowanceTier]
    additional_per_child: float = 0.0
    additional_after: int = 0

    @model_validator(mode="after")
    def _validate_children(self) -> ChildrenAllowanceConfig:
        if not self.tiers:
            raise ConfigurationError("Children allowance requires at least one tier")
        if self.additional_per_child < 0 or self.additional_after < 0:
            raise ConfigurationError("Children allowance extensions must be non-negative")
        return self

    def amount_for_children(self, children: int) -> float:
        tier = _highest_tier(self.tiers, children)
        if tier is None:
            return 0.0
        extra_children = children - self.additional_after
        if self.additional_per_child and extra_children > 0:
            return tier.amount + self.additional_per_child * extra_children
        return tier.amount


class PersonalMinimumConfig(ImmutableModel):
    """Personal and family minimum components for IRPF."""

    base: float
    spouse_without_income: float = 0.0
    children: ChildrenAllowanceConfig
    disability: Sequence[AllowanceTier] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _validate_minimum(self) -> PersonalMinimumConfig:
        if self.base < 0 or self.spouse_without_income < 0:
            raise ConfigurationError("Personal minimum amounts must be non-negative")
        return self

    def amount_for_disability(self, percentage: float) -> float:
        tier = _highest_tier(self.disability, percentage)
        return tier.amount if tier is not None else 0.0


class RegionConfig(ImmutableModel):
    """Autonomous community entry with its simplified IRPF multiplier."""

    code: str
    name: str
    multiplier: float = 1.0

    @model_validator(mode="after")
    def _validate_region(self) -> RegionConfig:
        if not self.code.strip():
            raise ConfigurationError("Region codes must be non-empty")
        if self.multiplier <= 0:
            raise ConfigurationError("Region multipliers must be positive")
        return self


class IncomeTaxConfig(ImmutableModel):
    """IRPF brackets, personal minimum, and regional multipliers."""

    brackets: Sequence[TaxBracket] = Field(alias="tax_brackets")
    personal_minimum: PersonalMinimumConfig
    regions: Sequence[RegionConfig]
    default_region_multiplier: float = 1.0

    @model_validator(mode="after")
    def _validate_income_tax(self) -> IncomeTaxConfig:
        _validate_bracket_sequence(self.brackets, "income tax")
        if not self.regions:
            raise ConfigurationError("At least one region must be configured")
        return self

    @property
    def region_codes(self) -> tuple[str, ...]:
        return tuple(region.code for region in self.regions)

    def get_region(self, code: str) -> RegionConfig | None:
        for region in self.regions:
            if region.code == code:
                return region
        return None

    def region_multiplier(self, code: str) -> float:
        region = self.get_region(code)
        if region is None:
            return self.default_region_multiplier
        return region.multiplier


class SocialSecurityConfig(ImmutableModel):
    """General-regime contribution rates capped at the maximum base."""

    max_contribution_base: float
    worker_rates: Mapping[str, float]
    employer_rates: Mapping[str, float]

    @field_validator("worker_rates", "employer_rates", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> Mapping[str, float]:
        return _coerce_rate_mapping(value, "Social security rates")

    @model_validator(mode="after")
    def _validate_rates(self) -> SocialSecurityConfig:
        if self.max_contribution_base <= 0:
            raise ConfigurationError("Maximum contribution base must be positive")
        for rate in (*self.worker_rates.values(), *self.employer_rates.values()):
            if rate < 0:
                raise ConfigurationError("Contribution rates must be non-negative")
        return self

    @property
    def worker_rate(self) -> float:
        return sum(self.worker_rates.values())

    @property
    def employer_rate(self) -> float:
        return sum(self.employer_rates.values())


class MEIConfig(ImmutableModel):
    """Intergenerational equity mechanism surcharge rates."""

    worker_rate: float
    employer_rate: float

    @model_validator(mode="after")
    def _validate_rates(self) -> MEIConfig:
        if self.worker_rate < 0 or self.employer_rate < 0:
            raise ConfigurationError("MEI rates must be non-negative")
        return self

    @property
    def total_rate(self) -> float:
        return self.worker_rate + self.employer_rate


class SolidarityConfig(ImmutableModel):
    """Solidarity quota applied to salary above the annual base cap.

    Bracket upper bounds are expressed on the excess over the threshold, in
    annual amounts.
    """

    monthly_base_cap: float
    periods_per_year: int = 12
    brackets: Sequence[TaxBracket]
    employer_share: float
    worker_share: float

    @model_validator(mode="after")
    def _validate_solidarity(self) -> SolidarityConfig:
        if self.monthly_base_cap <= 0 or self.periods_per_year <= 0:
            raise ConfigurationError("Solidarity threshold must be positive")
        _validate_bracket_sequence(self.brackets, "solidarity")
        if self.employer_share < 0 or self.worker_share < 0:
            raise ConfigurationError("Solidarity shares must be non-negative")
        return self

    @computed_field
    @property
    def annual_threshold(self) -> float:
        return self.monthly_base_cap * self.periods_per_year


class PayrollConfig(ImmutableModel):
    """Pay frequencies mapped to the number of periods per year."""

    frequencies: Mapping[str, int]
    default_frequency: str

    @field_validator("frequencies", mode="before")
    @classmethod
    def _coerce_frequencies(cls, value: Any) -> Mapping[str, int]:
        if not isinstance(value, Mapping) or not value:
            raise ConfigurationError("Payroll configuration must map frequencies to periods")
        return {str(key): int(periods) for key, periods in value.items()}

    @model_validator(mode="after")
    def _validate_payroll(self) -> PayrollConfig:
        if any(periods <= 0 for periods in self.frequencies.values()):
            raise ConfigurationError("Periods per year must be positive integers")
        if self.default_frequency not in self.frequencies:
            raise ConfigurationError(
                "Default pay frequency must be listed in the configured frequencies"
            )
        return self

    def periods_for(self, frequency: str) -> int:
        return self.frequencies[frequency]


class SalaryLimits(ImmutableModel):
    """Upper bounds accepted by the salary form."""

    max_gross_salary: float
    max_disability_percentage: float = 100.0

    @model_validator(mode="after")
    def _validate_limits(self) -> SalaryLimits:
        if self.max_gross_salary <= 0 or self.max_disability_percentage <= 0:
            raise ConfigurationError("Salary limits must be positive")
        return self


class SavingsConfig(ImmutableModel):
    """Compounding frequencies offered by the compound interest calculator."""

    compounding_frequencies: Sequence[int]
    default_frequency: int
    max_years: int = 100
    max_annual_interest_rate: float = 100.0

    @field_validator("compounding_frequencies", mode="before")
    @classmethod
    def _coerce_frequencies(cls, value: Any) -> Sequence[int]:
        if isinstance(value, Iterable) and not isinstance(value, str):
            return tuple(int(entry) for entry in value)
        raise ConfigurationError("Compounding frequencies must be an iterable of integers")

    @model_validator(mode="after")
    def _validate_savings(self) -> SavingsConfig:
        if not self.compounding_frequencies:
            raise ConfigurationError("At least one compounding frequency must be provided")
        if self.default_frequency not in self.compounding_frequencies:
            raise ConfigurationError(
                "Default compounding frequency must be listed in the allowed set"
            )
        if self.max_years < 1 or self.max_annual_interest_rate <= 0:
            raise ConfigurationError("Savings limits must be positive")
        return self


class YearConfiguration(ImmutableModel):
    """Structured representation of a fiscal year configuration."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    payroll: PayrollConfig
    limits: SalaryLimits
    social_security: SocialSecurityConfig
    mei: MEIConfig
    solidarity: SolidarityConfig
    income_tax: IncomeTaxConfig
    savings: SavingsConfig

    @model_validator(mode="before")
    @classmethod
    def _prepare_sections(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")
        return prepared

    @model_validator(mode="after")
    def _validate_year(self) -> Self:
        if self.year <= 0:
            raise ConfigurationError("Configuration year must be positive")
        return self


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported fiscal year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available fiscal year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "AllowanceTier",
    "ChildrenAllowanceConfig",
    "ConfigurationError",
    "ImmutableModel",
    "IncomeTaxConfig",
    "MEIConfig",
    "PayrollConfig",
    "PersonalMinimumConfig",
    "RegionConfig",
    "SalaryLimits",
    "SavingsConfig",
    "SocialSecurityConfig",
    "SolidarityConfig",
    "TaxBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "YearConfiguration",
]
