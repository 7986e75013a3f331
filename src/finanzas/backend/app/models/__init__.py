"""Typed request/response models shared across the calculation services.

Requests are parsed with Pydantic models (see :mod:`.api`) and normalised into
the frozen dataclasses below, which are the records the calculators and the
validation accumulator work with. Results are plain dataclasses as well so the
pure calculation functions never depend on the HTTP layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .api import (
    CompoundInterestRequest,
    CompoundInterestResponse,
    CompoundInterestSummary,
    CompoundInterestSummaryLabels,
    DetailEntry,
    ResponseMeta,
    SalaryBreakdown,
    SalaryRequest,
    SalaryResponse,
    SalarySummary,
    SalarySummaryLabels,
    YearlySnapshotEntry,
    format_field_errors,
)

__all__ = [
    "DEPOSIT_TIMINGS",
    "MARITAL_STATUSES",
    "CompoundInterestInput",
    "CompoundInterestRequest",
    "CompoundInterestResponse",
    "CompoundInterestResult",
    "CompoundInterestSummary",
    "CompoundInterestSummaryLabels",
    "DetailEntry",
    "IncomeTaxDetail",
    "ResponseMeta",
    "SalaryBreakdown",
    "SalaryInput",
    "SalaryRequest",
    "SalaryResponse",
    "SalaryResult",
    "SalarySummary",
    "SalarySummaryLabels",
    "YearlySnapshot",
    "YearlySnapshotEntry",
    "format_field_errors",
]

MARITAL_STATUSES: tuple[str, ...] = ("single", "married_no_income", "married_with_income")
DEPOSIT_TIMINGS: tuple[str, ...] = ("beginning", "end")


@dataclass(frozen=True)
class SalaryInput:
    """Normalised salary parameters for a single calculation."""

    gross_salary: float
    pay_frequency: str = "monthly"
    region: str = ""
    marital_status: str = "single"
    children_under_25: int = 0
    children_over_25: int = 0
    worker_disability: float = 0.0
    family_disability: float = 0.0
    year: int | None = None
    locale: str = "es"

    @property
    def total_children(self) -> int:
        return self.children_under_25 + self.children_over_25


@dataclass(frozen=True)
class IncomeTaxDetail:
    """Intermediate IRPF figures kept for the detail breakdown."""

    taxable_income: float
    personal_minimum: float
    taxable_base: float
    tax_before_region: float
    region_multiplier: float
    tax: float


@dataclass(frozen=True)
class SalaryResult:
    """Net salary breakdown derived from a :class:`SalaryInput`."""

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

    @property
    def total_worker_contributions(self) -> float:
        return self.social_security_worker + self.mei_worker + self.solidarity_worker

    @property
    def total_worker_deductions(self) -> float:
        return self.total_worker_contributions + self.irpf

    @property
    def total_employer_cost(self) -> float:
        return (
            self.gross_annual
            + self.social_security_employer
            + self.mei_employer
            + self.solidarity_employer
        )

    @property
    def effective_irpf_rate(self) -> float:
        if self.gross_annual <= 0:
            return 0.0
        return self.irpf / self.gross_annual


@dataclass(frozen=True)
class CompoundInterestInput:
    """Normalised compound interest parameters."""

    initial_balance: float = 0.0
    periodic_deposit: float = 0.0
    frequency: int = 12
    deposit_timing: str = "end"
    annual_interest_rate: float = 0.0
    years: int = 1
    locale: str = "es"

    @property
    def periodic_rate(self) -> float:
        return self.annual_interest_rate / 100 / self.frequency


@dataclass(frozen=True)
class YearlySnapshot:
    """Balance, cumulative deposits, and interest at a year boundary."""

    year: int
    balance: float
    interest: float
    deposits: float


@dataclass(frozen=True)
class CompoundInterestResult:
    """Future value and the year-by-year growth series."""

    future_value: float
    total_deposits: float
    total_interest: float
    yearly: tuple[YearlySnapshot, ...] = field(default_factory=tuple)
