"""IRPF withholding: personal minimum, progressive scale, regional multiplier.

The regional multiplier scales the state scale result by a single factor per
autonomous community. It is a simplified approximation of the regional IRPF
scales, not a model of them.
"""

from __future__ import annotations

from finanzas.backend.app.models import IncomeTaxDetail, SalaryInput
from finanzas.backend.config.year_config import IncomeTaxConfig, PersonalMinimumConfig

from .utils import calculate_progressive_tax


def calculate_personal_minimum(params: SalaryInput, config: PersonalMinimumConfig) -> float:
    """Return the personal and family minimum for ``params``."""

    minimum = config.base

    if params.marital_status == "married_no_income":
        minimum += config.spouse_without_income

    minimum += config.children.amount_for_children(params.total_children)

    # Worker and family disability allowances are independent of each other.
    minimum += config.amount_for_disability(params.worker_disability)
    minimum += config.amount_for_disability(params.family_disability)

    return minimum


def calculate_income_tax(
    gross_annual: float,
    worker_contributions: float,
    params: SalaryInput,
    config: IncomeTaxConfig,
) -> IncomeTaxDetail:
    """Compute the annual IRPF withholding after deductible contributions."""

    taxable_income = gross_annual - worker_contributions
    personal_minimum = calculate_personal_minimum(params, config.personal_minimum)
    taxable_base = max(0.0, taxable_income - personal_minimum)

    tax_before_region = calculate_progressive_tax(taxable_base, config.brackets)
    multiplier = config.region_multiplier(params.region)

    return IncomeTaxDetail(
        taxable_income=taxable_income,
        personal_minimum=personal_minimum,
        taxable_base=taxable_base,
        tax_before_region=tax_before_region,
        region_multiplier=multiplier,
        tax=tax_before_region * multiplier,
    )


__all__ = ["calculate_income_tax", "calculate_personal_minimum"]
