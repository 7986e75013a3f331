"""Social security contributions and the 2025 payroll surcharges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from finanzas.backend.config.year_config import (
    MEIConfig,
    SocialSecurityConfig,
    SolidarityConfig,
)

from .utils import bracket_amounts, cap_base


@dataclass(frozen=True)
class ContributionItem:
    """Single contribution concept applied to the capped base."""

    concept: str
    rate: float
    amount: float


@dataclass(frozen=True)
class SocialSecurityContributions:
    """Worker and employer contributions for a gross annual salary."""

    base: float
    worker: float
    employer: float
    worker_items: tuple[ContributionItem, ...]
    employer_items: tuple[ContributionItem, ...]


@dataclass(frozen=True)
class MEIContributions:
    """Intergenerational equity mechanism amounts."""

    base: float
    worker: float
    employer: float

    @property
    def total(self) -> float:
        return self.worker + self.employer


@dataclass(frozen=True)
class SolidarityQuota:
    """Solidarity quota on the salary portion above the annual threshold."""

    threshold: float
    excess: float
    total: float
    worker: float
    employer: float
    bracket_amounts: tuple[float, ...]


def contribution_base(gross_annual: float, config: SocialSecurityConfig) -> float:
    """Return the contribution base capped at the yearly maximum."""

    return cap_base(gross_annual, config.max_contribution_base)


def _itemise(base: float, rates: Mapping[str, float]) -> tuple[ContributionItem, ...]:
    return tuple(
        ContributionItem(concept=concept, rate=rate, amount=base * rate)
        for concept, rate in rates.items()
    )


def calculate_social_security(
    gross_annual: float, config: SocialSecurityConfig
) -> SocialSecurityContributions:
    """Compute worker and employer contributions on the capped base."""

    base = contribution_base(gross_annual, config)
    worker_items = _itemise(base, config.worker_rates)
    employer_items = _itemise(base, config.employer_rates)

    return SocialSecurityContributions(
        base=base,
        worker=sum((item.amount for item in worker_items), 0.0),
        employer=sum((item.amount for item in employer_items), 0.0),
        worker_items=worker_items,
        employer_items=employer_items,
    )


def calculate_mei(
    gross_annual: float, social_security: SocialSecurityConfig, config: MEIConfig
) -> MEIContributions:
    """Compute the MEI surcharge using the same capped base."""

    base = contribution_base(gross_annual, social_security)
    return MEIContributions(
        base=base,
        worker=base * config.worker_rate,
        employer=base * config.employer_rate,
    )


def calculate_solidarity_quota(
    gross_annual: float, config: SolidarityConfig
) -> SolidarityQuota:
    """Apply the marginal solidarity brackets to the excess over the threshold."""

    threshold = config.annual_threshold
    excess = gross_annual - threshold
    if excess <= 0:
        return SolidarityQuota(
            threshold=threshold,
            excess=0.0,
            total=0.0,
            worker=0.0,
            employer=0.0,
            bracket_amounts=tuple(0.0 for _ in config.brackets),
        )

    amounts = tuple(bracket_amounts(excess, config.brackets))
    total = sum(amounts, 0.0)

    return SolidarityQuota(
        threshold=threshold,
        excess=excess,
        total=total,
        worker=total * config.worker_share,
        employer=total * config.employer_share,
        bracket_amounts=amounts,
    )


__all__ = [
    "ContributionItem",
    "MEIContributions",
    "SocialSecurityContributions",
    "SolidarityQuota",
    "calculate_mei",
    "calculate_social_security",
    "calculate_solidarity_quota",
    "contribution_base",
]
