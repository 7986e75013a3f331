"""Domain-specific calculation helpers."""

from .compound_interest import project_compound_interest
from .income_tax import calculate_income_tax, calculate_personal_minimum
from .social_security import (
    calculate_mei,
    calculate_social_security,
    calculate_solidarity_quota,
    contribution_base,
)
from .utils import (
    calculate_progressive_tax,
    cap_base,
    round_currency,
    round_rate,
)

__all__ = [
    "project_compound_interest",
    "calculate_income_tax",
    "calculate_mei",
    "calculate_personal_minimum",
    "calculate_progressive_tax",
    "calculate_social_security",
    "calculate_solidarity_quota",
    "cap_base",
    "contribution_base",
    "round_currency",
    "round_rate",
]
