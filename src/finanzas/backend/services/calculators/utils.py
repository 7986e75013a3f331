"""Utility helpers for calculator modules."""

from __future__ import annotations

from collections.abc import Sequence

from finanzas.backend.config.year_config import TaxBracket


def cap_base(amount: float, maximum: float) -> float:
    """Clamp ``amount`` to the ``[0, maximum]`` contribution range."""

    if amount <= 0:
        return 0.0
    return min(amount, maximum)


def calculate_progressive_tax(amount: float, brackets: Sequence[TaxBracket]) -> float:
    """Calculate marginal tax for ``amount`` using ``brackets``."""

    return sum(bracket_amounts(amount, brackets), 0.0)


def bracket_amounts(amount: float, brackets: Sequence[TaxBracket]) -> list[float]:
    """Return the tax charged within each bracket for ``amount``.

    Brackets after the one containing ``amount`` contribute nothing, so the
    returned list is always as long as ``brackets``.
    """

    taxes = [0.0 for _ in brackets]
    if amount <= 0:
        return taxes

    lower_bound = 0.0

    for index, bracket in enumerate(brackets):
        upper = bracket.upper_bound
        if upper is None or amount < upper:
            taxes[index] = (amount - lower_bound) * bracket.rate
            break

        taxes[index] = (upper - lower_bound) * bracket.rate
        lower_bound = upper

    return taxes


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


def round_rate(value: float) -> float:
    """Round rate values to four decimals."""

    return round(value, 4)
