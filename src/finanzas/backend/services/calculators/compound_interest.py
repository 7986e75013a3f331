"""Compound interest with periodic deposits (ordinary annuity or annuity-due)."""

from __future__ import annotations

import math

from finanzas.backend.app.models import (
    CompoundInterestInput,
    CompoundInterestResult,
    YearlySnapshot,
)


def future_value(params: CompoundInterestInput, periods: int) -> float:
    """Return the balance after ``periods`` compounding periods."""

    rate = params.periodic_rate
    try:
        growth = (1 + rate) ** periods
    except OverflowError:
        # Saturate like IEEE-754 instead of failing for huge rate and term pairs.
        growth = math.inf

    principal = params.initial_balance * growth if params.initial_balance else 0.0

    if not params.periodic_deposit:
        deposits = 0.0
    elif rate > 0:
        deposits = params.periodic_deposit * (growth - 1) / rate
        if params.deposit_timing == "beginning":
            deposits *= 1 + rate
    else:
        deposits = params.periodic_deposit * periods

    return principal + deposits


def deposits_to_date(params: CompoundInterestInput, periods: int) -> float:
    """Return the initial balance plus every deposit made in ``periods``."""

    return params.initial_balance + params.periodic_deposit * periods


def yearly_snapshot(params: CompoundInterestInput, year: int) -> YearlySnapshot:
    """Return the state of the investment at the end of ``year``."""

    periods = params.frequency * year
    balance = future_value(params, periods)
    deposits = deposits_to_date(params, periods)
    return YearlySnapshot(
        year=year,
        balance=balance,
        interest=balance - deposits,
        deposits=deposits,
    )


def project_compound_interest(params: CompoundInterestInput) -> CompoundInterestResult:
    """Project the future value and the year-by-year series for ``params``."""

    yearly = tuple(yearly_snapshot(params, year) for year in range(params.years + 1))
    final = yearly[-1]

    return CompoundInterestResult(
        future_value=final.balance,
        total_deposits=final.deposits,
        total_interest=final.interest,
        yearly=yearly,
    )


__all__ = [
    "project_compound_interest",
    "deposits_to_date",
    "future_value",
    "yearly_snapshot",
]
