"""CSV renderings of calculation results."""

from __future__ import annotations

import csv
from io import StringIO

from finanzas.backend.app.localization import Translator
from finanzas.backend.app.models import CompoundInterestResult, SalaryResult

from .calculators import round_currency


def _salary_rows(result: SalaryResult) -> list[tuple[str, float]]:
    return [
        ("gross_annual", result.gross_annual),
        ("social_security_worker", result.social_security_worker),
        ("mei_worker", result.mei_worker),
        ("solidarity_worker", result.solidarity_worker),
        ("irpf", result.irpf),
        ("net_annual", result.net_annual),
        ("social_security_employer", result.social_security_employer),
        ("mei_employer", result.mei_employer),
        ("solidarity_employer", result.solidarity_employer),
        ("total_employer_cost", result.total_employer_cost),
    ]


def render_salary_csv(result: SalaryResult, translator: Translator) -> str:
    """Return the salary breakdown as ``concept, annual, periodic`` rows."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(
        [
            translator("export.salary.concept"),
            translator("export.salary.annual"),
            translator("export.salary.periodic").format(period=result.period_name),
        ]
    )
    for key, amount in _salary_rows(result):
        writer.writerow(
            [
                translator(f"summary.salary.{key}"),
                f"{round_currency(amount):.2f}",
                f"{round_currency(amount / result.periods_per_year):.2f}",
            ]
        )
    return buffer.getvalue()


def render_compound_interest_csv(
    result: CompoundInterestResult, translator: Translator
) -> str:
    """Return one row per year boundary of the growth series."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(
        [
            translator("export.savings.year"),
            translator("export.savings.balance"),
            translator("export.savings.deposits"),
            translator("export.savings.interest"),
        ]
    )
    for snapshot in result.yearly:
        writer.writerow(
            [
                snapshot.year,
                f"{round_currency(snapshot.balance):.2f}",
                f"{round_currency(snapshot.deposits):.2f}",
                f"{round_currency(snapshot.interest):.2f}",
            ]
        )
    return buffer.getvalue()


__all__ = ["render_compound_interest_csv", "render_salary_csv"]
