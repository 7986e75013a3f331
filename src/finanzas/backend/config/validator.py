"""Utilities for validating fiscal year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Sequence

from .year_config import (
    IncomeTaxConfig,
    MEIConfig,
    PayrollConfig,
    SavingsConfig,
    SocialSecurityConfig,
    SolidarityConfig,
    TaxBracket,
    YearConfiguration,
    available_years,
    load_year_configuration,
)

EXPECTED_REGION_COUNT = 19
_SHARE_TOLERANCE = 1e-9


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_rate(scope: str, label: str, value: float) -> list[str]:
    if value < 0 or value > 1:
        return [_format_scope(scope, f"{label} rate {value} must be between 0 and 1")]
    return []


def _validate_brackets(scope: str, brackets: Sequence[TaxBracket]) -> list[str]:
    errors: list[str] = []

    for index, bracket in enumerate(brackets):
        errors.extend(_validate_rate(scope, f"bracket {index + 1}", bracket.rate))

    rates = [bracket.rate for bracket in brackets]
    if rates != sorted(rates):
        errors.append(_format_scope(scope, "bracket rates should not decrease"))

    return errors


def _validate_payroll(payroll: PayrollConfig) -> list[str]:
    errors: list[str] = []
    periods = list(payroll.frequencies.values())

    if periods != sorted(periods):
        errors.append(
            _format_scope(
                "payroll",
                "frequencies should be listed from fewest to most periods per year",
            )
        )

    duplicates = [value for value, count in Counter(periods).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "payroll",
                f"duplicate periods per year detected: {sorted(duplicates)}",
            )
        )

    return errors


def _validate_social_security(config: SocialSecurityConfig) -> list[str]:
    errors: list[str] = []

    for label, value in config.worker_rates.items():
        errors.extend(_validate_rate("social_security.worker_rates", label, value))
    for label, value in config.employer_rates.items():
        errors.extend(_validate_rate("social_security.employer_rates", label, value))

    if config.worker_rate >= config.employer_rate:
        errors.append(
            _format_scope(
                "social_security",
                "worker contributions are expected to be lower than employer contributions",
            )
        )

    return errors


def _validate_mei(config: MEIConfig) -> list[str]:
    errors: list[str] = []
    errors.extend(_validate_rate("mei", "worker", config.worker_rate))
    errors.extend(_validate_rate("mei", "employer", config.employer_rate))
    return errors


def _validate_solidarity(
    config: SolidarityConfig, social_security: SocialSecurityConfig
) -> list[str]:
    errors = _validate_brackets("solidarity.brackets", config.brackets)

    total_share = config.employer_share + config.worker_share
    if abs(total_share - 1.0) > _SHARE_TOLERANCE:
        errors.append(
            _format_scope(
                "solidarity",
                f"employer and worker shares must add up to 1 (found {total_share})",
            )
        )

    if config.annual_threshold < social_security.max_contribution_base:
        errors.append(
            _format_scope(
                "solidarity",
                "annual threshold cannot be lower than the maximum contribution base",
            )
        )

    return errors


def _validate_income_tax(config: IncomeTaxConfig) -> list[str]:
    errors = _validate_brackets("income_tax.brackets", config.brackets)

    codes = [region.code for region in config.regions]
    duplicates = [code for code, count in Counter(codes).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "income_tax.regions",
                f"duplicate region codes detected: {sorted(duplicates)}",
            )
        )

    if len(set(codes)) != EXPECTED_REGION_COUNT:
        errors.append(
            _format_scope(
                "income_tax.regions",
                f"expected {EXPECTED_REGION_COUNT} regions, found {len(set(codes))}",
            )
        )

    if config.default_region_multiplier <= 0:
        errors.append(
            _format_scope("income_tax", "default region multiplier must be positive")
        )

    children = config.personal_minimum.children
    amounts = [tier.amount for tier in sorted(children.tiers, key=lambda tier: tier.minimum)]
    if amounts != sorted(amounts):
        errors.append(
            _format_scope(
                "income_tax.personal_minimum.children",
                "allowance tiers should not decrease as the number of children grows",
            )
        )

    return errors


def _validate_savings(config: SavingsConfig) -> list[str]:
    errors: list[str] = []
    frequencies = list(config.compounding_frequencies)

    if any(value <= 0 for value in frequencies):
        errors.append(
            _format_scope("savings", "compounding frequencies must be positive integers")
        )
    if frequencies != sorted(set(frequencies)):
        errors.append(
            _format_scope("savings", "compounding frequencies should be unique and sorted")
        )

    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_payroll(config.payroll))
    errors.extend(_validate_social_security(config.social_security))
    errors.extend(_validate_mei(config.mei))
    errors.extend(_validate_solidarity(config.solidarity, config.social_security))
    errors.extend(_validate_income_tax(config.income_tax))
    errors.extend(_validate_savings(config.savings))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured fiscal years and report issues helpful to contributors."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except FileNotFoundError as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
