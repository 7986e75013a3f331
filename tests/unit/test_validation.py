"""Unit tests for the field validation accumulators."""

from __future__ import annotations

import pytest

from finanzas.backend.app.localization import get_translator
from finanzas.backend.app.models import CompoundInterestInput, SalaryInput
from finanzas.backend.config.year_config import YearConfiguration
from finanzas.backend.services.validation import (
    InputValidationError,
    format_amount,
    validate_compound_interest_input,
    validate_salary_input,
)


def test_valid_salary_has_no_errors(config_2025: YearConfiguration) -> None:
    params = SalaryInput(gross_salary=30000, region="MD")

    assert validate_salary_input(params, config_2025) == {}


@pytest.mark.parametrize("gross", [0, -1])
def test_gross_salary_must_be_positive(config_2025: YearConfiguration, gross: float) -> None:
    errors = validate_salary_input(SalaryInput(gross_salary=gross, region="MD"), config_2025)

    assert errors == {"gross_salary": "El salario bruto debe ser mayor que 0."}


def test_gross_salary_upper_limit_is_inclusive(config_2025: YearConfiguration) -> None:
    at_limit = SalaryInput(gross_salary=1_000_000, region="MD")
    above = SalaryInput(gross_salary=1_000_001, region="MD")

    assert validate_salary_input(at_limit, config_2025) == {}
    errors = validate_salary_input(above, config_2025)
    assert errors["gross_salary"] == "El salario bruto no puede superar 1.000.000 €."


def test_errors_accumulate_across_fields(config_2025: YearConfiguration) -> None:
    params = SalaryInput(
        gross_salary=0,
        pay_frequency="yearly",
        region="",
        marital_status="widowed",
        children_under_25=-1,
        worker_disability=120,
        family_disability=-5,
    )

    errors = validate_salary_input(params, config_2025)

    assert set(errors) == {
        "gross_salary",
        "pay_frequency",
        "region",
        "marital_status",
        "children_under_25",
        "worker_disability",
        "family_disability",
    }
    assert errors["region"] == "Selecciona una comunidad autónoma."


def test_unknown_region_uses_english_catalogue(config_2025: YearConfiguration) -> None:
    params = SalaryInput(gross_salary=30000, region="XX", locale="en")

    errors = validate_salary_input(params, config_2025)

    assert errors == {"region": "Unknown autonomous community."}


def test_english_amount_formatting(config_2025: YearConfiguration) -> None:
    params = SalaryInput(gross_salary=2_000_000, region="MD")

    errors = validate_salary_input(params, config_2025, get_translator("en"))

    assert errors["gross_salary"] == "Gross salary cannot exceed €1,000,000."


def test_format_amount() -> None:
    assert format_amount(1234567, "es") == "1.234.567"
    assert format_amount(1234567, "en") == "1,234,567"


def test_valid_compound_interest_has_no_errors(config_2025: YearConfiguration) -> None:
    params = CompoundInterestInput(
        initial_balance=0, periodic_deposit=0, annual_interest_rate=0, years=1
    )

    assert validate_compound_interest_input(params, config_2025) == {}


def test_compound_interest_errors_accumulate(config_2025: YearConfiguration) -> None:
    params = CompoundInterestInput(
        initial_balance=-1,
        periodic_deposit=-1,
        frequency=3,
        deposit_timing="middle",
        annual_interest_rate=-0.5,
        years=0,
    )

    errors = validate_compound_interest_input(params, config_2025)

    assert set(errors) == {
        "initial_balance",
        "periodic_deposit",
        "frequency",
        "deposit_timing",
        "annual_interest_rate",
        "years",
    }


def test_input_validation_error_is_read_only() -> None:
    error = InputValidationError({"region": "missing"}, "Revisa los datos")

    assert str(error) == "Revisa los datos"
    assert isinstance(error, ValueError)
    with pytest.raises(TypeError):
        error.errors["region"] = "changed"  # type: ignore[index]


def test_input_validation_error_default_message() -> None:
    error = InputValidationError({"years": "too short"})

    assert str(error) == "years: too short"


def test_compound_interest_upper_limits(config_2025: YearConfiguration) -> None:
    params = CompoundInterestInput(
        initial_balance=1000,
        periodic_deposit=100,
        annual_interest_rate=1000,
        years=300,
        locale="en",
    )

    errors = validate_compound_interest_input(params, config_2025)

    assert errors == {
        "annual_interest_rate": "Interest rate cannot exceed 100%.",
        "years": "The term cannot exceed 100 years.",
    }


def test_compound_interest_upper_limits_are_inclusive(
    config_2025: YearConfiguration,
) -> None:
    params = CompoundInterestInput(annual_interest_rate=100, years=100)

    assert validate_compound_interest_input(params, config_2025) == {}
