from finanzas.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from finanzas.backend.config.year_config import load_year_configuration


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert all(not issues for issues in results.values()), results


def test_validator_flags_invalid_mei_rate() -> None:
    config = load_year_configuration(2025)
    broken = config.model_copy(
        update={"mei": config.mei.model_copy(update={"worker_rate": 1.5})}
    )

    errors = validate_year_configuration(broken)

    assert any(error.startswith("mei:") and "between 0 and 1" in error for error in errors)


def test_validator_flags_unbalanced_solidarity_shares() -> None:
    config = load_year_configuration(2025)
    broken = config.model_copy(
        update={"solidarity": config.solidarity.model_copy(update={"worker_share": 0.5})}
    )

    errors = validate_year_configuration(broken)

    assert any("shares must add up to 1" in error for error in errors)


def test_validator_flags_missing_regions() -> None:
    config = load_year_configuration(2025)
    income_tax = config.income_tax.model_copy(
        update={"regions": tuple(config.income_tax.regions)[:-1]}
    )
    broken = config.model_copy(update={"income_tax": income_tax})

    errors = validate_year_configuration(broken)

    assert any("expected 19 regions, found 18" in error for error in errors)


def test_validator_flags_unsorted_compounding_frequencies() -> None:
    config = load_year_configuration(2025)
    savings = config.savings.model_copy(update={"compounding_frequencies": (12, 1, 4)})
    broken = config.model_copy(update={"savings": savings})

    errors = validate_year_configuration(broken)

    assert any(error.startswith("savings:") for error in errors)


def test_validator_cli_reports_ok(capsys) -> None:
    exit_code = main(["2025"])

    assert exit_code == 0
    assert "[2025] OK" in capsys.readouterr().out


def test_validator_cli_reports_unknown_year(capsys) -> None:
    exit_code = main(["1999"])

    assert exit_code == 1
    assert "[1999] failed to load configuration" in capsys.readouterr().out
