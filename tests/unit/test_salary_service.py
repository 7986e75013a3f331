"""Unit tests for the salary orchestration service."""

from __future__ import annotations

import logging

import pytest

from finanzas.backend.app.models import SalaryInput
from finanzas.backend.config.year_config import YearConfiguration
from finanzas.backend.services import InputValidationError, calculate_salary
from finanzas.backend.services.salary_service import compute_salary, evaluate_salary


def _payload(**overrides) -> dict:
    payload = {
        "gross_salary": 30000,
        "pay_frequency": "monthly",
        "region": "MD",
        "marital_status": "single",
    }
    payload.update(overrides)
    return payload


def test_compute_salary_reference_case(config_2025: YearConfiguration) -> None:
    params = SalaryInput(gross_salary=30000, region="MD")

    result = compute_salary(params, config_2025)

    assert result.social_security_worker == pytest.approx(1905)
    assert result.mei_worker == pytest.approx(39)
    assert result.solidarity_worker == 0
    assert result.irpf == pytest.approx(4917.3)
    assert result.net_annual == pytest.approx(23138.7)
    assert result.net_periodic == pytest.approx(23138.7 / 12)
    assert result.period_name == "mes"
    assert result.total_employer_cost == pytest.approx(30000 + 9165 + 201)


@pytest.mark.parametrize("gross", [5000, 30000, 53760, 64798.8, 250000, 1_000_000])
@pytest.mark.parametrize("frequency", ["monthly", "biweekly", "weekly", "daily"])
def test_net_salary_reconciles(
    config_2025: YearConfiguration, gross: float, frequency: str
) -> None:
    params = SalaryInput(gross_salary=gross, pay_frequency=frequency, region="VC")

    result = compute_salary(params, config_2025)

    deductions = (
        result.social_security_worker
        + result.mei_worker
        + result.solidarity_worker
        + result.irpf
    )
    assert result.net_annual == pytest.approx(gross - deductions)
    assert result.net_periodic * result.periods_per_year == pytest.approx(result.net_annual)
    assert result.gross_periodic * result.periods_per_year == pytest.approx(gross)
    assert result.irpf >= 0


def test_low_salary_pays_no_irpf(config_2025: YearConfiguration) -> None:
    result = compute_salary(SalaryInput(gross_salary=5000, region="GA"), config_2025)

    assert result.irpf == 0
    assert result.effective_irpf_rate == 0


def test_calculate_salary_serialises_rounded_response() -> None:
    response = calculate_salary(_payload())

    summary = response["summary"]
    assert summary["gross_annual"] == 30000
    assert summary["social_security_worker"] == 1905
    assert summary["irpf"] == 4917.3
    assert summary["net_annual"] == 23138.7
    assert summary["periods_per_year"] == 12
    assert summary["period_name"] == "mes"
    assert summary["effective_irpf_rate"] == 0.1639
    assert summary["labels"]["total_employer_cost"] == "Coste total empresa"

    assert response["breakdown"]["net"] == pytest.approx(0.7713, abs=1e-4)
    assert response["meta"] == {
        "year": 2025,
        "locale": "es",
        "region": "MD",
        "region_name": "Madrid",
        "pay_frequency": "monthly",
    }

    categories = [detail["category"] for detail in response["details"]]
    assert categories == ["social_security", "mei", "solidarity", "irpf"]


def test_calculate_salary_accepts_camel_case_and_normalises_choices() -> None:
    response = calculate_salary(
        {
            "grossSalary": "42000",
            "payFrequency": " Weekly ",
            "region": "ct",
            "maritalStatus": "married_no_income",
            "childrenUnder25": 1,
            "locale": "en",
        }
    )

    assert response["meta"]["pay_frequency"] == "weekly"
    assert response["meta"]["region"] == "CT"
    assert response["meta"]["locale"] == "en"
    assert response["summary"]["period_name"] == "week"
    assert response["summary"]["periods_per_year"] == 52


def test_calculate_salary_rejects_invalid_fields() -> None:
    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(_payload(gross_salary=0, region="ZZ"))

    assert set(excinfo.value.errors) == {"gross_salary", "region"}
    assert str(excinfo.value) == "Revisa los datos introducidos."


def test_calculate_salary_reports_type_errors_by_field() -> None:
    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(_payload(gross_salary="mucho", children_under_25="dos"))

    assert excinfo.value.errors == {
        "gross_salary": "Introduce un número válido.",
        "children_under_25": "Introduce un número entero.",
    }


def test_calculate_salary_requires_gross_salary() -> None:
    payload = _payload()
    del payload["gross_salary"]

    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(payload)

    assert excinfo.value.errors == {"gross_salary": "Este campo es obligatorio."}


@pytest.mark.parametrize(
    "field", ["gross_salary", "children_under_25", "worker_disability", "year"]
)
def test_calculate_salary_rejects_boolean_numbers(field: str) -> None:
    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(_payload(**{field: True}))

    assert excinfo.value.errors == {field: "Introduce un número válido."}


def test_calculate_salary_rejects_boolean_camel_case_salary() -> None:
    payload = _payload()
    del payload["gross_salary"]
    payload["grossSalary"] = True

    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(payload)

    assert excinfo.value.errors == {"gross_salary": "Introduce un número válido."}


def test_calculate_salary_rejects_unknown_fields() -> None:
    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(_payload(bonus=1000))

    assert "bonus" in excinfo.value.errors


def test_unsupported_year_is_a_field_error() -> None:
    with pytest.raises(InputValidationError) as excinfo:
        calculate_salary(_payload(year=1999, gross_salary=-5))

    assert set(excinfo.value.errors) == {"year", "gross_salary"}


def test_evaluate_salary_exposes_components() -> None:
    evaluation = evaluate_salary(_payload(gross_salary=100000))

    assert evaluation.components.social_security.base == 53760
    assert evaluation.components.solidarity.total > 0
    assert evaluation.result.solidarity_worker == pytest.approx(
        evaluation.components.solidarity.worker
    )


def test_profiling_logs_section_timings(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("FINANZAS_PROFILE_CALCULATIONS", "1")
    caplog.set_level(logging.DEBUG, logger="finanzas.backend.services.salary_service")

    calculate_salary(_payload())

    messages = [record.getMessage() for record in caplog.records]
    assert any("timings (ms)" in message and "income_tax" in message for message in messages)
