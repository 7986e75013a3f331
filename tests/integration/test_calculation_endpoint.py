"""Integration tests for the calculation endpoints."""

from __future__ import annotations

import csv
from io import StringIO

import pytest
from flask.testing import FlaskClient

SALARY_PATH = "/api/v1/calculations/salary"
COMPOUND_PATH = "/api/v1/calculations/compound-interest"


def _salary_payload(**overrides) -> dict:
    payload = {
        "gross_salary": 45000,
        "pay_frequency": "monthly",
        "region": "AN",
        "marital_status": "married_no_income",
        "children_under_25": 2,
    }
    payload.update(overrides)
    return payload


def test_salary_endpoint_returns_breakdown(client: FlaskClient) -> None:
    response = client.post(SALARY_PATH, json=_salary_payload())

    assert response.status_code == 200
    payload = response.get_json()
    summary = payload["summary"]
    assert summary["gross_annual"] == 45000
    assert summary["net_annual"] < summary["gross_annual"]
    assert summary["net_periodic"] == pytest.approx(summary["net_annual"] / 12, abs=0.01)
    assert payload["meta"]["region_name"] == "Andalucía"

    irpf = next(detail for detail in payload["details"] if detail["category"] == "irpf")
    assert irpf["personal_minimum"] == 5550 + 3400 + 2700
    assert irpf["region_multiplier"] == 0.95


def test_salary_endpoint_uses_accept_language(client: FlaskClient) -> None:
    response = client.post(
        SALARY_PATH,
        json=_salary_payload(),
        headers={"Accept-Language": "en-US,en;q=0.8"},
    )

    payload = response.get_json()
    assert payload["meta"]["locale"] == "en"
    assert payload["summary"]["labels"]["net_annual"] == "Annual net salary"


def test_salary_endpoint_reports_field_errors(client: FlaskClient) -> None:
    response = client.post(
        SALARY_PATH,
        json=_salary_payload(gross_salary=2_000_000, region="", locale="es"),
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["message"] == "Revisa los datos introducidos."
    assert payload["fields"] == {
        "gross_salary": "El salario bruto no puede superar 1.000.000 €.",
        "region": "Selecciona una comunidad autónoma.",
    }


def test_salary_endpoint_rejects_unsupported_year(client: FlaskClient) -> None:
    response = client.post(SALARY_PATH, json=_salary_payload(year=2001))

    assert response.status_code == 400
    assert "year" in response.get_json()["fields"]


def test_malformed_json_returns_bad_request(client: FlaskClient) -> None:
    response = client.post(SALARY_PATH, data="{oops", content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["error"] == "bad_request"


def test_non_object_json_returns_bad_request(client: FlaskClient) -> None:
    response = client.post(COMPOUND_PATH, json=[1, 2, 3])

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "bad_request"
    assert payload["message"] == "Request JSON must be an object"


def test_compound_interest_endpoint(client: FlaskClient) -> None:
    response = client.post(
        COMPOUND_PATH,
        json={
            "initial_balance": 10000,
            "periodic_deposit": 500,
            "frequency": 12,
            "annual_interest_rate": 7,
            "years": 10,
        },
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["summary"]["future_value"] == pytest.approx(106639, rel=1e-4)
    assert [entry["year"] for entry in payload["yearly"]] == list(range(11))


def test_compound_interest_endpoint_validation(client: FlaskClient) -> None:
    response = client.post(
        f"{COMPOUND_PATH}?locale=en",
        json={"annual_interest_rate": 5, "years": -3},
    )

    assert response.status_code == 400
    assert response.get_json()["fields"] == {"years": "The term must be at least 1 year."}


def test_compound_interest_endpoint_rejects_runaway_projection(
    client: FlaskClient,
) -> None:
    response = client.post(
        f"{COMPOUND_PATH}?locale=en",
        json={
            "initialBalance": 1000,
            "periodicDeposit": 100,
            "frequency": 12,
            "annualInterestRate": 1000,
            "years": 300,
        },
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["fields"] == {
        "annual_interest_rate": "Interest rate cannot exceed 100%.",
        "years": "The term cannot exceed 100 years.",
    }


def test_compound_interest_endpoint_accepts_largest_allowed_projection(
    client: FlaskClient,
) -> None:
    response = client.post(
        COMPOUND_PATH,
        json={
            "initial_balance": 1000,
            "periodic_deposit": 100,
            "annual_interest_rate": 100,
            "years": 100,
        },
    )

    assert response.status_code == 200
    assert len(response.get_json()["yearly"]) == 101


def test_salary_endpoint_rejects_boolean_salary(client: FlaskClient) -> None:
    payload = _salary_payload(locale="en")
    del payload["gross_salary"]
    payload["grossSalary"] = True

    response = client.post(SALARY_PATH, json=payload)

    assert response.status_code == 400
    assert response.get_json()["fields"] == {"gross_salary": "Enter a valid number."}


def test_non_string_locale_is_a_field_error(client: FlaskClient) -> None:
    response = client.post(
        SALARY_PATH,
        json=_salary_payload(locale=7),
        headers={"Accept-Language": "en"},
    )

    assert response.status_code == 400
    assert response.get_json()["fields"] == {"locale": "Enter valid text."}


def test_salary_csv_download(client: FlaskClient) -> None:
    response = client.post(f"{SALARY_PATH}/csv", json=_salary_payload(locale="en"))

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert "attachment" in response.headers["Content-Disposition"]
    rows = list(csv.reader(StringIO(response.get_data(as_text=True))))
    assert rows[0] == ["Concept", "Annual", "Per month"]
    assert len(rows) == 11


def test_compound_interest_csv_download(client: FlaskClient) -> None:
    response = client.post(
        f"{COMPOUND_PATH}/csv",
        json={"initial_balance": 1000, "annual_interest_rate": 2, "years": 3},
    )

    assert response.status_code == 200
    rows = list(csv.reader(StringIO(response.get_data(as_text=True))))
    assert rows[0] == ["Año", "Saldo", "Aportaciones acumuladas", "Intereses acumulados"]
    assert [row[0] for row in rows[1:]] == ["0", "1", "2", "3"]


def test_csv_download_reports_validation_errors(client: FlaskClient) -> None:
    response = client.post(f"{SALARY_PATH}/csv", json=_salary_payload(gross_salary=-1))

    assert response.status_code == 400
    assert "gross_salary" in response.get_json()["fields"]
