"""Unit tests for response formatting helpers."""

from __future__ import annotations

from flask import Flask

from finanzas.backend.services.response_builder import (
    build_calculation_response,
    build_csv_response,
)


def test_build_calculation_response_returns_json(app: Flask) -> None:
    with app.app_context():
        response, status = build_calculation_response({"foo": "bar"})

    assert status == 200
    assert response.get_json() == {"foo": "bar"}


def test_build_csv_response_sets_attachment_headers(app: Flask) -> None:
    with app.app_context():
        response = build_csv_response("a,b\r\n1,2\r\n", "datos.csv")

    assert response.mimetype == "text/csv"
    assert response.headers["Content-Disposition"] == 'attachment; filename="datos.csv"'
    assert response.get_data(as_text=True) == "a,b\r\n1,2\r\n"
