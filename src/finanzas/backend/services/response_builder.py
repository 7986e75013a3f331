"""Turn service output into Flask responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Tuple

from flask import Response, jsonify

ResponseTuple = Tuple[Any, int]

CSV_MIMETYPE = "text/csv; charset=utf-8"


def build_calculation_response(payload: Mapping[str, Any]) -> ResponseTuple:
    """Return a JSON response for the calculation ``payload``."""

    return jsonify(payload), 200


def build_csv_response(content: str, filename: str) -> Response:
    """Return ``content`` as a downloadable CSV attachment."""

    response = Response(content, mimetype=CSV_MIMETYPE)
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


__all__ = ["CSV_MIMETYPE", "ResponseTuple", "build_calculation_response", "build_csv_response"]
