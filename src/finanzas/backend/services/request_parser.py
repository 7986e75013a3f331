"""Normalise incoming calculator requests before they reach the services.

The locale decides the language of every label and error message in the
response, so it is settled here: an explicit ``locale`` in the body wins, then
``?locale=``, then the best ``Accept-Language`` entry that has a catalogue.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

from finanzas.backend.app.localization import (
    available_locales,
    get_translator,
    normalise_locale,
)

from .validation import InputValidationError


def _header_locale(req: Request) -> str | None:
    """Return the highest weighted ``Accept-Language`` entry with a catalogue."""

    if not req.accept_languages:
        return None
    match = req.accept_languages.best_match(available_locales())
    return normalise_locale(match) if match else None


def _resolve_locale(req: Request, payload: dict[str, Any]) -> None:
    """Fill ``payload["locale"]`` from the body, query string or headers."""

    locale = payload.get("locale")
    if locale is not None and not isinstance(locale, str):
        translator = get_translator(req.args.get("locale") or _header_locale(req))
        raise InputValidationError(
            {"locale": translator("errors.not_text")},
            translator("errors.validation_failed"),
        )
    if locale and locale.strip():
        payload["locale"] = normalise_locale(locale)
        return

    locale_param = req.args.get("locale")
    if locale_param:
        payload["locale"] = normalise_locale(locale_param)
        return

    header_locale = _header_locale(req)
    if header_locale:
        payload["locale"] = header_locale


def parse_calculation_payload(req: Request) -> dict[str, Any]:
    """Return the JSON object carried by ``req`` with its locale resolved."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    _resolve_locale(req, payload)

    return payload
