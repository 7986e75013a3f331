"""Translation catalogues shipped as JSON resources in ``finanzas.translations``.

Each ``<locale>.json`` file holds a ``backend`` table of flat dotted keys used
by the services (error messages, labels, period names) and a ``frontend``
table handed verbatim to API consumers. Missing keys fall back to the Spanish
catalogue and finally to the key itself.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any, Mapping

_BASE_LOCALE = "es"
_TRANSLATIONS_PACKAGE = "finanzas.translations"


@dataclass(frozen=True)
class Translator:
    """Callable lookup of localised strings for one locale."""

    locale: str
    _messages: Mapping[str, str]
    _fallback: Mapping[str, str]

    def __call__(self, key: str) -> str:
        return self._messages.get(key) or self._fallback.get(key, key)


@dataclass(frozen=True)
class Catalogue:
    """Messages published for a single locale."""

    locale: str
    backend: Mapping[str, str]
    frontend: Mapping[str, Any]


@cache
def available_locales() -> tuple[str, ...]:
    """Return the locales that ship a catalogue file."""

    root = resources.files(_TRANSLATIONS_PACKAGE)
    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (_BASE_LOCALE,)


@cache
def _load_catalogue(locale: str) -> Catalogue:
    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    if not resource.is_file():
        return Catalogue(locale=locale, backend={}, frontend={})

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    backend = payload.get("backend") or {}
    frontend = payload.get("frontend") or {}
    return Catalogue(
        locale=locale,
        backend={key: str(value) for key, value in backend.items()},
        frontend=frontend,
    )


def normalise_locale(locale: str | None) -> str:
    """Reduce ``locale`` (``es-ES``, ``EN``...) to a published catalogue key."""

    if not locale:
        return _BASE_LOCALE

    language = locale.strip().lower().replace("_", "-").split("-")[0]
    return language if language in available_locales() else _BASE_LOCALE


def get_translator(locale: str | None = None) -> Translator:
    """Return a translator for ``locale`` backed by the base catalogue."""

    normalised = normalise_locale(locale)
    catalogue = _load_catalogue(normalised)
    base = _load_catalogue(_BASE_LOCALE)

    return Translator(
        locale=catalogue.locale,
        _messages=catalogue.backend,
        _fallback=base.backend,
    )


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Return the catalogue for ``locale`` together with the base fallback."""

    normalised = normalise_locale(locale)
    catalogue = _load_catalogue(normalised)
    base = _load_catalogue(_BASE_LOCALE)

    return {
        "locale": normalised,
        "available_locales": list(available_locales()),
        "backend": dict(catalogue.backend),
        "frontend": catalogue.frontend,
        "fallback": {
            "locale": _BASE_LOCALE,
            "backend": dict(base.backend),
            "frontend": base.frontend,
        },
    }


__all__ = [
    "Catalogue",
    "Translator",
    "available_locales",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
