"""Expose configuration metadata used to build the calculator forms.

The endpoints bridge the YAML-backed fiscal year tables and API consumers so
that regions, pay frequencies and compounding options are never duplicated
outside the configuration files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import Blueprint, jsonify, request

from finanzas.backend.app.http import not_found
from finanzas.backend.app.localization import Translator, get_translator
from finanzas.backend.config.year_config import (
    YearConfiguration,
    available_years,
    default_year,
    load_manifest,
    load_year_configuration,
)
from finanzas.backend.services import compound_interest_service
from finanzas.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


@dataclass(frozen=True)
class YearRouteContext:
    """Configuration and translator resolved for a year-scoped endpoint."""

    year: int
    translator: Translator
    configuration: YearConfiguration

    @property
    def locale(self) -> str:
        return self.translator.locale


def _build_year_context(year: int) -> YearRouteContext | None:
    if year not in available_years():
        return None

    return YearRouteContext(
        year=year,
        translator=get_translator(request.args.get("locale")),
        configuration=load_year_configuration(year),
    )


def get_configuration_metadata() -> dict[str, Any]:
    """Expose the package version and the fiscal years in the manifest."""

    supported_years = list(load_manifest().supported_years)
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": supported_years[-1] if supported_years else None,
    }


def _serialise_year(year: int) -> dict[str, Any]:
    config = load_year_configuration(year)
    payload = config.model_dump(mode="json", by_alias=False)
    payload["social_security"]["worker_rate"] = config.social_security.worker_rate
    payload["social_security"]["employer_rate"] = config.social_security.employer_rate
    return payload


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Return the version identifier and supported years."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return every configured fiscal year table."""

    metadata = get_configuration_metadata()
    payload = {
        "years": [_serialise_year(year) for year in available_years()],
        "default_year": metadata["default_year"],
        "supported_years": metadata["supported_years"],
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>/regions")
def get_regions(year: int) -> tuple[Any, int]:
    """List the autonomous communities and their IRPF multipliers."""

    context = _build_year_context(year)
    if context is None:
        return not_found(f"Configuration for year {year} is not available")

    income_tax = context.configuration.income_tax
    regions = [
        {
            "code": region.code,
            "name": region.name,
            "multiplier": income_tax.region_multiplier(region.code),
        }
        for region in income_tax.regions
    ]
    payload = {"year": context.year, "locale": context.locale, "regions": regions}
    return jsonify(payload), 200


@blueprint.get("/<int:year>/pay-frequencies")
def get_pay_frequencies(year: int) -> tuple[Any, int]:
    """List pay frequencies with their periods per year and labels."""

    context = _build_year_context(year)
    if context is None:
        return not_found(f"Configuration for year {year} is not available")

    payroll = context.configuration.payroll
    frequencies = [
        {
            "id": key,
            "label": context.translator(f"pay_frequencies.{key}"),
            "period_name": context.translator(f"periods.{key}"),
            "periods_per_year": periods,
        }
        for key, periods in payroll.frequencies.items()
    ]
    payload = {
        "year": context.year,
        "locale": context.locale,
        "default": payroll.default_frequency,
        "frequencies": frequencies,
    }
    return jsonify(payload), 200


@blueprint.get("/compounding-frequencies")
def get_compounding_frequencies() -> tuple[Any, int]:
    """List the supported compounding frequencies with localised labels."""

    translator = get_translator(request.args.get("locale"))
    savings = load_year_configuration(default_year()).savings
    frequencies = [
        {
            "value": frequency,
            "label": compound_interest_service.frequency_label(frequency, translator),
        }
        for frequency in savings.compounding_frequencies
    ]
    payload = {
        "locale": translator.locale,
        "default": savings.default_frequency,
        "frequencies": frequencies,
    }
    return jsonify(payload), 200
