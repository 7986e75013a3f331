#!/usr/bin/env python3
"""Check the translation catalogues for missing keys and placeholder drift."""

from __future__ import annotations

import argparse
import ast
import json
import re
import sys
from pathlib import Path
from typing import Sequence

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]
TRANSLATIONS_DIR = REPO_ROOT / "src" / "finanzas" / "translations"
BACKEND_DIR = REPO_ROOT / "src" / "finanzas" / "backend"
CONFIG_DATA_DIR = BACKEND_DIR / "config" / "data"
BASE_LOCALE = "es"

PLACEHOLDER_PATTERN = re.compile(r"{\s*([a-zA-Z0-9_]+)\s*}")
TRANSLATE_CALLS = {"translator", "translate"}


class CatalogueError(Exception):
    """Raised when a catalogue cannot be read at all."""


def _flatten(tree: dict, prefix: str = "") -> dict[str, str]:
    items: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            items.update(_flatten(value, path))
        else:
            items[path] = "" if value is None else str(value)
    return items


def load_catalogues(directory: Path = TRANSLATIONS_DIR) -> dict[str, dict[str, dict[str, str]]]:
    """Return ``{locale: {"backend": {...}, "frontend": {...}}}`` with flat keys."""

    catalogues: dict[str, dict[str, dict[str, str]]] = {}
    for path in sorted(directory.glob("*.json")):
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise CatalogueError(f"Unexpected payload format in {path.name}")

        backend = payload.get("backend") or {}
        frontend = payload.get("frontend") or {}
        if not isinstance(backend, dict) or not isinstance(frontend, dict):
            raise CatalogueError(f"{path.name} must define backend/frontend mappings")

        catalogues[path.stem] = {"backend": _flatten(backend), "frontend": _flatten(frontend)}

    if not catalogues:
        raise CatalogueError(f"No catalogues found in {directory}")
    return catalogues


def missing_keys(catalogues: dict[str, dict[str, dict[str, str]]]) -> list[str]:
    """Report keys present in the base locale but absent elsewhere."""

    issues: list[str] = []
    base = catalogues.get(BASE_LOCALE)
    if base is None:
        return [f"Base locale '{BASE_LOCALE}' has no catalogue"]

    for section in ("backend", "frontend"):
        expected = set(base[section])
        for locale, payload in sorted(catalogues.items()):
            missing = expected - set(payload[section])
            extra = set(payload[section]) - expected
            if missing:
                issues.append(f"{locale}: missing {section} keys {', '.join(sorted(missing))}")
            if extra:
                issues.append(f"{locale}: unexpected {section} keys {', '.join(sorted(extra))}")
    return issues


def placeholder_mismatches(catalogues: dict[str, dict[str, dict[str, str]]]) -> list[str]:
    """Report keys whose ``{placeholders}`` differ between locales."""

    issues: list[str] = []
    base = catalogues.get(BASE_LOCALE, {}).get("backend", {})
    for key, message in sorted(base.items()):
        expected = set(PLACEHOLDER_PATTERN.findall(message))
        for locale, payload in sorted(catalogues.items()):
            other = payload["backend"].get(key)
            if other is None:
                continue
            found = set(PLACEHOLDER_PATTERN.findall(other))
            if found != expected:
                issues.append(
                    f"{locale}: backend:{key} uses {sorted(found)}, expected {sorted(expected)}"
                )
    return issues


def _backend_usage() -> tuple[set[str], set[str]]:
    literals: set[str] = set()
    prefixes: set[str] = set()

    for path in BACKEND_DIR.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call) or not node.args:
                continue
            func = node.func
            name = func.id if isinstance(func, ast.Name) else getattr(func, "attr", None)
            if name not in TRANSLATE_CALLS:
                continue

            argument = node.args[0]
            if isinstance(argument, ast.Constant) and isinstance(argument.value, str):
                literals.add(argument.value)
            elif isinstance(argument, ast.JoinedStr) and argument.values:
                head = argument.values[0]
                if isinstance(head, ast.Constant) and isinstance(head.value, str):
                    prefixes.add(head.value)

    return literals, prefixes


def _config_keys() -> set[str]:
    """Keys derived from the fiscal year tables (pay frequencies, SS concepts)."""

    keys: set[str] = set()
    for path in CONFIG_DATA_DIR.glob("[0-9]*.yaml"):
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}

        for frequency in (data.get("payroll") or {}).get("frequencies") or {}:
            keys.add(f"periods.{frequency}")
            keys.add(f"pay_frequencies.{frequency}")

        social_security = data.get("social_security") or {}
        for section in ("worker_rates", "employer_rates"):
            for concept in social_security.get(section) or {}:
                keys.add(f"details.social_security.{concept}")
    return keys


def unknown_references(catalogues: dict[str, dict[str, dict[str, str]]]) -> list[str]:
    """Report keys used by the code or config that the base catalogue lacks."""

    base = set(catalogues.get(BASE_LOCALE, {}).get("backend", {}))
    literals, prefixes = _backend_usage()
    issues = [
        f"backend code references missing key '{key}'"
        for key in sorted(literals - base)
    ]
    issues.extend(
        f"configuration requires missing key '{key}'"
        for key in sorted(_config_keys() - base)
    )
    for prefix in sorted(prefixes):
        if not any(key.startswith(prefix) for key in base):
            issues.append(f"no keys found for dynamic prefix '{prefix}'")
    return issues


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.parse_args(argv)

    try:
        catalogues = load_catalogues()
    except CatalogueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    issues = missing_keys(catalogues)
    issues.extend(placeholder_mismatches(catalogues))
    issues.extend(unknown_references(catalogues))

    if issues:
        print(f"{len(issues)} translation issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"Translations OK ({', '.join(sorted(catalogues))})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
