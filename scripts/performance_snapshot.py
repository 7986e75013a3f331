#!/usr/bin/env python3
"""Time repeated salary and compound interest calculations."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Callable

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from finanzas.backend.services import (  # noqa: E402
    calculate_compound_interest,
    calculate_salary,
)

SALARY_PAYLOAD = {
    "locale": "es",
    "gross_salary": 72000,
    "pay_frequency": "monthly",
    "region": "MD",
    "marital_status": "married_no_income",
    "children_under_25": 2,
    "worker_disability": 0,
    "family_disability": 0,
}

COMPOUND_INTEREST_PAYLOAD = {
    "locale": "es",
    "initial_balance": 10000,
    "periodic_deposit": 500,
    "frequency": 12,
    "deposit_timing": "end",
    "annual_interest_rate": 7,
    "years": 30,
}


def measure(func: Callable[[dict[str, Any]], Any], payload: dict[str, Any], iterations: int) -> dict[str, float]:
    """Return timing statistics for ``iterations`` calls of ``func``."""

    func(dict(payload))  # warm the configuration caches
    start = perf_counter()
    for _ in range(iterations):
        func(dict(payload))
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("FINANZAS_PROFILE_ITERATIONS", "200"))
    report = {
        "salary": measure(calculate_salary, SALARY_PAYLOAD, iterations),
        "compound_interest": measure(
            calculate_compound_interest, COMPOUND_INTEREST_PAYLOAD, iterations
        ),
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
