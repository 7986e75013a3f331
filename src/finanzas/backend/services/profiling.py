"""Opt-in timing of calculation sections."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from time import perf_counter

PROFILE_ENV = "FINANZAS_PROFILE_CALCULATIONS"


def profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


def new_timings() -> dict[str, float] | None:
    """Return a timing store when profiling is enabled, otherwise ``None``."""

    return {} if profiling_enabled() else None


@contextmanager
def profile_section(name: str, store: dict[str, float] | None) -> Iterator[None]:
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def timings_in_ms(store: dict[str, float]) -> dict[str, float]:
    """Convert captured durations to milliseconds for logging."""

    return {name: round(duration * 1000, 3) for name, duration in store.items()}


__all__ = [
    "PROFILE_ENV",
    "new_timings",
    "profile_section",
    "profiling_enabled",
    "timings_in_ms",
]
