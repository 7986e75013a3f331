#!/usr/bin/env python3
"""Run the fiscal year configuration checks from a source checkout.

Usage: ``scripts/validate_config.py [2025 ...]``
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from finanzas.backend.config.validator import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
