"""Configuration for the ledger package and the dashboard app.

Values come from environment variables with project-relative defaults.
Budget thresholds are fixed in ``ledger.budgets`` and are not configurable.
"""

import os
from pathlib import Path

# Base project root - this file lives in ledger/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("LEDGER_DATA_DIR", _PROJECT_ROOT / "data"))

SEED_PATH = Path(os.getenv("LEDGER_SEED_PATH", DATA_DIR / "seed.json"))

CURRENCY_SYMBOL = os.getenv("LEDGER_CURRENCY_SYMBOL", "₦")

LOG_LEVEL_ENV = "LEDGER_LOG_LEVEL"


def get_seed_path() -> str:
    return str(SEED_PATH)
