"""Configuration management for the finance tracker.

This module centralizes all configuration values including paths,
refresh intervals, the exchange-rate endpoint and environment variable
overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory holding one JSON document per collection
DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))

# Collection names
TRANSACTIONS_KEY = "transactions"
GOALS_KEY = "goals"
STORAGE_KEYS = (TRANSACTIONS_KEY, GOALS_KEY)

# Exchange rates
RATES_URL = os.getenv("FINTRACK_RATES_URL", "https://api.frankfurter.dev/v1/latest")
BASE_CURRENCY = os.getenv("FINTRACK_BASE_CURRENCY", "HKD")
RATES_TIMEOUT = float(os.getenv("FINTRACK_RATES_TIMEOUT", "10"))

# Refresh cadence for the dashboard
RATE_REFRESH_SECONDS = 600
SUMMARY_REFRESH_SECONDS = 60

LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the app and scripts."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)


def get_data_dir() -> str:
    """Get the data directory as a string."""
    return str(DATA_DIR)
