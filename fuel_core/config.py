"""
fuel_core/config.py

Environment-driven settings for the dashboard and the API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Tuple

ROOT_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = ROOT_DIR / "data"
DEFAULT_CSV_PATH = DATA_DIR / "fuel-prices.csv"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


@dataclass(frozen=True)
class Settings:
    csv_path: Path
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or DEFAULT_CORS_ORIGINS


def load_settings() -> Settings:
    """
    Read settings from the environment.

    FUEL_PRICES_CSV overrides the dataset location; FUEL_API_CORS_ORIGINS is a
    comma-separated list of origins allowed to call the API.
    """

    csv_raw = (os.getenv("FUEL_PRICES_CSV") or "").strip()
    csv_path = Path(csv_raw).expanduser() if csv_raw else DEFAULT_CSV_PATH
    cors_origins = _split_origins(os.getenv("FUEL_API_CORS_ORIGINS") or "")
    return Settings(csv_path=csv_path, cors_origins=cors_origins)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
