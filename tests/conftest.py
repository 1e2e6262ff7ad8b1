from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List

import pytest

from fuel_core.data import clear_cache
from fuel_core.records import FuelPriceRecord
from tests.helpers import make_record, raw_row, write_csv


@pytest.fixture(autouse=True)
def _fresh_record_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture()
def records() -> List[FuelPriceRecord]:
    return [
        make_record("Delhi", "Petrol", date(2023, 3, 1), 97.0),
        make_record("Delhi", "Petrol", date(2023, 1, 1), 100.0),
        make_record("Delhi", "Petrol", date(2023, 1, 20), 102.0),
        make_record("Delhi", "Diesel", date(2023, 1, 1), 89.5),
        make_record("Mumbai", "Petrol", date(2023, 1, 1), 106.31),
        make_record("Delhi", "Petrol", date(2022, 12, 1), 95.0),
    ]


@pytest.fixture()
def csv_path(tmp_path: Path) -> Path:
    rows = [
        raw_row("2023-01-01", "Delhi", "Petrol", "100"),
        raw_row("2023-01-15", " Delhi ", "Petrol ", "102"),
        raw_row("2023-02-01", "Delhi", "Petrol", ""),
        raw_row("2023-02-10", "Delhi", "Petrol", "98"),
        raw_row("2024-05-01", "Mumbai", "Diesel", "94.27"),
        raw_row("not a date", "Delhi", "Petrol", "100"),
        raw_row("", "Delhi", "Petrol", "100"),
        raw_row("2023-03-01", "", "Petrol", "100"),
    ]
    return write_csv(tmp_path / "fuel-prices.csv", rows)
