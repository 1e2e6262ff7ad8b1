from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Dict, List

from fuel_core.records import DEFAULT_COLUMNS, FuelPriceRecord, month_name


HEADER = ["Country", "Year", "Month"] + list(DEFAULT_COLUMNS.required())


def make_record(city: str, fuel_type: str, day: date, rsp: float) -> FuelPriceRecord:
    return FuelPriceRecord(
        city=city,
        fuel_type=fuel_type,  # type: ignore[arg-type]
        year=day.year,
        month=month_name(day),
        date=day,
        rsp=rsp,
    )


def raw_row(day: str, city: str, fuel_type: str, price: str) -> Dict[str, str]:
    return {
        DEFAULT_COLUMNS.date: day,
        DEFAULT_COLUMNS.city: city,
        DEFAULT_COLUMNS.fuel_type: fuel_type,
        DEFAULT_COLUMNS.price: price,
    }


def write_csv(path: Path, rows: List[Dict[str, str]], header: List[str] = HEADER) -> Path:
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=header, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path
