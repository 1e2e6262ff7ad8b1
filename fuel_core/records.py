from __future__ import annotations

import logging
import math
import re
import warnings
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Literal, Mapping, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

_DIGIT = re.compile(r"\d")

FuelType = Literal["Diesel", "Petrol"]
FUEL_TYPES: Tuple[str, ...] = ("Diesel", "Petrol")

MONTH_ORDER: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

RawRow = Mapping[str, object]


@dataclass(frozen=True)
class ColumnMap:
    """Header names of the source CSV. Matching is exact, whitespace included."""

    date: str = "Calendar Day"
    city: str = "Metro Cities"
    fuel_type: str = "Products "
    price: str = (
        "Retail Selling Price (Rsp) Of Petrol And Diesel "
        "(UOM:INR/L(IndianRupeesperLitre)), Scaling Factor:1"
    )

    def required(self) -> Tuple[str, ...]:
        return (self.date, self.city, self.fuel_type, self.price)


DEFAULT_COLUMNS = ColumnMap()


@dataclass(frozen=True)
class FuelPriceRecord:
    city: str
    fuel_type: FuelType
    year: int
    month: str
    date: date
    rsp: float


def clean_text(value: object) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    s = str(value).strip()
    if not s:
        return None
    return s


def parse_dates(values: Iterable[object]) -> List[Optional[date]]:
    """Parse a column of calendar dates in one call; None where a value is not a valid date.

    Text without a digit is never a date. pandas would otherwise read
    "now" / "today" from the system clock.
    """
    candidates = [t if t is not None and _DIGIT.search(t) else None for t in (clean_text(v) for v in values)]
    if not candidates:
        return []
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        try:
            parsed = pd.to_datetime(pd.Series(candidates, dtype=object), errors="coerce", format="mixed")
        except (ValueError, TypeError):
            # mixed tz-aware and naive values cannot share one column
            parsed = [pd.to_datetime(c, errors="coerce", format="mixed") if c else pd.NaT for c in candidates]
    return [None if pd.isna(ts) else ts.date() for ts in parsed]


def parse_date(value: object) -> Optional[date]:
    return parse_dates([value])[0]


def parse_price(value: object) -> float:
    """Parse an RSP value. Missing or unparseable prices are 0.0, not errors."""
    text = clean_text(value)
    if text is None:
        return 0.0
    try:
        price = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def month_name(day: date) -> str:
    return MONTH_ORDER[day.month - 1]

def _to_record(row: RawRow, day: Optional[date], columns: ColumnMap) -> Optional[FuelPriceRecord]:
    raw_date = clean_text(row.get(columns.date))
    city = clean_text(row.get(columns.city))
    fuel_type = clean_text(row.get(columns.fuel_type))
    if raw_date is None or city is None or fuel_type is None:
        return None

    if day is None:
        logger.warning("Invalid date: %r", raw_date)
        return None

    if fuel_type not in FUEL_TYPES:
        logger.debug("Unknown fuel type %r for %s on %s, row dropped", fuel_type, city, day)
        return None

    return FuelPriceRecord(
        city=city,
        fuel_type=fuel_type,  # type: ignore[arg-type]
        year=day.year,
        month=month_name(day),
        date=day,
        rsp=parse_price(row.get(columns.price)),
    )


def parse_row(row: RawRow, columns: ColumnMap = DEFAULT_COLUMNS) -> Optional[FuelPriceRecord]:
    return _to_record(row, parse_date(row.get(columns.date)), columns)


def parse_rows(rows: Iterable[RawRow], columns: ColumnMap = DEFAULT_COLUMNS) -> List[FuelPriceRecord]:
    """Convert raw CSV rows into records, silently dropping malformed rows."""
    rows = list(rows)
    days = parse_dates(row.get(columns.date) for row in rows)
    out: List[FuelPriceRecord] = []
    for row, day in zip(rows, days):
        record = _to_record(row, day, columns)
        if record is not None:
            out.append(record)
    if len(rows) != len(out):
        logger.info("Parsed %d of %d rows (%d dropped)", len(out), len(rows), len(rows) - len(out))
    return out
