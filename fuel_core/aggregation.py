from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from fuel_core.filters import Selection
from fuel_core.records import MONTH_ORDER, FuelPriceRecord


@dataclass(frozen=True)
class ChartPoint:
    month: str
    avg_price: float

    def to_dict(self) -> Dict[str, object]:
        return {"month": self.month, "avgPrice": self.avg_price}


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def select_records(records: Iterable[FuelPriceRecord], city: str, fuel_type: str, year: int) -> List[FuelPriceRecord]:
    """Records matching all three of city, fuel type and year exactly."""
    return [r for r in records if r.city == city and r.fuel_type == fuel_type and r.year == year]


def monthly_average(
    records: Iterable[FuelPriceRecord],
    city: str,
    fuel_type: str,
    year: int,
) -> List[ChartPoint]:
    """Mean RSP per month for one (city, fuel type, year), January first.

    Months without matching records are left out rather than zero-filled.
    """
    matched = select_records(records, city, fuel_type, year)
    if not matched:
        return []

    totals: Dict[str, Tuple[float, int]] = {}
    for r in matched:
        total, count = totals.get(r.month, (0.0, 0))
        totals[r.month] = (total + r.rsp, count + 1)

    points: List[ChartPoint] = []
    for month in MONTH_ORDER:
        if month not in totals:
            continue
        total, count = totals[month]
        points.append(ChartPoint(month=month, avg_price=round_half_up(total / count, 2)))
    return points


def monthly_average_for(records: Iterable[FuelPriceRecord], selection: Selection) -> List[ChartPoint]:
    if not selection.is_valid:
        return []
    return monthly_average(records, selection.city, selection.fuel_type, selection.year)


def chart_frame(points: Iterable[ChartPoint]) -> pd.DataFrame:
    rows = [{"month": p.month, "avg_price": p.avg_price} for p in points]
    return pd.DataFrame(rows, columns=["month", "avg_price"])
