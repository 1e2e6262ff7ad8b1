from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from fuel_core.aggregation import monthly_average_for
from fuel_core.charts import monthly_bar_chart, to_vega_spec
from fuel_core.filters import FilterOptions, Selection
from fuel_core.records import FuelPriceRecord


def compute_monthly(selection: Selection, data_ctx: Dict[str, Any]) -> Dict[str, Any]:
    records: List[FuelPriceRecord] = data_ctx.get("records", []) or []
    options: FilterOptions = data_ctx.get("options") or FilterOptions()

    points = monthly_average_for(records, selection)
    charts: Dict[str, Any] = {}
    if points:
        charts["monthly_avg"] = to_vega_spec(monthly_bar_chart(points, selection))

    return {
        "selection": asdict(selection),
        "options": asdict(options),
        "summary": data_ctx.get("summary", {}),
        "chart_data": [p.to_dict() for p in points],
        "has_data": bool(points),
        "charts": charts,
    }
