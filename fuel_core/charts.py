from __future__ import annotations

from typing import Any, Dict, Iterable

import altair as alt

from fuel_core.aggregation import ChartPoint, chart_frame
from fuel_core.filters import Selection
from fuel_core.records import MONTH_ORDER

alt.data_transformers.disable_max_rows()

FUEL_COLORS = {"Petrol": "#ff6b6b", "Diesel": "#4ecdc4"}


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def chart_title(selection: Selection) -> str:
    return f"{selection.fuel_type} RSP in {selection.city} ({selection.year})"


def monthly_bar_chart(points: Iterable[ChartPoint], selection: Selection) -> alt.LayerChart:
    df = chart_frame(points)
    color = FUEL_COLORS.get(selection.fuel_type, "#1a73e8")
    base = alt.Chart(df).encode(
        x=alt.X("month:N", title="Month", sort=list(MONTH_ORDER), axis=alt.Axis(labelAngle=-45)),
        y=alt.Y("avg_price:Q", title="Average RSP (₹)", axis=alt.Axis(format=",.2f")),
        tooltip=[
            alt.Tooltip("month:N", title="Month"),
            alt.Tooltip("avg_price:Q", title="Avg RSP (₹)", format=",.2f"),
        ],
    )
    bars = base.mark_bar(color=color, cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
    labels = base.mark_text(dy=-8, fontSize=11, fontWeight="bold").encode(
        text=alt.Text("avg_price:Q", format=",.2f")
    )
    return (bars + labels).properties(title=chart_title(selection), height=450)
