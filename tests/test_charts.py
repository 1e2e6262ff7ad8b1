from __future__ import annotations

from fuel_core.aggregation import ChartPoint
from fuel_core.charts import chart_title, monthly_bar_chart, to_vega_spec
from fuel_core.filters import Selection
from fuel_core.metrics_monthly import compute_monthly


def _bar_layer(spec: dict) -> dict:
    return next(layer for layer in spec["layer"] if layer["mark"]["type"] == "bar")


def test_chart_title() -> None:
    assert chart_title(Selection("Delhi", "Petrol", 2023)) == "Petrol RSP in Delhi (2023)"


def test_bar_chart_spec() -> None:
    points = [ChartPoint("January", 101.0), ChartPoint("March", 97.0)]
    spec = to_vega_spec(monthly_bar_chart(points, Selection("Delhi", "Diesel", 2023)))
    bar = _bar_layer(spec)
    assert bar["mark"]["color"] == "#4ecdc4"
    assert bar["encoding"]["x"]["sort"][0] == "January"
    assert spec["title"] == "Diesel RSP in Delhi (2023)"


def test_compute_monthly_payload(records) -> None:
    data_ctx = {"records": records, "summary": {"record_count": len(records)}}
    payload = compute_monthly(Selection("Delhi", "Petrol", 2023), data_ctx)
    assert payload["selection"] == {"city": "Delhi", "fuel_type": "Petrol", "year": 2023}
    assert payload["chart_data"] == [
        {"month": "January", "avgPrice": 101.0},
        {"month": "March", "avgPrice": 97.0},
    ]
    assert payload["has_data"] is True
    assert "monthly_avg" in payload["charts"]


def test_compute_monthly_no_data(records) -> None:
    payload = compute_monthly(Selection("Mumbai", "Diesel", 2023), {"records": records})
    assert payload["chart_data"] == []
    assert payload["has_data"] is False
    assert payload["charts"] == {}
    assert payload["options"] == {"cities": [], "fuel_types": [], "years": []}
