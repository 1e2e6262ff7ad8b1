from __future__ import annotations

from dataclasses import asdict
import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from fuel_api.schemas import FilterOptionsResponse, SelectionModel, SelectionResponse, SummaryResponse
from fuel_core.aggregation import chart_frame, monthly_average_for, select_records
from fuel_core.config import get_settings
from fuel_core.data import load_dashboard_data, records_frame
from fuel_core.filters import FilterOptions, Selection, normalize_selection
from fuel_core.metrics_monthly import compute_monthly


app = FastAPI(title="Fuel Price Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _selection_from_model(model: SelectionModel, *, options: FilterOptions) -> Selection:
    raw = model.model_dump()
    return normalize_selection(raw, options=options)


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


@app.get("/meta/options", response_model=FilterOptionsResponse)
def meta_options():
    try:
        data_ctx = load_dashboard_data()
        return _json(asdict(data_ctx["options"]))
    except Exception as exc:
        logger.exception("meta_options failed")
        return _error(exc)


@app.get("/meta/defaults", response_model=SelectionResponse)
def meta_defaults():
    try:
        data_ctx = load_dashboard_data()
        return _json(asdict(data_ctx["defaults"]))
    except Exception as exc:
        logger.exception("meta_defaults failed")
        return _error(exc)


@app.get("/meta/summary", response_model=SummaryResponse)
def meta_summary():
    try:
        data_ctx = load_dashboard_data()
        return _json(data_ctx["summary"])
    except Exception as exc:
        logger.exception("meta_summary failed")
        return _error(exc)


@app.post("/monthly-average")
def monthly_average(selection: SelectionModel):
    try:
        data_ctx = load_dashboard_data()
        s = _selection_from_model(selection, options=data_ctx["options"])
        return _json(compute_monthly(s, data_ctx))
    except Exception as exc:
        logger.exception("monthly_average failed")
        return _error(exc)


@app.post("/export/monthly-average")
def export_monthly_average(selection: SelectionModel):
    try:
        data_ctx = load_dashboard_data()
    except Exception as exc:
        logger.exception("export_monthly_average failed")
        return _error(exc)
    s = _selection_from_model(selection, options=data_ctx["options"])
    export_df = chart_frame(monthly_average_for(data_ctx["records"], s))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    filename = f"monthly-average-{s.city or 'none'}-{s.fuel_type}-{s.year}.csv".replace(" ", "_")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})


@app.post("/export/records")
def export_records(selection: SelectionModel):
    try:
        data_ctx = load_dashboard_data()
    except Exception as exc:
        logger.exception("export_records failed")
        return _error(exc)
    s = _selection_from_model(selection, options=data_ctx["options"])
    export_df = records_frame(select_records(data_ctx["records"], s.city, s.fuel_type, s.year))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    filename = f"records-{s.city or 'none'}-{s.fuel_type}-{s.year}.csv".replace(" ", "_")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
