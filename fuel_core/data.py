from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from fuel_core.config import get_settings
from fuel_core.filters import default_selection, extract_filter_options
from fuel_core.records import DEFAULT_COLUMNS, ColumnMap, FuelPriceRecord, parse_rows

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """The source file could not be read or lacks the expected columns."""


@dataclass(frozen=True)
class LoadState:
    loading: bool = False
    error: Optional[str] = None
    records: List[FuelPriceRecord] = field(default_factory=list)

    @property
    def data_ready(self) -> bool:
        return self.error is None and not self.loading and bool(self.records)


def get_source_file(path: Optional[Path] = None) -> Path:
    return Path(path) if path is not None else get_settings().csv_path


def file_signature(path: Path) -> Tuple[str, float]:
    try:
        return str(path.resolve()), path.stat().st_mtime
    except OSError as exc:
        raise DataLoadError(f"Failed to load CSV file: {path} ({exc.strerror or exc})") from exc


def read_raw_rows(path: Path, columns: ColumnMap = DEFAULT_COLUMNS) -> List[Dict[str, str]]:
    """Read the CSV as text, one dict per non-blank line keyed by exact header name."""
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except FileNotFoundError as exc:
        raise DataLoadError(f"Failed to load CSV file: {path} not found") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DataLoadError(f"Failed to load CSV file: {exc}") from exc

    missing = [c for c in columns.required() if c not in df.columns]
    if missing:
        raise DataLoadError(f"CSV file is missing required columns: {missing}")
    return df.to_dict(orient="records")


@lru_cache(maxsize=4)
def _load_records_cached(file_sig: Tuple[str, float], columns: ColumnMap) -> Tuple[FuelPriceRecord, ...]:
    path = Path(file_sig[0])
    raw = read_raw_rows(path, columns)
    logger.info("CSV loaded: %s (%d rows)", path.name, len(raw))
    records = parse_rows(raw, columns)
    logger.info("Loaded %d fuel price records", len(records))
    return tuple(records)


def load_records(path: Optional[Path] = None, columns: ColumnMap = DEFAULT_COLUMNS) -> List[FuelPriceRecord]:
    source = get_source_file(path)
    return list(_load_records_cached(file_signature(source), columns))


def dataset_summary(records: List[FuelPriceRecord]) -> Dict[str, int]:
    options = extract_filter_options(records)
    return {
        "record_count": len(records),
        "city_count": len(options.cities),
        "year_count": len(options.years),
    }


def load_dashboard_data(path: Optional[Path] = None, columns: ColumnMap = DEFAULT_COLUMNS) -> Dict[str, object]:
    source = get_source_file(path)
    records = load_records(source, columns)
    options = extract_filter_options(records)
    return {
        "source": source.name,
        "records": records,
        "options": options,
        "defaults": default_selection(options),
        "summary": dataset_summary(records),
    }


def load_state(path: Optional[Path] = None, columns: ColumnMap = DEFAULT_COLUMNS) -> LoadState:
    try:
        records = load_records(path, columns)
    except DataLoadError as exc:
        logger.error("Error loading CSV: %s", exc)
        return LoadState(error=str(exc))
    return LoadState(records=records)


def records_frame(records: Iterable[FuelPriceRecord]) -> pd.DataFrame:
    rows = [asdict(r) for r in records]
    return pd.DataFrame(rows, columns=["city", "fuel_type", "year", "month", "date", "rsp"])


def clear_cache() -> None:
    _load_records_cached.cache_clear()
