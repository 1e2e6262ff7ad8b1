from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, List, Mapping, Optional, Set

from fuel_core.records import FUEL_TYPES, FuelPriceRecord, FuelType

DEFAULT_FUEL_TYPE: FuelType = "Petrol"


@dataclass(frozen=True)
class FilterOptions:
    cities: List[str] = field(default_factory=list)
    fuel_types: List[FuelType] = field(default_factory=list)
    years: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class Selection:
    city: str = ""
    fuel_type: FuelType = DEFAULT_FUEL_TYPE
    year: int = 0

    @property
    def is_valid(self) -> bool:
        return bool(self.city)


def extract_filter_options(records: Iterable[FuelPriceRecord]) -> FilterOptions:
    """Distinct cities, fuel types and years; years most recent first."""
    cities: Set[str] = set()
    fuel_types: Set[str] = set()
    years: Set[int] = set()
    for r in records:
        cities.add(r.city)
        fuel_types.add(r.fuel_type)
        years.add(r.year)
    return FilterOptions(
        cities=sorted(cities),
        fuel_types=sorted(fuel_types),  # type: ignore[arg-type]
        years=sorted(years, reverse=True),
    )


def default_selection(options: FilterOptions, *, today: Callable[[], date] = date.today) -> Selection:
    return Selection(
        city=options.cities[0] if options.cities else "",
        fuel_type=options.fuel_types[0] if options.fuel_types else DEFAULT_FUEL_TYPE,
        year=options.years[0] if options.years else today().year,
    )


def _as_year(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except Exception:
        return None


def normalize_selection(
    raw: Mapping[str, object],
    *,
    options: FilterOptions,
    today: Callable[[], date] = date.today,
) -> Selection:
    """Coerce a loose selection dict, falling back to defaults field by field."""
    defaults = default_selection(options, today=today)

    city = str(raw.get("city") or "").strip() or defaults.city

    fuel_type = str(raw.get("fuel_type") or "").strip()
    if fuel_type not in FUEL_TYPES:
        fuel_type = defaults.fuel_type

    year = _as_year(raw.get("year"))
    if year is None:
        year = defaults.year

    return Selection(city=city, fuel_type=fuel_type, year=year)  # type: ignore[arg-type]
