from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SelectionModel(BaseModel):
    city: Optional[str] = None
    fuel_type: Optional[str] = None
    year: Optional[int] = None


class FilterOptionsResponse(BaseModel):
    cities: List[str] = Field(default_factory=list)
    fuel_types: List[str] = Field(default_factory=list)
    years: List[int] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    city: str
    fuel_type: str
    year: int


class SummaryResponse(BaseModel):
    record_count: int
    city_count: int
    year_count: int
