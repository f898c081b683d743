"""Single-date flight search wire schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FlightSearchRequest(BaseModel):
    """Request body. ``returnDate`` and ``tripType`` are echoed, not searched."""

    model_config = ConfigDict(extra="ignore")

    origin: str | None = None
    destination: str | None = None
    departDate: str | None = None  # noqa: N815
    returnDate: str | None = None  # noqa: N815
    passengers: int | None = None
    tripType: str = "one-way"  # noqa: N815


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchParams(_WireModel):
    origin: str
    destination: str
    depart_date: str
    return_date: str | None = None
    passengers: int
    trip_type: str


class SearchMeta(_WireModel):
    count: int
    duration: int


class FlightSearchResponse(_WireModel):
    success: bool = True
    data: list[dict[str, Any]]
    search_params: SearchParams
    meta: SearchMeta
