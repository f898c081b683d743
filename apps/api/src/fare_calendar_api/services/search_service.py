"""Single-date flight search service."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from fare_calendar_engine.orchestrator import search_single_date

from ..schemas.search import FlightSearchResponse, SearchMeta, SearchParams

if TYPE_CHECKING:
    from fare_calendar_engine.base import BaseOfferProvider
    from fare_calendar_engine.orchestrator import CalendarConfig

    from ..schemas.search import FlightSearchRequest


class SearchService:
    def __init__(self, provider: BaseOfferProvider, config: CalendarConfig) -> None:
        self._provider = provider
        self._config = config

    async def search_flights(self, body: FlightSearchRequest) -> FlightSearchResponse:
        """Search one departure date; provider failures propagate to the app."""
        start = time.monotonic()
        request, offers = await search_single_date(
            body.model_dump(), provider=self._provider, config=self._config
        )
        return FlightSearchResponse(
            data=offers,
            search_params=SearchParams(
                origin=request.origin,
                destination=request.destination,
                depart_date=request.anchor_date.isoformat(),
                return_date=body.returnDate,
                passengers=request.passenger_count,
                trip_type=body.tripType,
            ),
            meta=SearchMeta(
                count=len(offers),
                duration=int((time.monotonic() - start) * 1000),
            ),
        )
