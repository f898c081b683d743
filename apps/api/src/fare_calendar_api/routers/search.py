"""Single-date flight search router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..dependencies import get_search_service
from ..schemas.search import FlightSearchRequest, FlightSearchResponse
from ..services.search_service import SearchService

router = APIRouter(prefix="/flights", tags=["search"])

ServiceDep = Annotated[SearchService, Depends(get_search_service)]


@router.post("/search", response_model=FlightSearchResponse)
async def search_flights(
    request: FlightSearchRequest,
    service: ServiceDep,
) -> FlightSearchResponse:
    """Offers for a single departure date, cheapest first."""
    return await service.search_flights(request)
