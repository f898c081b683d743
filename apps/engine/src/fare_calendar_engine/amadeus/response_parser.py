"""Parse Amadeus flight-offers data into flat offer dicts."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

# Fallback when the response dictionaries lack a carrier
AIRLINE_NAMES: dict[str, str] = {
    "AI": "Air India",
    "6E": "IndiGo",
    "SG": "SpiceJet",
    "UK": "Vistara",
    "G8": "Go First",
    "I5": "AirAsia India",
    "QP": "Akasa Air",
    "IX": "Air India Express",
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "EY": "Etihad Airways",
    "FZ": "flydubai",
    "WY": "Oman Air",
    "BA": "British Airways",
    "LH": "Lufthansa",
    "AF": "Air France",
    "KL": "KLM",
    "TK": "Turkish Airlines",
    "SQ": "Singapore Airlines",
    "TG": "Thai Airways",
    "CX": "Cathay Pacific",
    "JL": "Japan Airlines",
    "NH": "ANA",
    "MH": "Malaysia Airlines",
    "DL": "Delta Air Lines",
    "AA": "American Airlines",
    "UA": "United Airlines",
    "AC": "Air Canada",
}

_HOURS_RE = re.compile(r"(\d+)H")
_MINUTES_RE = re.compile(r"(\d+)M")


def airline_name(code: str, dictionaries: dict[str, Any] | None = None) -> str:
    """Resolve a carrier code: response dictionaries, built-in table, code."""
    if not code:
        return "Unknown"
    upper = code.upper()
    carriers: dict[str, str] = (dictionaries or {}).get("carriers") or {}
    for key, name in carriers.items():
        if key.upper() == upper:
            return name
    if upper in AIRLINE_NAMES:
        return AIRLINE_NAMES[upper]
    logger.debug("Unknown airline code: %s", code)
    return upper


def format_duration(iso_dur: str | None) -> str:
    """``PT2H10M`` -> ``2h 10m``."""
    if not iso_dur:
        return "Unknown"
    hours = _HOURS_RE.search(iso_dur)
    minutes = _MINUTES_RE.search(iso_dur.split("H")[-1])
    if hours and minutes:
        return f"{hours.group(1)}h {minutes.group(1)}m"
    if hours:
        return f"{hours.group(1)}h"
    if minutes:
        return f"{minutes.group(1)}m"
    return iso_dur.replace("PT", "")


def _split_datetime(value: str | None) -> tuple[str, str]:
    """Return (``HH:MM``, ``DD Mon YYYY``) for an Amadeus local datetime."""
    try:
        parsed = datetime.fromisoformat(value or "")
    except ValueError:
        return "00:00", "Unknown"
    return parsed.strftime("%H:%M"), parsed.strftime("%d %b %Y")


def _baggage(traveler_pricing: dict[str, Any] | None) -> str:
    details = (traveler_pricing or {}).get("fareDetailsBySegment") or [{}]
    bags = details[0].get("includedCheckedBags")
    if not bags:
        return "15 KG"
    if bags.get("quantity"):
        qty = bags["quantity"]
        return f"{qty} piece{'s' if qty > 1 else ''}"
    if bags.get("weight"):
        return f"{bags['weight']} {bags.get('weightUnit', 'KG')}"
    return "15 KG"


def parse_offer(
    offer: dict[str, Any],
    dictionaries: dict[str, Any] | None = None,
    currency: str = "INR",
) -> dict[str, Any] | None:
    """Flatten one raw offer; ``None`` when it has no segments or price."""
    itineraries = offer.get("itineraries") or []
    if not itineraries or not itineraries[0].get("segments"):
        return None
    itin = itineraries[0]
    segments = itin["segments"]
    first_seg, last_seg = segments[0], segments[-1]

    price_data = offer.get("price") or {}
    try:
        price = round(float(price_data.get("grandTotal") or price_data.get("total")))
    except (TypeError, ValueError):
        return None
    carrier = (first_seg.get("carrierCode") or "XX").upper()
    if price <= 0:
        logger.warning("Invalid price for %s offer: %s", carrier, price)
        return None

    depart_time, depart_date = _split_datetime(first_seg.get("departure", {}).get("at"))
    arrive_time, arrive_date = _split_datetime(last_seg.get("arrival", {}).get("at"))

    aircraft_code = (first_seg.get("aircraft") or {}).get("code") or ""
    aircraft = ((dictionaries or {}).get("aircraft") or {}).get(
        aircraft_code.upper(), "Aircraft"
    )
    traveler_pricings = offer.get("travelerPricings") or []
    fare_details = (traveler_pricings[0] if traveler_pricings else {}).get(
        "fareDetailsBySegment"
    ) or [{}]

    return {
        "id": offer.get("id"),
        "airline": airline_name(carrier, dictionaries),
        "airlineCode": carrier,
        "flightNumber": f"{carrier} {first_seg.get('number') or '0000'}",
        "origin": first_seg.get("departure", {}).get("iataCode", "XXX"),
        "destination": last_seg.get("arrival", {}).get("iataCode", "XXX"),
        "departTime": depart_time,
        "arriveTime": arrive_time,
        "departDate": depart_date,
        "arriveDate": arrive_date,
        "duration": format_duration(itin.get("duration")),
        "stops": len(segments) - 1,
        "price": price,
        "currency": price_data.get("currency", currency),
        "aircraft": aircraft,
        "baggage": _baggage(traveler_pricings[0] if traveler_pricings else None),
        "cabinClass": fare_details[0].get("cabin", "ECONOMY"),
        "availableSeats": offer.get("numberOfBookableSeats") or 9,
        "segments": [
            {
                "departure": seg.get("departure", {}),
                "arrival": seg.get("arrival", {}),
                "carrierCode": seg.get("carrierCode"),
                "number": seg.get("number"),
                "aircraft": seg.get("aircraft", {}).get("code"),
                "duration": format_duration(seg.get("duration")),
                "operatingCarrierCode": (seg.get("operating") or {}).get(
                    "carrierCode"
                ),
            }
            for seg in segments
        ],
    }


def parse_flight_offers(
    offers: list[dict[str, Any]],
    dictionaries: dict[str, Any] | None = None,
    currency: str = "INR",
) -> list[dict[str, Any]]:
    """Convert the ``data`` array of a Flight Offers Search response.

    Unusable offers are dropped, duplicates by flight number and departure
    time keep their first occurrence, and the result is sorted by price.
    """
    parsed: list[dict[str, Any]] = []
    seen: set[tuple[str, str]] = set()
    for offer in offers:
        flat = parse_offer(offer, dictionaries, currency)
        if flat is None:
            continue
        key = (flat["flightNumber"], flat["departTime"])
        if key in seen:
            continue
        seen.add(key)
        parsed.append(flat)

    parsed.sort(key=lambda o: o["price"])
    logger.info(
        "Parsed %d/%d flight offers from Amadeus", len(parsed), len(offers)
    )
    return parsed
