"""Amadeus Self-Service offer search provider."""

from .provider import AmadeusOfferProvider

__all__ = ["AmadeusOfferProvider"]
