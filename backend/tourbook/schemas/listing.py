"""Listing schema definitions."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from tourbook.services.catalog_service import ListingKind


class ListingRead(BaseModel):
    """Public view of a property or tour."""

    id: str
    kind: ListingKind
    name: str
    location: str
    nightly_rate: Decimal
    max_guests: int
    rating: float | None = None
    amenities: list[str]

    model_config = ConfigDict(from_attributes=True)
