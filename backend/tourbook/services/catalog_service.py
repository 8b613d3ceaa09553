"""Listing catalog backed by a YAML file."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from tourbook.core.config import get_settings

logger = logging.getLogger(__name__)


class ListingKind(str, enum.Enum):
    PROPERTY = "property"
    TOUR = "tour"


class ListingNotFoundError(ValueError):
    """Raised when a listing id is not in the catalog."""


class CapacityExceededError(ValueError):
    """Raised when a party does not fit a listing."""


@dataclass(frozen=True, slots=True)
class ListingRef:
    """A bookable property or tour."""

    id: str
    kind: ListingKind
    name: str
    nightly_rate: Decimal
    max_guests: int
    location: str = ""
    rating: float | None = None
    amenities: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "location": self.location,
            "nightly_rate": f"{self.nightly_rate:.2f}",
            "max_guests": self.max_guests,
            "rating": self.rating,
            "amenities": list(self.amenities),
        }


def _parse_listing(raw: dict[str, Any]) -> ListingRef:
    try:
        listing = ListingRef(
            id=str(raw["id"]),
            kind=ListingKind(raw.get("kind", ListingKind.PROPERTY.value)),
            name=str(raw["name"]),
            nightly_rate=Decimal(str(raw["nightly_rate"])),
            max_guests=int(raw["max_guests"]),
            location=str(raw.get("location", "")),
            rating=float(raw["rating"]) if raw.get("rating") is not None else None,
            amenities=tuple(str(item) for item in raw.get("amenities", []) or []),
        )
    except (KeyError, TypeError, ArithmeticError) as exc:
        raise ValueError(f"Malformed catalog entry: {raw!r}") from exc
    if listing.nightly_rate < 0:
        raise ValueError(f"Listing {listing.id} has a negative nightly rate")
    if listing.max_guests < 1:
        raise ValueError(f"Listing {listing.id} must allow at least one guest")
    return listing


def load_catalog(path: Path) -> dict[str, ListingRef]:
    """Read listings from ``path`` keyed by id, preserving file order."""

    with path.open("r", encoding="utf-8") as fh:
        document = yaml.safe_load(fh) or {}
    listings: dict[str, ListingRef] = {}
    for raw in document.get("listings", []):
        listing = _parse_listing(raw)
        if listing.id in listings:
            raise ValueError(f"Duplicate listing id in catalog: {listing.id}")
        listings[listing.id] = listing
    logger.info("Loaded %s listing(s) from %s", len(listings), path)
    return listings


@lru_cache
def get_catalog() -> dict[str, ListingRef]:
    """Return the cached catalog configured by ``CATALOG_PATH``."""
    return load_catalog(get_settings().catalog_path)


def list_listings(
    kind: ListingKind | None = None,
    *,
    catalog: dict[str, ListingRef] | None = None,
) -> list[ListingRef]:
    catalog = get_catalog() if catalog is None else catalog
    return [
        listing for listing in catalog.values() if kind is None or listing.kind is kind
    ]


def get_listing(
    listing_id: str, *, catalog: dict[str, ListingRef] | None = None
) -> ListingRef:
    catalog = get_catalog() if catalog is None else catalog
    listing = catalog.get(listing_id)
    if listing is None:
        raise ListingNotFoundError("Listing not found")
    return listing


def check_capacity(listing: ListingRef, guests: int) -> None:
    """Reject parties outside ``[1, listing.max_guests]``."""

    if guests < 1:
        raise CapacityExceededError("At least one guest is required")
    if guests > listing.max_guests:
        raise CapacityExceededError(
            f"{listing.name} accepts at most {listing.max_guests} guest(s)"
        )
