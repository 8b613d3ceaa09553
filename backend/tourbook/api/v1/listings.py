"""Listing catalog endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tourbook.api import deps
from tourbook.schemas.listing import ListingRead
from tourbook.services import catalog_service
from tourbook.services.catalog_service import ListingKind, ListingRef

router = APIRouter()


@router.get("", response_model=list[ListingRead], summary="List properties and tours")
async def list_listings(
    catalog: Annotated[dict[str, ListingRef], Depends(deps.get_catalog)],
    kind: ListingKind | None = None,
) -> list[ListingRead]:
    listings = catalog_service.list_listings(kind, catalog=catalog)
    return [ListingRead.model_validate(listing) for listing in listings]


@router.get("/{listing_id}", response_model=ListingRead, summary="Listing detail")
async def get_listing(
    listing_id: str,
    catalog: Annotated[dict[str, ListingRef], Depends(deps.get_catalog)],
) -> ListingRead:
    try:
        listing = catalog_service.get_listing(listing_id, catalog=catalog)
    except catalog_service.ListingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return ListingRead.model_validate(listing)
