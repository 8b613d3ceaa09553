"""Reservation draft endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tourbook.api import deps
from tourbook.core.config import PromotionRule
from tourbook.core.settings import PricingSettings
from tourbook.schemas.reservation import DraftRead, DraftRequest
from tourbook.services import catalog_service, draft_service
from tourbook.services.catalog_service import ListingRef
from tourbook.services.draft_service import ReservationDraft

router = APIRouter(prefix="/drafts", tags=["drafts"])


def draft_from_request(
    payload: DraftRequest,
    *,
    catalog: dict[str, ListingRef],
    rates: PricingSettings,
    promotions: dict[str, PromotionRule],
) -> ReservationDraft:
    """Resolve the listing, enforce its capacity and price the selection."""

    try:
        listing = catalog_service.get_listing(payload.listing_id, catalog=catalog)
        catalog_service.check_capacity(listing, payload.guests)
    except catalog_service.ListingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except catalog_service.CapacityExceededError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return draft_service.create(
        listing,
        payload.check_in,
        payload.check_out,
        payload.guests,
        promotion_code=payload.promotion_code,
        rates=rates,
        registry=promotions,
    )


@router.post("", response_model=DraftRead, summary="Price a booking selection")
async def price_draft(
    payload: DraftRequest,
    catalog: Annotated[dict[str, ListingRef], Depends(deps.get_catalog)],
    rates: Annotated[PricingSettings, Depends(deps.get_rates)],
    promotions: Annotated[dict[str, PromotionRule], Depends(deps.get_promotions)],
) -> DraftRead:
    draft = draft_from_request(
        payload, catalog=catalog, rates=rates, promotions=promotions
    )
    return DraftRead.model_validate(draft)
