"""Pricing-related API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tourbook.api import deps
from tourbook.core.config import PromotionRule
from tourbook.core.settings import PricingSettings
from tourbook.schemas.pricing import (
    PriceBreakdownRead,
    PricingQuoteRead,
    PricingQuoteRequest,
)
from tourbook.services import catalog_service, pricing_service, promotion_service
from tourbook.services.catalog_service import ListingRef

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/quote", response_model=PricingQuoteRead, summary="Quote a stay")
async def quote_stay(
    payload: PricingQuoteRequest,
    catalog: Annotated[dict[str, ListingRef], Depends(deps.get_catalog)],
    rates: Annotated[PricingSettings, Depends(deps.get_rates)],
    promotions: Annotated[dict[str, PromotionRule], Depends(deps.get_promotions)],
) -> PricingQuoteRead:
    price_per_night = payload.price_per_night
    if payload.listing_id is not None:
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
        price_per_night = listing.nightly_rate

    breakdown = pricing_service.compute(
        price_per_night, payload.nights, payload.guests, rates=rates
    )
    result = promotion_service.apply(
        breakdown, payload.promotion_code, registry=promotions
    )
    return PricingQuoteRead(
        listing_id=payload.listing_id,
        breakdown=PriceBreakdownRead.model_validate(result.breakdown),
        promotion_status=result.status,
    )
