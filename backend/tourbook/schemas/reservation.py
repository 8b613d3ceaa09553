"""Pydantic schemas for reservation drafts."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from tourbook.schemas.listing import ListingRead
from tourbook.schemas.pricing import PriceBreakdownRead
from tourbook.services.promotion_service import PromotionStatus


class DraftRequest(BaseModel):
    """A guest's selection; sent in full on every change."""

    listing_id: str
    check_in: date
    check_out: date
    guests: int = Field(default=1, ge=1)
    promotion_code: str | None = Field(default=None, max_length=64)


class DraftRead(BaseModel):
    """Priced selection returned to the client."""

    listing: ListingRead
    check_in: date
    check_out: date
    guests: int
    nights: int
    is_priceable: bool
    promotion_code: str | None = None
    promotion_status: PromotionStatus
    breakdown: PriceBreakdownRead

    model_config = ConfigDict(from_attributes=True)
