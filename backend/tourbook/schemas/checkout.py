"""Checkout and confirmation schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from tourbook.schemas.listing import ListingRead
from tourbook.schemas.pricing import PriceBreakdownRead
from tourbook.schemas.reservation import DraftRequest


class ContactPayload(BaseModel):
    """Guest contact block; blank values are reported by checkout validation."""

    full_name: str = Field(default="", max_length=200)
    email: str = Field(default="", max_length=254)
    phone: str = Field(default="", max_length=40)
    country: str = Field(default="", max_length=80)

    model_config = ConfigDict(from_attributes=True)


class CheckoutRequest(BaseModel):
    draft: DraftRequest
    contact: ContactPayload
    terms_accepted: bool = False
    special_requests: str | None = Field(default=None, max_length=2000)


class CheckoutError(BaseModel):
    field: str
    message: str


class ConfirmationRead(BaseModel):
    """Completed checkout summary."""

    confirmation_id: str
    listing: ListingRead
    check_in: date
    check_out: date
    nights: int
    guests: int
    contact: ContactPayload
    breakdown: PriceBreakdownRead
    special_requests: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
