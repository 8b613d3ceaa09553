"""Pricing schema definitions."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tourbook.services.promotion_service import PromotionStatus


class PricingQuoteRequest(BaseModel):
    """Input payload for quoting a stay.

    Either ``listing_id`` or a raw ``price_per_night`` must be given; the
    catalog rate wins when both are present.
    """

    listing_id: str | None = None
    price_per_night: Decimal | None = Field(default=None, ge=Decimal("0"))
    nights: int = Field(..., ge=1)
    guests: int = Field(default=1, ge=1)
    promotion_code: str | None = Field(default=None, max_length=64)

    @model_validator(mode="after")
    def _require_rate_source(self) -> "PricingQuoteRequest":
        if self.listing_id is None and self.price_per_night is None:
            raise ValueError("Provide listing_id or price_per_night")
        return self


class PriceBreakdownRead(BaseModel):
    """Itemized price of a stay."""

    price_per_night: Decimal
    nights: int
    guests: int
    base_price: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    discount_reason: str
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    total_before_taxes: Decimal
    iva_percentage: Decimal
    iva_amount: Decimal
    tourism_tax: Decimal
    total_taxes: Decimal
    grand_total: Decimal
    promotion_code: str | None = None
    promotion_amount: Decimal
    promotion_applied: bool

    model_config = ConfigDict(from_attributes=True)


class PricingQuoteRead(BaseModel):
    """Quote response with the promo outcome."""

    listing_id: str | None = None
    breakdown: PriceBreakdownRead
    promotion_status: PromotionStatus

    model_config = ConfigDict(from_attributes=True)
