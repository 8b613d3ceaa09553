"""Schema exports."""

from tourbook.schemas.checkout import (
    CheckoutError,
    CheckoutRequest,
    ConfirmationRead,
    ContactPayload,
)
from tourbook.schemas.listing import ListingRead
from tourbook.schemas.pricing import (
    PriceBreakdownRead,
    PricingQuoteRead,
    PricingQuoteRequest,
)
from tourbook.schemas.reservation import DraftRead, DraftRequest

__all__ = [
    "CheckoutError",
    "CheckoutRequest",
    "ConfirmationRead",
    "ContactPayload",
    "DraftRead",
    "DraftRequest",
    "ListingRead",
    "PriceBreakdownRead",
    "PricingQuoteRead",
    "PricingQuoteRequest",
]
