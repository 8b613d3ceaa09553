"""Service layer exports."""
from tourbook.services import (
    catalog_service,
    checkout_service,
    confirmation_service,
    confirmation_store,
    draft_service,
    pricing_service,
    promotion_service,
)

__all__ = [
    "catalog_service",
    "checkout_service",
    "confirmation_service",
    "confirmation_store",
    "draft_service",
    "pricing_service",
    "promotion_service",
]
