"""Versioned API router."""

from fastapi import APIRouter

from . import (
    checkout,
    confirmations,
    drafts,
    health,
    listings,
    pricing,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(listings.router, prefix="/listings", tags=["listings"])
router.include_router(pricing.router, tags=["pricing"])
router.include_router(drafts.router, tags=["drafts"])
router.include_router(checkout.router, tags=["checkout"])
router.include_router(confirmations.router, tags=["confirmations"])

__all__ = ["router"]
