"""Common API dependencies."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

from tourbook.core.config import PromotionRule
from tourbook.core.settings import (
    PricingSettings,
    get_pricing_settings,
    get_promotion_registry,
)
from tourbook.services import catalog_service
from tourbook.services.catalog_service import ListingRef

_SECONDS_MAP = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Turn ``"20/minute"`` into ``(20, 60)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    seconds = _SECONDS_MAP.get(window_str.strip().lower(), fallback[1])
    return count, seconds


def rate_dependency(limit: tuple[int, int]) -> Any:
    """Rate limit a route when the limiter has a Redis connection."""

    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


def get_catalog() -> dict[str, ListingRef]:
    """Provide the listing catalog."""
    return catalog_service.get_catalog()


def get_rates() -> PricingSettings:
    """Provide the configured fee and tax rates."""
    return get_pricing_settings()


def get_promotions() -> dict[str, PromotionRule]:
    """Provide the promo code registry."""
    return get_promotion_registry()
