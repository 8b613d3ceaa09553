"""Specialized settings adapters for the pricing pipeline."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from tourbook.core.config import PromotionRule, StayDiscountTier, get_settings


class PricingSettings(BaseModel):
    """Slim view of fee, tax and discount configuration."""

    cleaning_fee: Decimal = Decimal("50000")
    service_fee_percent: Decimal = Decimal("5")
    iva_percent: Decimal = Decimal("19")
    tourism_tax_per_night: Decimal = Decimal("5000")
    stay_discount_tiers: list[StayDiscountTier] = Field(default_factory=list)

    model_config = {"frozen": True}

    def tier_for(self, nights: int) -> StayDiscountTier | None:
        """Return the longest-stay tier reached by ``nights``, if any."""
        eligible = [tier for tier in self.stay_discount_tiers if nights >= tier.min_nights]
        if not eligible:
            return None
        return max(eligible, key=lambda tier: tier.min_nights)


class CurrencySettings(BaseModel):
    """How money is displayed on vouchers."""

    code: str = "COP"
    decimals: int = 0

    model_config = {"frozen": True}


def get_pricing_settings() -> PricingSettings:
    """Return pricing-specific configuration."""

    settings = get_settings()
    return PricingSettings(
        cleaning_fee=settings.cleaning_fee,
        service_fee_percent=settings.service_fee_percent,
        iva_percent=settings.iva_percent,
        tourism_tax_per_night=settings.tourism_tax_per_night,
        stay_discount_tiers=list(settings.stay_discount_tiers),
    )


def get_promotion_registry() -> dict[str, PromotionRule]:
    """Return the configured promo codes keyed by normalized code."""

    return dict(get_settings().promo_codes)


def get_currency_settings() -> CurrencySettings:
    settings = get_settings()
    return CurrencySettings(code=settings.currency_code, decimals=settings.currency_decimals)
