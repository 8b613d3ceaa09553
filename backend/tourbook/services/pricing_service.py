"""Pricing engine for stays: stay discounts, fees and taxes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from tourbook.core.settings import PricingSettings, get_pricing_settings

logger = logging.getLogger(__name__)

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
_HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    """Itemized price of a stay.

    Totals are always assembled from the components by :func:`assemble`;
    instances are never edited in place.
    """

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
    promotion_amount: Decimal = ZERO
    promotion_applied: bool = False

    @property
    def is_zeroed(self) -> bool:
        return self.nights == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize the breakdown to plain types for responses."""

        return {
            "price_per_night": _to_str(self.price_per_night),
            "nights": self.nights,
            "guests": self.guests,
            "base_price": _to_str(self.base_price),
            "discount_percentage": _to_str(self.discount_percentage),
            "discount_amount": _to_str(self.discount_amount),
            "discount_reason": self.discount_reason,
            "subtotal": _to_str(self.subtotal),
            "cleaning_fee": _to_str(self.cleaning_fee),
            "service_fee": _to_str(self.service_fee),
            "total_before_taxes": _to_str(self.total_before_taxes),
            "iva_percentage": _to_str(self.iva_percentage),
            "iva_amount": _to_str(self.iva_amount),
            "tourism_tax": _to_str(self.tourism_tax),
            "total_taxes": _to_str(self.total_taxes),
            "grand_total": _to_str(self.grand_total),
            "promotion_code": self.promotion_code,
            "promotion_amount": _to_str(self.promotion_amount),
            "promotion_applied": self.promotion_applied,
        }


def to_money(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def _percent_of(amount: Decimal, percent: Decimal) -> Decimal:
    return to_money(amount * Decimal(percent) / _HUNDRED)


def assemble(
    *,
    price_per_night: Decimal,
    nights: int,
    guests: int,
    discount_percentage: Decimal,
    discount_amount: Decimal,
    discount_reason: str,
    cleaning_fee: Decimal,
    service_fee: Decimal,
    iva_percentage: Decimal,
    iva_amount: Decimal,
    tourism_tax: Decimal,
    promotion_code: str | None = None,
    promotion_amount: Decimal = ZERO,
) -> PriceBreakdown:
    """Build a breakdown, deriving every subtotal and total from its components."""

    price_per_night = to_money(price_per_night)
    base_price = to_money(price_per_night * nights)
    discount_amount = to_money(discount_amount)
    subtotal = base_price - discount_amount
    total_before_taxes = subtotal + cleaning_fee + service_fee
    total_taxes = iva_amount + tourism_tax
    return PriceBreakdown(
        price_per_night=price_per_night,
        nights=nights,
        guests=guests,
        base_price=base_price,
        discount_percentage=Decimal(discount_percentage),
        discount_amount=discount_amount,
        discount_reason=discount_reason,
        subtotal=subtotal,
        cleaning_fee=cleaning_fee,
        service_fee=service_fee,
        total_before_taxes=total_before_taxes,
        iva_percentage=Decimal(iva_percentage),
        iva_amount=iva_amount,
        tourism_tax=tourism_tax,
        total_taxes=total_taxes,
        grand_total=total_before_taxes + total_taxes,
        promotion_code=promotion_code,
        promotion_amount=to_money(promotion_amount),
        promotion_applied=promotion_code is not None,
    )


def compute(
    price_per_night: Decimal | int | str,
    nights: int,
    guests: int,
    *,
    rates: PricingSettings | None = None,
) -> PriceBreakdown:
    """Price a stay of ``nights`` nights at ``price_per_night``.

    Raises ``ValueError`` for a negative rate or fewer than one night or guest;
    callers that need a renderable state for bad input use :func:`zeroed`.
    """

    rates = rates or get_pricing_settings()
    nightly = to_money(price_per_night)
    if nightly < 0:
        raise ValueError("Price per night cannot be negative")
    if nights < 1:
        raise ValueError("A stay needs at least one night")
    if guests < 1:
        raise ValueError("A stay needs at least one guest")

    base_price = to_money(nightly * nights)
    tier = rates.tier_for(nights)
    discount_percentage = tier.percent if tier else Decimal("0")
    discount_amount = _percent_of(base_price, discount_percentage)
    discount_reason = f"{tier.label} ({tier.percent.normalize():f}%)" if tier else ""

    stay_subtotal = base_price - discount_amount
    breakdown = assemble(
        price_per_night=nightly,
        nights=nights,
        guests=guests,
        discount_percentage=discount_percentage,
        discount_amount=discount_amount,
        discount_reason=discount_reason,
        cleaning_fee=to_money(rates.cleaning_fee),
        service_fee=_percent_of(stay_subtotal, rates.service_fee_percent),
        iva_percentage=rates.iva_percent,
        iva_amount=_percent_of(stay_subtotal, rates.iva_percent),
        tourism_tax=to_money(rates.tourism_tax_per_night * nights),
    )
    logger.debug(
        "Priced %s night(s) at %s: grand total %s",
        nights,
        nightly,
        breakdown.grand_total,
    )
    return breakdown


def zeroed(
    price_per_night: Decimal | int | str = ZERO,
    guests: int = 0,
    *,
    rates: PricingSettings | None = None,
) -> PriceBreakdown:
    """Return the empty breakdown shown while a draft cannot be priced."""

    rates = rates or get_pricing_settings()
    return assemble(
        price_per_night=to_money(price_per_night),
        nights=0,
        guests=max(guests, 0),
        discount_percentage=Decimal("0"),
        discount_amount=ZERO,
        discount_reason="",
        cleaning_fee=ZERO,
        service_fee=ZERO,
        iva_percentage=rates.iva_percent,
        iva_amount=ZERO,
        tourism_tax=ZERO,
    )


def reconstruct_grand_total(breakdown: PriceBreakdown) -> Decimal:
    """Re-add the stored components of ``breakdown``."""

    return (
        breakdown.base_price
        - breakdown.discount_amount
        + breakdown.cleaning_fee
        + breakdown.service_fee
        + breakdown.iva_amount
        + breakdown.tourism_tax
    )
