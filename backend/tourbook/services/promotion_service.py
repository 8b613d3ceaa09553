"""Promo code lookup and application on top of a priced stay."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from tourbook.core.config import PromotionRule
from tourbook.core.settings import get_promotion_registry
from tourbook.services.pricing_service import (
    PriceBreakdown,
    assemble,
    to_money,
)

logger = logging.getLogger(__name__)


class PromotionStatus(str, enum.Enum):
    """Outcome of a promo code application."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"
    ALREADY_APPLIED = "already_applied"
    EMPTY = "empty"
    NO_DISCOUNT = "no_discount"


@dataclass(frozen=True, slots=True)
class PromotionResult:
    breakdown: PriceBreakdown
    status: PromotionStatus
    code: str | None = None
    amount: Decimal = Decimal("0.00")

    @property
    def applied(self) -> bool:
        return self.status is PromotionStatus.APPLIED


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def lookup(
    code: str | None, *, registry: Mapping[str, PromotionRule] | None = None
) -> PromotionRule | None:
    """Return the rule registered for ``code`` (trimmed, case-insensitive)."""

    registry = get_promotion_registry() if registry is None else registry
    normalized = normalize_code(code)
    if not normalized:
        return None
    for candidate, rule in registry.items():
        if normalize_code(candidate) == normalized:
            return rule
    return None


def _promotion_amount(rule: PromotionRule, breakdown: PriceBreakdown) -> Decimal:
    if rule.kind == "amount":
        amount = Decimal(rule.value)
    else:
        amount = breakdown.base_price * Decimal(rule.value) / Decimal("100")
    return to_money(max(min(breakdown.subtotal, amount), Decimal("0")))


def apply(
    breakdown: PriceBreakdown,
    code: str | None,
    *,
    registry: Mapping[str, PromotionRule] | None = None,
) -> PromotionResult:
    """Apply ``code`` to ``breakdown``.

    Misses, and codes worth nothing on this stay, return the very same
    breakdown. A breakdown that already carries a promotion is returned
    untouched with ``ALREADY_APPLIED``.
    """

    normalized = normalize_code(code)
    if not normalized:
        return PromotionResult(breakdown=breakdown, status=PromotionStatus.EMPTY)
    if breakdown.promotion_applied:
        logger.info(
            "Rejected promo %s: breakdown already carries %s",
            normalized,
            breakdown.promotion_code,
        )
        return PromotionResult(
            breakdown=breakdown,
            status=PromotionStatus.ALREADY_APPLIED,
            code=breakdown.promotion_code,
        )

    rule = lookup(normalized, registry=registry)
    if rule is None or breakdown.is_zeroed:
        logger.debug("Promo code %s not found", normalized)
        return PromotionResult(
            breakdown=breakdown, status=PromotionStatus.NOT_FOUND, code=normalized
        )

    amount = _promotion_amount(rule, breakdown)
    if amount <= 0:
        logger.debug("Promo code %s yields no discount", normalized)
        return PromotionResult(
            breakdown=breakdown, status=PromotionStatus.NO_DISCOUNT, code=normalized
        )
    promoted = assemble(
        price_per_night=breakdown.price_per_night,
        nights=breakdown.nights,
        guests=breakdown.guests,
        discount_percentage=breakdown.discount_percentage,
        discount_amount=breakdown.discount_amount + amount,
        discount_reason=f"Promo code {normalized}",
        cleaning_fee=breakdown.cleaning_fee,
        service_fee=breakdown.service_fee,
        iva_percentage=breakdown.iva_percentage,
        iva_amount=breakdown.iva_amount,
        tourism_tax=breakdown.tourism_tax,
        promotion_code=normalized,
        promotion_amount=amount,
    )
    logger.info("Applied promo %s for %s", normalized, amount)
    return PromotionResult(
        breakdown=promoted,
        status=PromotionStatus.APPLIED,
        code=normalized,
        amount=amount,
    )
