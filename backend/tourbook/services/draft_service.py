"""In-progress booking selections and their pricing."""

from __future__ import annotations

import dataclasses
import datetime
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tourbook.core.config import PromotionRule
from tourbook.core.settings import PricingSettings
from tourbook.services import pricing_service, promotion_service
from tourbook.services.catalog_service import ListingRef
from tourbook.services.pricing_service import PriceBreakdown
from tourbook.services.promotion_service import PromotionStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReservationDraft:
    """A guest's current selection; lives only for the browsing session."""

    listing: ListingRef
    check_in: datetime.date
    check_out: datetime.date
    guests: int
    breakdown: PriceBreakdown
    promotion_code: str | None = None
    promotion_status: PromotionStatus = PromotionStatus.EMPTY

    @property
    def nights(self) -> int:
        return self.breakdown.nights

    @property
    def is_priceable(self) -> bool:
        return not self.breakdown.is_zeroed

    def to_dict(self) -> dict[str, Any]:
        return {
            "listing": self.listing.to_dict(),
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "guests": self.guests,
            "nights": self.nights,
            "promotion_code": self.promotion_code,
            "promotion_status": self.promotion_status.value,
            "breakdown": self.breakdown.to_dict(),
        }


def count_nights(check_in: datetime.date, check_out: datetime.date) -> int:
    """Whole nights between the dates, clamped at zero."""
    return max((check_out - check_in).days, 0)


def _price(
    listing: ListingRef,
    check_in: datetime.date,
    check_out: datetime.date,
    guests: int,
    promotion_code: str | None,
    rates: PricingSettings | None,
    registry: Mapping[str, PromotionRule] | None,
) -> tuple[PriceBreakdown, PromotionStatus]:
    nights = count_nights(check_in, check_out)
    if nights < 1 or guests < 1 or listing.nightly_rate < 0:
        logger.debug(
            "Draft for %s is not priceable (nights=%s, guests=%s, rate=%s)",
            listing.id,
            nights,
            guests,
            listing.nightly_rate,
        )
        return pricing_service.zeroed(listing.nightly_rate, guests, rates=rates), (
            PromotionStatus.EMPTY
        )

    breakdown = pricing_service.compute(
        listing.nightly_rate, nights, guests, rates=rates
    )
    result = promotion_service.apply(breakdown, promotion_code, registry=registry)
    return result.breakdown, result.status


def create(
    listing: ListingRef,
    check_in: datetime.date,
    check_out: datetime.date,
    guests: int,
    *,
    promotion_code: str | None = None,
    rates: PricingSettings | None = None,
    registry: Mapping[str, PromotionRule] | None = None,
) -> ReservationDraft:
    """Start a draft and price it.

    Bad dates, an empty party or a negative rate produce a zeroed breakdown
    rather than an error so the selection can still be displayed.
    """

    code = promotion_service.normalize_code(promotion_code) or None
    breakdown, status = _price(
        listing, check_in, check_out, guests, code, rates, registry
    )
    return ReservationDraft(
        listing=listing,
        check_in=check_in,
        check_out=check_out,
        guests=guests,
        breakdown=breakdown,
        promotion_code=code,
        promotion_status=status,
    )


def recompute(
    draft: ReservationDraft,
    *,
    rates: PricingSettings | None = None,
    registry: Mapping[str, PromotionRule] | None = None,
) -> ReservationDraft:
    """Return a freshly priced copy of ``draft``; the original is left as is."""

    return create(
        draft.listing,
        draft.check_in,
        draft.check_out,
        draft.guests,
        promotion_code=draft.promotion_code,
        rates=rates,
        registry=registry,
    )


def update(
    draft: ReservationDraft,
    *,
    rates: PricingSettings | None = None,
    registry: Mapping[str, PromotionRule] | None = None,
    **changes: Any,
) -> ReservationDraft:
    """Change selection inputs (dates, guests, listing, promo) and reprice."""

    allowed = {"listing", "check_in", "check_out", "guests", "promotion_code"}
    unknown = set(changes) - allowed
    if unknown:
        raise TypeError(f"Unsupported draft field(s): {', '.join(sorted(unknown))}")
    return recompute(dataclasses.replace(draft, **changes), rates=rates, registry=registry)
