"""Confirmation records and plain-text vouchers."""

from __future__ import annotations

import datetime
import secrets
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from tourbook.core.settings import CurrencySettings, get_currency_settings
from tourbook.services.catalog_service import ListingRef
from tourbook.services.pricing_service import PriceBreakdown

__all__ = [
    "ConfirmationRecord",
    "ContactDetails",
    "format_currency",
    "generate_confirmation_id",
    "to_voucher_text",
]

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True, slots=True)
class ContactDetails:
    full_name: str
    email: str
    phone: str
    country: str

    def to_dict(self) -> dict[str, str]:
        return {
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "country": self.country,
        }


@dataclass(frozen=True, slots=True)
class ConfirmationRecord:
    """Frozen summary of a completed checkout."""

    confirmation_id: str
    listing: ListingRef
    check_in: datetime.date
    check_out: datetime.date
    guests: int
    contact: ContactDetails
    breakdown: PriceBreakdown
    created_at: datetime.datetime
    special_requests: str | None = None

    @property
    def nights(self) -> int:
        return self.breakdown.nights

    def to_dict(self) -> dict[str, Any]:
        return {
            "confirmation_id": self.confirmation_id,
            "listing": self.listing.to_dict(),
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "nights": self.nights,
            "guests": self.guests,
            "contact": self.contact.to_dict(),
            "breakdown": self.breakdown.to_dict(),
            "special_requests": self.special_requests,
            "created_at": self.created_at.isoformat(),
        }


def generate_confirmation_id(
    prefix: str = "RES", *, now: datetime.datetime | None = None
) -> str:
    """Timestamp plus a random suffix, e.g. ``RES-1760900000000-4F2A9C``."""

    now = now or datetime.datetime.now(datetime.UTC)
    millis = int(now.timestamp() * 1000)
    return f"{prefix}-{millis}-{secrets.token_hex(3).upper()}"


def format_currency(
    amount: Decimal, currency: CurrencySettings | None = None
) -> str:
    """Render ``amount`` with Colombian grouping, e.g. ``$1.216.000 COP``."""

    currency = currency or get_currency_settings()
    places = Decimal(1).scaleb(-currency.decimals)
    value = Decimal(amount).quantize(places, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.{currency.decimals}f}"
    # swap to "." thousands and "," decimals
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}${grouped} {currency.code}"


def to_voucher_text(
    record: ConfirmationRecord, currency: CurrencySettings | None = None
) -> str:
    """Render the voucher from the frozen breakdown on ``record``."""

    currency = currency or get_currency_settings()
    breakdown = record.breakdown

    def money(value: Decimal) -> str:
        return format_currency(value, currency)

    def percent(value: Decimal) -> str:
        return f"{Decimal(value).normalize():f}"

    # fees and IVA are charged on the stay subtotal before any promo code
    promotion_amount = Decimal("0")
    stay_reason = breakdown.discount_reason
    if breakdown.promotion_applied:
        promotion_amount = breakdown.promotion_amount
        stay_reason = f"Stay discount ({percent(breakdown.discount_percentage)}%)"

    template = _ENV.get_template("voucher.txt")
    return template.render(
        record=record,
        listing=record.listing,
        contact=record.contact,
        breakdown=breakdown,
        money=money,
        percent=percent,
        stay_discount=breakdown.discount_amount - promotion_amount,
        stay_subtotal=breakdown.subtotal + promotion_amount,
        stay_reason=stay_reason,
        created_at=record.created_at.isoformat(),
        check_in=record.check_in.isoformat(),
        check_out=record.check_out.isoformat(),
    )
