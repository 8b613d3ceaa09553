"""Print an itemized quote for a listing or a raw nightly rate."""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation

from tourbook.services import catalog_service, draft_service, pricing_service, promotion_service
from tourbook.services.catalog_service import ListingKind, ListingRef
from tourbook.services.confirmation_service import format_currency

_LINES = (
    ("Base price", "base_price"),
    ("Discount", "discount_amount"),
    ("Subtotal", "subtotal"),
    ("Cleaning fee", "cleaning_fee"),
    ("Service fee", "service_fee"),
    ("Total before taxes", "total_before_taxes"),
    ("IVA", "iva_amount"),
    ("Tourism tax", "tourism_tax"),
    ("Total taxes", "total_taxes"),
    ("Grand total", "grand_total"),
)


def _render(breakdown: pricing_service.PriceBreakdown, title: str) -> str:
    lines = [title, "-" * len(title)]
    for label, attr in _LINES:
        lines.append(f"{label:<20} {format_currency(getattr(breakdown, attr)):>20}")
    if breakdown.discount_reason:
        lines.append(f"({breakdown.discount_reason})")
    return "\n".join(lines)


def _parse_rate(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"Invalid rate: {value}") from exc


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Quote a stay")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--listing", help="Catalog listing id")
    source.add_argument("--rate", type=_parse_rate, help="Nightly rate")
    parser.add_argument("--nights", type=int, default=1)
    parser.add_argument("--guests", type=int, default=1)
    parser.add_argument("--check-in", type=date.fromisoformat, default=None)
    parser.add_argument("--promo", default=None, help="Promo code to apply")
    args = parser.parse_args(argv)

    if args.listing:
        try:
            listing = catalog_service.get_listing(args.listing)
        except catalog_service.ListingNotFoundError:
            print(f"Unknown listing: {args.listing}", file=sys.stderr)
            return 1
        try:
            catalog_service.check_capacity(listing, args.guests)
        except catalog_service.CapacityExceededError as exc:
            print(exc, file=sys.stderr)
            return 1
    else:
        listing = ListingRef(
            id="custom",
            kind=ListingKind.PROPERTY,
            name="Custom rate",
            nightly_rate=args.rate,
            max_guests=args.guests,
        )

    check_in = args.check_in or date.today()
    draft = draft_service.create(
        listing,
        check_in,
        check_in + timedelta(days=args.nights),
        args.guests,
        promotion_code=args.promo,
    )
    if not draft.is_priceable:
        print("Nothing to quote: check nights, guests and rate.", file=sys.stderr)
        return 1
    print(_render(draft.breakdown, f"{listing.name}: {draft.nights} night(s)"))
    if args.promo and draft.promotion_status is not promotion_service.PromotionStatus.APPLIED:
        print(f"Promo code {args.promo!r}: {draft.promotion_status.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
