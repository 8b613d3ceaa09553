"""Tests for voucher rendering and the confirmation store."""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from tourbook.core.config import PromotionRule, get_settings
from tourbook.core.settings import CurrencySettings
from tourbook.services import (
    checkout_service,
    confirmation_service,
    confirmation_store,
    draft_service,
)
from tourbook.services.checkout_service import CheckoutSession
from tourbook.services.confirmation_service import ContactDetails

CONTACT = ContactDetails(
    full_name="Andrés Gómez",
    email="andres@example.com",
    phone="+57 310 555 0101",
    country="Colombia",
)


@pytest.fixture()
def record(cabin, rates):
    draft = draft_service.create(
        cabin,
        date(2026, 12, 1),
        date(2026, 12, 11),
        2,
        promotion_code="DESCUENTO10",
        rates=rates,
        registry={"DESCUENTO10": PromotionRule(kind="percent", value=Decimal("10"))},
    )
    session = CheckoutSession(
        draft=draft,
        contact=CONTACT,
        terms_accepted=True,
        special_requests="Llegada tarde, 10pm",
    )
    return checkout_service.submit(
        session, now=datetime(2026, 10, 19, 12, 0, tzinfo=UTC), prefix="RES"
    )


@pytest.mark.parametrize(
    "amount,expected",
    [
        (Decimal("1216000"), "$1.216.000 COP"),
        (Decimal("0"), "$0 COP"),
        (Decimal("999.5"), "$1.000 COP"),
        (Decimal("-50000"), "-$50.000 COP"),
    ],
)
def test_format_currency_colombian_grouping(amount: Decimal, expected: str) -> None:
    assert confirmation_service.format_currency(amount, CurrencySettings()) == expected


def test_format_currency_with_decimals() -> None:
    usd = CurrencySettings(code="USD", decimals=2)
    assert confirmation_service.format_currency(Decimal("1234.5"), usd) == "$1.234,50 USD"


def test_voucher_contains_booking_details(record) -> None:
    text = confirmation_service.to_voucher_text(record, CurrencySettings())

    assert record.confirmation_id in text
    assert "LISTING: Cabaña de Prueba" in text
    assert "GUEST: Andrés Gómez" in text
    assert "EMAIL: andres@example.com" in text
    assert "PHONE: +57 310 555 0101" in text
    assert "COUNTRY: Colombia" in text
    assert "Check-in: 2026-12-01" in text
    assert "Check-out: 2026-12-11" in text
    assert "Guests: 2" in text
    assert "Stay discount (10%): -$100.000 COP" in text
    assert "Subtotal: $900.000 COP" in text
    assert "Promo code DESCUENTO10: -$100.000 COP" in text
    assert "IVA (19%): $171.000 COP" in text
    assert "TOTAL: $1.116.000 COP" in text
    assert "Llegada tarde, 10pm" in text


def test_voucher_is_deterministic(record) -> None:
    first = confirmation_service.to_voucher_text(record, CurrencySettings())
    second = confirmation_service.to_voucher_text(record, CurrencySettings())
    assert first == second


def test_voucher_uses_frozen_breakdown_not_current_rates(record, monkeypatch) -> None:
    before = confirmation_service.to_voucher_text(record, CurrencySettings())
    monkeypatch.setattr(
        "tourbook.services.pricing_service.compute",
        lambda *args, **kwargs: pytest.fail("voucher must not reprice"),
    )
    after = confirmation_service.to_voucher_text(record, CurrencySettings())
    assert before == after
    assert confirmation_service.format_currency(record.breakdown.grand_total) in after


def test_generate_confirmation_id_shape() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    confirmation_id = confirmation_service.generate_confirmation_id("RES", now=now)
    prefix, millis, suffix = confirmation_id.split("-")
    assert prefix == "RES"
    assert millis == str(int(now.timestamp() * 1000))
    assert len(suffix) == 6


def test_store_keeps_recent_confirmations(record, settings_env) -> None:
    settings_env.setenv("CONFIRMATION_STORE_SIZE", "2")
    get_settings.cache_clear()
    confirmation_store.put(record)
    assert confirmation_store.get(record.confirmation_id) is record

    for suffix in ("A", "B"):
        confirmation_store.put(
            confirmation_service.ConfirmationRecord(
                **{**_fields(record), "confirmation_id": f"RES-1-{suffix}"}
            )
        )
    assert confirmation_store.get(record.confirmation_id) is None
    assert [item.confirmation_id for item in confirmation_store.snapshot()] == [
        "RES-1-A",
        "RES-1-B",
    ]


def _fields(record) -> dict:
    return {
        "confirmation_id": record.confirmation_id,
        "listing": record.listing,
        "check_in": record.check_in,
        "check_out": record.check_out,
        "guests": record.guests,
        "contact": record.contact,
        "breakdown": record.breakdown,
        "created_at": record.created_at,
        "special_requests": record.special_requests,
    }


def test_voucher_price_lines_add_up_to_total(record) -> None:
    text = confirmation_service.to_voucher_text(record, CurrencySettings())
    lines = dict(
        line.split(": ", 1) for line in text.splitlines() if line.endswith(" COP")
    )
    subtotal = _amount(lines["Subtotal"])
    charges = sum(
        _amount(lines[label])
        for label in ("Cleaning fee", "Service fee", "IVA (19%)", "Tourism tax")
    )
    promo = _amount(lines["Promo code DESCUENTO10"])

    assert subtotal * Decimal("0.19") == _amount(lines["IVA (19%)"])
    assert subtotal + charges + promo == _amount(lines["TOTAL"])


def test_voucher_without_promo_keeps_stay_reason(cabin, rates) -> None:
    draft = draft_service.create(
        cabin, date(2026, 12, 1), date(2026, 12, 11), 2, rates=rates
    )
    session = CheckoutSession(draft=draft, contact=CONTACT, terms_accepted=True)
    text = confirmation_service.to_voucher_text(
        checkout_service.submit(session), CurrencySettings()
    )
    assert "Weekly stay discount (10%): -$100.000 COP" in text
    assert "Promo code" not in text
    assert "TOTAL: $1.216.000 COP" in text


def _amount(rendered: str) -> Decimal:
    """Parse ``$1.216.000 COP`` or ``-$100.000 COP`` back into a Decimal."""
    sign = -1 if rendered.startswith("-") else 1
    digits = rendered.lstrip("-$").split(" ")[0].replace(".", "")
    return sign * Decimal(digits)
