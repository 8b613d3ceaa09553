"""API tests for listing and pricing endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_list_listings(client: AsyncClient) -> None:
    response = await client.get("/api/v1/listings")
    assert response.status_code == 200
    ids = [item["id"] for item in response.json()]
    assert "jardin-aguilas" in ids
    assert "isla-cholon" in ids


async def test_list_listings_by_kind(client: AsyncClient) -> None:
    response = await client.get("/api/v1/listings", params={"kind": "tour"})
    assert response.status_code == 200
    assert {item["kind"] for item in response.json()} == {"tour"}


async def test_get_listing_detail_and_missing(client: AsyncClient) -> None:
    response = await client.get("/api/v1/listings/medellin-opera")
    assert response.status_code == 200
    body = response.json()
    assert body["max_guests"] == 2
    assert body["nightly_rate"] == "280000"

    missing = await client.get("/api/v1/listings/nowhere")
    assert missing.status_code == 404


async def test_quote_with_raw_rate(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/pricing/quote",
        json={"price_per_night": "100000", "nights": 10, "guests": 2},
    )
    assert response.status_code == 200
    data = response.json()
    breakdown = data["breakdown"]
    assert data["promotion_status"] == "empty"
    assert breakdown["base_price"] == "1000000.00"
    assert breakdown["discount_amount"] == "100000.00"
    assert breakdown["subtotal"] == "900000.00"
    assert breakdown["service_fee"] == "45000.00"
    assert breakdown["iva_amount"] == "171000.00"
    assert breakdown["tourism_tax"] == "50000.00"
    assert breakdown["grand_total"] == "1216000.00"


async def test_quote_for_listing_with_promo(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "listing_id": "jardin-aguilas",
            "nights": 3,
            "guests": 2,
            "promotion_code": "descuento10",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["promotion_status"] == "applied"
    breakdown = data["breakdown"]
    # 540000 base, 54000 promo, fees and taxes on the pre-promo subtotal
    assert breakdown["promotion_amount"] == "54000.00"
    assert breakdown["discount_reason"] == "Promo code DESCUENTO10"
    assert breakdown["grand_total"] == "680600.00"


async def test_quote_unknown_promo_reports_not_found(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/pricing/quote",
        json={"listing_id": "jardin-aguilas", "nights": 3, "promotion_code": "NOPE"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["promotion_status"] == "not_found"
    assert data["breakdown"]["promotion_applied"] is False


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"nights": 2}, 422),
        ({"price_per_night": "100", "nights": 0}, 422),
        ({"price_per_night": "100", "nights": 2, "guests": 0}, 422),
        ({"listing_id": "nowhere", "nights": 2}, 404),
        ({"listing_id": "medellin-opera", "nights": 2, "guests": 3}, 422),
    ],
)
async def test_quote_rejects_bad_input(
    client: AsyncClient, payload: dict, expected: int
) -> None:
    response = await client.post("/api/v1/pricing/quote", json=payload)
    assert response.status_code == expected
