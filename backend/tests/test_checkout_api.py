"""API tests for checkout, confirmation lookup and voucher download."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tourbook.services import confirmation_store

pytestmark = pytest.mark.asyncio


def _payload(**overrides) -> dict:
    payload = {
        "draft": {
            "listing_id": "jardin-aguilas",
            "check_in": "2026-11-01",
            "check_out": "2026-11-08",
            "guests": 2,
        },
        "contact": {
            "full_name": "Camila Restrepo",
            "email": "camila@example.com",
            "phone": "+57 301 222 3344",
            "country": "Colombia",
        },
        "terms_accepted": True,
        "special_requests": "Cuna para bebé",
    }
    payload.update(overrides)
    return payload


async def test_checkout_issues_confirmation(client: AsyncClient) -> None:
    response = await client.post("/api/v1/checkout", json=_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["confirmation_id"].startswith("RES-")
    assert data["nights"] == 7
    assert data["guests"] == 2
    assert data["contact"]["email"] == "camila@example.com"
    assert data["breakdown"]["grand_total"] == "1491160.00"
    assert data["special_requests"] == "Cuna para bebé"

    lookup = await client.get(f"/api/v1/confirmations/{data['confirmation_id']}")
    assert lookup.status_code == 200
    assert lookup.json()["breakdown"] == data["breakdown"]


async def test_voucher_download(client: AsyncClient) -> None:
    created = await client.post("/api/v1/checkout", json=_payload())
    confirmation_id = created.json()["confirmation_id"]

    response = await client.get(f"/api/v1/confirmations/{confirmation_id}/voucher")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert (
        response.headers["content-disposition"]
        == f'attachment; filename="reserva-{confirmation_id}.txt"'
    )
    text = response.text
    assert confirmation_id in text
    assert "GUEST: Camila Restrepo" in text
    assert "TOTAL: $1.491.160 COP" in text
    assert "Cuna para bebé" in text


@pytest.mark.parametrize("field", ["full_name", "email", "phone", "country"])
async def test_checkout_requires_contact_fields(client: AsyncClient, field: str) -> None:
    payload = _payload()
    payload["contact"][field] = "  "
    response = await client.post("/api/v1/checkout", json=payload)
    assert response.status_code == 422
    assert response.json()["detail"]["field"] == field


async def test_checkout_requires_terms(client: AsyncClient) -> None:
    response = await client.post("/api/v1/checkout", json=_payload(terms_accepted=False))
    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "terms_accepted"


async def test_checkout_rejects_empty_stay(client: AsyncClient) -> None:
    payload = _payload()
    payload["draft"]["check_out"] = payload["draft"]["check_in"]
    response = await client.post("/api/v1/checkout", json=payload)
    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "dates"


async def test_checkout_over_capacity(client: AsyncClient) -> None:
    payload = _payload()
    payload["draft"]["listing_id"] = "medellin-opera"
    payload["draft"]["guests"] = 3
    response = await client.post("/api/v1/checkout", json=payload)
    assert response.status_code == 422


async def test_unknown_confirmation(client: AsyncClient) -> None:
    response = await client.get("/api/v1/confirmations/RES-0-000000")
    assert response.status_code == 404
    voucher = await client.get("/api/v1/confirmations/RES-0-000000/voucher")
    assert voucher.status_code == 404


async def test_failed_checkout_stores_nothing(client: AsyncClient) -> None:
    await client.post("/api/v1/checkout", json=_payload(terms_accepted=False))
    assert confirmation_store.snapshot() == []
