"""
结账草稿测试
"""

from typing import Any, Dict

import pytest


@pytest.fixture
def checkout_payload() -> Dict[str, Any]:
    return {
        "buyer": {"name": "김하늘", "phone": "010-1234-5678", "email": "sky@example.com"},
        "shipping": {
            "recipient_name": "김바다",
            "recipient_phone": "010 9999 8888",
            "postcode": "06236",
            "address": "서울 강남구 테헤란로 123",
        },
        "memo": "부재 시 경비실",
        "items": [{"productId": "p1", "name": "Shirt", "price": 89000, "qty": 2}],
        "amount": 178000,
        "isGuest": True,
    }


def test_guest_draft_saved(client, guest_store, checkout_payload):
    response = client.post("/api/checkout", json=checkout_payload)

    assert response.status_code == 200
    assert response.json() == {"id": "guest_1"}
    row = guest_store.rows[0]
    assert row["buyer_phone"] == "01012345678"
    assert row["recipient_phone"] == "01099998888"
    assert row["address2"] is None
    assert row["currency"] == "KRW"
    assert row["status"] == "draft"
    assert row["amount"] == 178000


def test_guest_draft_without_amount_defaults_to_zero(client, guest_store, checkout_payload):
    checkout_payload.pop("amount")
    client.post("/api/checkout", json=checkout_payload)
    assert guest_store.rows[0]["amount"] == 0


def test_member_checkout_is_not_stored(client, guest_store, checkout_payload):
    checkout_payload["isGuest"] = False
    response = client.post("/api/checkout", json=checkout_payload)

    assert response.status_code == 200
    assert "id" not in response.json()
    assert guest_store.rows == []


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.update(items=[]),
        lambda p: p["buyer"].pop("phone"),
        lambda p: p["shipping"].pop("postcode"),
    ],
)
def test_invalid_checkout(client, guest_store, checkout_payload, mutate):
    mutate(checkout_payload)
    response = client.post("/api/checkout", json=checkout_payload)
    assert response.status_code == 400
    assert guest_store.rows == []
