"""Tests for the /paymentMethod routes.

Tests verify:
- Create validation responses (400) and successful creation (201)
- Listing with filters and field projection
- Get, patch and delete by ID, including 404s
- Listener notification as observed by the recording delivery
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from tmf_shared.models import EventType

BASE_PATH = "/tmf-api/paymentMethod/v4"
COLLECTION = f"{BASE_PATH}/paymentMethod"


@pytest.fixture
def registered_listener(client: TestClient) -> dict[str, Any]:
    response = client.post(f"{BASE_PATH}/hub", json={"callback": "https://client.example.com/cb"})
    assert response.status_code == 201
    return response.json()


def _create(client: TestClient, payload: dict[str, Any]) -> dict[str, Any]:
    response = client.post(COLLECTION, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePaymentMethod:
    """POST /paymentMethod"""

    @pytest.mark.parametrize(
        "payload",
        [{}, {"name": "Till"}, {"@type": "Cash"}, {"name": "", "@type": "Cash"}],
    )
    def test_missing_name_or_type_returns_400(
        self, client: TestClient, payload: dict[str, Any]
    ) -> None:
        response = client.post(COLLECTION, json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "ERR_VALIDATION"
        assert data["error"] == "name and @type are required"
        assert client.get(COLLECTION).json() == []

    def test_invalid_type_lists_valid_types(self, client: TestClient) -> None:
        response = client.post(COLLECTION, json={"name": "x", "@type": "CreditLine"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error.startswith("Invalid @type. Must be one of:")
        assert "LoyaltyPaymentMethod" in error

    def test_incomplete_bank_card_returns_400(self, client: TestClient) -> None:
        response = client.post(
            COLLECTION, json={"name": "Visa", "@type": "BankCard", "cardNumber": "4111"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Required fields for BankCard missing: brand, expirationDate, nameOnCard"
        )

    def test_complete_bank_card_returns_201(
        self, client: TestClient, bank_card_payload: dict[str, Any]
    ) -> None:
        data = _create(client, bank_card_payload)

        assert data["id"]
        assert data["status"] == "Active"
        assert data["@baseType"] == "PaymentMethod"
        assert data["@type"] == "BankCard"
        assert data["statusDate"]
        assert data["href"] == f"{COLLECTION}/{data['id']}"
        assert data["nameOnCard"] == "Jane Doe"

    def test_href_resolves_to_same_resource(
        self, client: TestClient, digital_wallet_payload: dict[str, Any]
    ) -> None:
        created = _create(client, digital_wallet_payload)

        fetched = client.get(created["href"])

        assert fetched.status_code == 200
        assert fetched.json() == created

    def test_unknown_status_returns_400(
        self, client: TestClient, check_payload: dict[str, Any]
    ) -> None:
        response = client.post(COLLECTION, json={**check_payload, "status": "Frozen"})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "ERR_VALIDATION"
        assert data["details"][0]["loc"] == ["body", "status"]

    def test_malformed_json_returns_400(self, client: TestClient) -> None:
        response = client.post(
            COLLECTION, content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

    def test_create_emits_one_event_per_listener(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any],
        bank_card_payload: dict[str, Any],
    ) -> None:
        created = _create(client, bank_card_payload)

        events = recording_delivery.events_of(EventType.CREATE)
        assert len(events) == 1
        assert events[0].event["paymentMethod"] == created

    def test_rejected_create_emits_nothing(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any]
    ) -> None:
        client.post(COLLECTION, json={"name": "x"})

        assert recording_delivery.delivered == []


class TestListPaymentMethods:
    """GET /paymentMethod"""

    @pytest.fixture
    def seeded(
        self, client: TestClient, bank_card_payload: dict[str, Any],
        digital_wallet_payload: dict[str, Any], check_payload: dict[str, Any],
    ) -> TestClient:
        _create(client, bank_card_payload)
        _create(client, digital_wallet_payload)
        _create(client, {**check_payload, "status": "Suspended"})
        return client

    def test_empty(self, client: TestClient) -> None:
        response = client.get(COLLECTION)

        assert response.status_code == 200
        assert response.json() == []

    def test_list_all(self, seeded: TestClient) -> None:
        assert len(seeded.get(COLLECTION).json()) == 3

    def test_filter_by_type(self, seeded: TestClient) -> None:
        data = seeded.get(COLLECTION, params={"@type": "BankCard"}).json()

        assert [item["name"] for item in data] == ["Corporate Visa"]

    def test_filter_by_status_and_name(self, seeded: TestClient) -> None:
        data = seeded.get(COLLECTION, params={"status": "Suspended", "name": "Rent check"}).json()

        assert len(data) == 1
        assert data[0]["@type"] == "Check"

    def test_filters_with_no_match(self, seeded: TestClient) -> None:
        assert seeded.get(COLLECTION, params={"status": "Expired"}).json() == []

    def test_fields_projection(self, seeded: TestClient) -> None:
        data = seeded.get(COLLECTION, params={"fields": "name,status"}).json()

        assert len(data) == 3
        assert all(set(item) == {"id", "name", "status"} for item in data)

    def test_fields_projection_with_href(self, seeded: TestClient) -> None:
        data = seeded.get(COLLECTION, params={"fields": "href"}).json()

        assert all(item["href"] == f"{COLLECTION}/{item['id']}" for item in data)


class TestGetPaymentMethod:
    """GET /paymentMethod/{id}"""

    def test_get(self, client: TestClient, check_payload: dict[str, Any]) -> None:
        created = _create(client, check_payload)

        response = client.get(f"{COLLECTION}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["signedDate"] == "2026-01-15"

    def test_get_with_fields(self, client: TestClient, check_payload: dict[str, Any]) -> None:
        created = _create(client, check_payload)

        response = client.get(f"{COLLECTION}/{created['id']}", params={"fields": "name, status"})

        assert response.json() == {"id": created["id"], "name": "Rent check", "status": "Active"}

    def test_get_missing_returns_404(self, client: TestClient) -> None:
        response = client.get(f"{COLLECTION}/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "ERR_NOT_FOUND"
        assert data["error"] == "Not found"


class TestPatchPaymentMethod:
    """PATCH /paymentMethod/{id}"""

    def test_patch_status(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any],
        bank_card_payload: dict[str, Any],
    ) -> None:
        created = _create(client, bank_card_payload)

        response = client.patch(f"{COLLECTION}/{created['id']}", json={"status": "Suspended"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Suspended"
        assert data["statusDate"] > created["statusDate"]
        assert data["cardNumber"] == created["cardNumber"]
        events = recording_delivery.events_of(EventType.ATTRIBUTE_VALUE_CHANGE)
        assert len(events) == 1
        assert events[0].event["paymentMethod"]["status"] == "Suspended"

    def test_patch_is_persisted(
        self, client: TestClient, bank_card_payload: dict[str, Any]
    ) -> None:
        created = _create(client, bank_card_payload)

        client.patch(f"{COLLECTION}/{created['id']}", json={"description": "Renewed"})

        assert client.get(f"{COLLECTION}/{created['id']}").json()["description"] == "Renewed"

    def test_patch_null_is_ignored(
        self, client: TestClient, bank_card_payload: dict[str, Any]
    ) -> None:
        created = _create(client, bank_card_payload)

        response = client.patch(f"{COLLECTION}/{created['id']}", json={"brand": None})

        assert response.status_code == 200
        assert response.json()["brand"] == "Visa"

    def test_patch_type_without_variant_fields_returns_400(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any],
        bank_card_payload: dict[str, Any],
    ) -> None:
        created = _create(client, bank_card_payload)

        response = client.patch(f"{COLLECTION}/{created['id']}", json={"@type": "Check"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Required fields for Check missing")
        assert recording_delivery.events_of(EventType.ATTRIBUTE_VALUE_CHANGE) == []

    @pytest.mark.parametrize("field", ["@type", "name"])
    def test_patch_blank_name_or_type_returns_400(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any],
        bank_card_payload: dict[str, Any], field: str,
    ) -> None:
        created = _create(client, bank_card_payload)

        response = client.patch(f"{COLLECTION}/{created['id']}", json={field: ""})

        assert response.status_code == 400
        assert response.json()["error"] == "name and @type cannot be empty"
        stored = client.get(f"{COLLECTION}/{created['id']}").json()
        assert stored["@type"] == "BankCard"
        assert stored["name"] == "Corporate Visa"
        assert recording_delivery.events_of(EventType.ATTRIBUTE_VALUE_CHANGE) == []

    def test_patch_invalid_type_returns_400(
        self, client: TestClient, bank_card_payload: dict[str, Any]
    ) -> None:
        created = _create(client, bank_card_payload)

        response = client.patch(f"{COLLECTION}/{created['id']}", json={"@type": "Barter"})

        assert response.status_code == 400

    def test_patch_missing_returns_404(self, client: TestClient) -> None:
        response = client.patch(f"{COLLECTION}/does-not-exist", json={"status": "Active"})

        assert response.status_code == 404


class TestDeletePaymentMethod:
    """DELETE /paymentMethod/{id}"""

    def test_delete(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any],
        check_payload: dict[str, Any],
    ) -> None:
        created = _create(client, check_payload)

        response = client.delete(f"{COLLECTION}/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"{COLLECTION}/{created['id']}").status_code == 404
        events = recording_delivery.events_of(EventType.DELETE)
        assert len(events) == 1
        assert events[0].event["paymentMethod"]["id"] == created["id"]

    def test_delete_missing_returns_404_without_event(
        self, client: TestClient, recording_delivery: Any, registered_listener: dict[str, Any]
    ) -> None:
        response = client.delete(f"{COLLECTION}/does-not-exist")

        assert response.status_code == 404
        assert recording_delivery.delivered == []
