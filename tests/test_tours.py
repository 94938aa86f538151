"""Tests for tour administration and catalogue endpoints."""

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient

from refahi.utils import utc_now
from tests.conftest import create_test_tour, iso


def create_draft_tour(
    client: TestClient, admin_headers: dict[str, str], days_ahead: int = 10
) -> int:
    start = utc_now() + timedelta(days=days_ahead)
    response = client.post(
        "/api/v1/tours",
        json={
            "title": "Mashhad Pilgrimage",
            "tour_start": iso(start),
            "tour_end": iso(start + timedelta(days=2)),
        },
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["tour_id"]


class TestCreateTour:
    """Test suite for POST /tours endpoint."""

    def test_create_tour_success(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        start = utc_now() + timedelta(days=20)
        response = client.post(
            "/api/v1/tours",
            json={
                "title": "Shiraz Tour",
                "tour_start": iso(start),
                "tour_end": iso(start + timedelta(days=4)),
                "max_guests_per_reservation": 2,
                "required_capabilities": ["Retired"],
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["success"] is True
        assert data["status"] == "Draft"

        detail = client.get(f"/api/v1/tours/{data['tour_id']}").json()
        assert detail["title"] == "Shiraz Tour"
        assert detail["max_guests_per_reservation"] == 2
        assert detail["required_capabilities"] == ["Retired"]
        assert detail["is_registration_open"] is False

    def test_create_tour_end_before_start(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        start = utc_now() + timedelta(days=20)
        response = client.post(
            "/api/v1/tours",
            json={
                "title": "Backwards Tour",
                "tour_start": iso(start),
                "tour_end": iso(start - timedelta(days=1)),
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_tour_requires_admin(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        start = utc_now() + timedelta(days=20)
        response = client.post(
            "/api/v1/tours",
            json={"title": "T", "tour_start": iso(start), "tour_end": iso(start + timedelta(1))},
            headers=user_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestTourCapacities:
    """Test suite for POST /tours/{id}/capacities endpoint."""

    def test_registration_must_end_before_tour(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        tour_id = create_draft_tour(client, admin_headers, days_ahead=3)
        now = utc_now()

        response = client.post(
            f"/api/v1/tours/{tour_id}/capacities",
            json={
                "max_participants": 10,
                "registration_start": iso(now),
                "registration_end": iso(now + timedelta(days=5)),
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_overlapping_active_capacities_are_rejected(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        tour_id = create_draft_tour(client, admin_headers)
        now = utc_now()
        window = {
            "max_participants": 10,
            "registration_start": iso(now),
            "registration_end": iso(now + timedelta(days=3)),
        }
        first = client.post(
            f"/api/v1/tours/{tour_id}/capacities", json=window, headers=admin_headers
        )
        assert first.status_code == status.HTTP_201_CREATED

        window["registration_start"] = iso(now + timedelta(days=2))
        window["registration_end"] = iso(now + timedelta(days=4))
        second = client.post(
            f"/api/v1/tours/{tour_id}/capacities", json=window, headers=admin_headers
        )
        assert second.status_code == status.HTTP_409_CONFLICT

        # An inactive window may overlap
        window["is_active"] = False
        third = client.post(
            f"/api/v1/tours/{tour_id}/capacities", json=window, headers=admin_headers
        )
        assert third.status_code == status.HTTP_201_CREATED

        detail = client.get(f"/api/v1/tours/{tour_id}").json()
        assert len(detail["capacities"]) == 2
        assert detail["max_participants"] == 10


class TestPublishTour:
    """Test suite for tour publication and registration closing."""

    def test_publish_requires_capacity(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        tour_id = create_draft_tour(client, admin_headers)

        response = client.post(f"/api/v1/tours/{tour_id}/publish", headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_publish_requires_member_pricing(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        tour_id = create_draft_tour(client, admin_headers)
        now = utc_now()
        client.post(
            f"/api/v1/tours/{tour_id}/capacities",
            json={
                "max_participants": 10,
                "registration_start": iso(now - timedelta(days=1)),
                "registration_end": iso(now + timedelta(days=3)),
            },
            headers=admin_headers,
        )
        client.post(
            f"/api/v1/tours/{tour_id}/pricing",
            json={"participant_type": "Guest", "price_rials": 500_000, "is_default": True},
            headers=admin_headers,
        )

        response = client.post(f"/api/v1/tours/{tour_id}/publish", headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "pricing" in response.json()["detail"].lower()

    def test_publish_opens_registration(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        ids = create_test_tour(client, admin_headers, max_participants=15)

        detail = client.get(f"/api/v1/tours/{ids['tour_id']}").json()
        assert detail["status"] == "RegistrationOpen"
        assert detail["is_registration_open"] is True
        assert detail["remaining_capacity"] == 15
        assert detail["capacities"][0]["utilization"] == 0
        assert detail["pricing"][0]["effective_price_rials"] == 1_000_000

    def test_second_default_pricing_is_rejected(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        ids = create_test_tour(client, admin_headers, publish=False)

        response = client.post(
            f"/api/v1/tours/{ids['tour_id']}/pricing",
            json={"participant_type": "Member", "price_rials": 2_000_000, "is_default": True},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_close_registration(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        ids = create_test_tour(client, admin_headers)

        response = client.post(
            f"/api/v1/tours/{ids['tour_id']}/close-registration", headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "RegistrationClosed"
        detail = client.get(f"/api/v1/tours/{ids['tour_id']}").json()
        assert detail["is_registration_open"] is False

    def test_close_draft_tour_is_invalid_transition(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        tour_id = create_draft_tour(client, admin_headers)

        response = client.post(
            f"/api/v1/tours/{tour_id}/close-registration", headers=admin_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestListTours:
    """Test suite for GET /tours endpoint."""

    def test_list_tours(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        create_test_tour(client, admin_headers)
        create_draft_tour(client, admin_headers)

        response = client.get("/api/v1/tours")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 2
        assert data["page"] == 1

        open_only = client.get("/api/v1/tours", params={"status": "RegistrationOpen"}).json()
        assert open_only["total"] == 1
        assert open_only["items"][0]["remaining_capacity"] == 20

    def test_get_unknown_tour(self, client: TestClient) -> None:
        response = client.get("/api/v1/tours/9999")
        assert response.status_code == status.HTTP_404_NOT_FOUND
