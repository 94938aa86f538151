"""Tests for member API endpoints."""

from datetime import timedelta
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from refahi import models
from refahi.utils import utc_now
from tests.conftest import OTHER_NATIONAL_CODE, create_test_member, iso


class TestRegisterMember:
    """Test suite for POST /members endpoint."""

    def test_register_member_success(
        self, client: TestClient, db_session: Session, admin_headers: dict[str, str]
    ) -> None:
        member = create_test_member(
            client,
            admin_headers,
            capabilities=["Retired", " Retired ", ""],
            features=["Veteran"],
            agencies=[3],
        )

        assert member["national_code"] == "1234567891"
        assert member["full_name"] == "Sara Ahmadi"
        assert member["has_active_membership"] is True
        # Tags are trimmed and de-duplicated
        assert member["capabilities"] == ["Retired"]
        assert member["features"] == ["Veteran"]
        assert member["agencies"] == [3]

        row = db_session.query(models.Member).filter_by(id=member["id"]).one()
        assert row.membership_number == "M-1234567891"

    def test_register_requires_admin(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/members",
            json={
                "membership_number": "M-1",
                "national_code": "1234567891",
                "first_name": "Sara",
                "last_name": "Ahmadi",
                "membership_start": iso(utc_now()),
            },
            headers=user_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_register_duplicate_national_code(
        self, client: TestClient, admin_headers: dict[str, str], test_member: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/members",
            json={
                "membership_number": "M-other",
                "national_code": test_member["national_code"],
                "first_name": "Ali",
                "last_name": "Karimi",
                "membership_start": iso(utc_now()),
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already exists" in response.json()["detail"]

    def test_register_period_end_before_start(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        now = utc_now()
        response = client.post(
            "/api/v1/members",
            json={
                "membership_number": "M-2",
                "national_code": OTHER_NATIONAL_CODE,
                "first_name": "Ali",
                "last_name": "Karimi",
                "membership_start": iso(now),
                "membership_end": iso(now - timedelta(days=1)),
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_expired_membership_is_not_active(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        now = utc_now()
        member = create_test_member(
            client,
            admin_headers,
            national_code=OTHER_NATIONAL_CODE,
            membership_start=iso(now - timedelta(days=400)),
            membership_end=iso(now - timedelta(days=30)),
        )
        assert member["has_active_membership"] is False


class TestQueryMembers:
    """Test suite for member lookups."""

    def test_get_my_membership(
        self, client: TestClient, user_headers: dict[str, str], test_member: dict[str, Any]
    ) -> None:
        response = client.get("/api/v1/members/me", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == test_member["id"]

    def test_get_my_membership_not_a_member(
        self, client: TestClient, other_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/members/me", headers=other_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_member_by_national_code(
        self, client: TestClient, admin_headers: dict[str, str], test_member: dict[str, Any]
    ) -> None:
        response = client.get(
            f"/api/v1/members/by-national-code/{test_member['national_code']}",
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["membership_number"] == test_member["membership_number"]

    def test_get_member_not_found(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/members/9999", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_members_with_search(
        self, client: TestClient, admin_headers: dict[str, str], test_member: dict[str, Any]
    ) -> None:
        create_test_member(
            client, admin_headers, national_code=OTHER_NATIONAL_CODE, first_name="Reza"
        )

        response = client.get("/api/v1/members", params={"search": "Reza"}, headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["first_name"] == "Reza"

        all_members = client.get("/api/v1/members", headers=admin_headers).json()
        assert all_members["total"] == 2
        assert all_members["total_pages"] == 1


class TestUpdateMember:
    """Test suite for PATCH /members/{id} endpoint."""

    def test_update_profile_and_tags(
        self, client: TestClient, admin_headers: dict[str, str], test_member: dict[str, Any]
    ) -> None:
        response = client.patch(
            f"/api/v1/members/{test_member['id']}",
            json={"last_name": "Rahimi", "capabilities": ["Employee"]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        member = response.json()["member"]
        assert member["last_name"] == "Rahimi"
        assert member["first_name"] == "Sara"
        assert member["capabilities"] == ["Employee"]

    def test_deactivate_member(
        self, client: TestClient, admin_headers: dict[str, str], test_member: dict[str, Any]
    ) -> None:
        response = client.patch(
            f"/api/v1/members/{test_member['id']}",
            json={"is_active": False},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        member = response.json()["member"]
        assert member["is_active"] is False
        assert member["has_active_membership"] is False
