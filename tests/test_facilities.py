"""Tests for facility, cycle and facility request endpoints."""

from datetime import timedelta
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

from refahi.utils import utc_now
from tests.conftest import OTHER_NATIONAL_CODE, create_test_member, iso


def create_facility(
    client: TestClient, admin_headers: dict[str, str], activate: bool = True, **overrides: Any
) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": "Housing Loan", "code": "loan-01", "facility_type": "Loan"}
    payload.update(overrides)
    response = client.post("/api/v1/facilities", json=payload, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    facility = response.json()["facility"]
    if activate:
        response = client.post(
            f"/api/v1/facilities/{facility['id']}/activate", headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK, response.text
        facility = response.json()["facility"]
    return facility


def create_cycle(
    client: TestClient,
    admin_headers: dict[str, str],
    facility_id: int,
    activate: bool = True,
    **overrides: Any,
) -> int:
    now = utc_now()
    payload: dict[str, Any] = {
        "name": "Spring round",
        "start_date": iso(now - timedelta(days=1)),
        "end_date": iso(now + timedelta(days=30)),
        "quota": 2,
        "min_amount_rials": 10_000_000,
        "max_amount_rials": 500_000_000,
        "payment_months": 24,
        "interest_rate": 0.04,
    }
    payload.update(overrides)
    response = client.post(
        f"/api/v1/facilities/{facility_id}/cycles", json=payload, headers=admin_headers
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    cycle_id = response.json()["cycle_id"]
    if activate:
        response = client.post(
            f"/api/v1/facilities/cycles/{cycle_id}/activate", headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK, response.text
    return cycle_id


def submit_request(
    client: TestClient,
    headers: dict[str, str],
    cycle_id: int,
    amount: int = 100_000_000,
    **extra: Any,
):
    return client.post(
        f"/api/v1/facilities/cycles/{cycle_id}/requests",
        json={"amount_rials": amount, **extra},
        headers=headers,
    )


class TestFacilities:
    def test_create_and_activate_facility(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        facility = create_facility(client, admin_headers, activate=False)

        assert facility["code"] == "LOAN-01"
        assert facility["status"] == "Draft"

        response = client.post(
            f"/api/v1/facilities/{facility['id']}/activate", headers=admin_headers
        )
        assert response.json()["facility"]["status"] == "Active"

        listed = client.get("/api/v1/facilities?status=Active", headers=user_headers).json()
        assert listed["total"] == 1

    def test_duplicate_code(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        create_facility(client, admin_headers)

        response = client.post(
            "/api/v1/facilities",
            json={"name": "Other loan", "code": "LOAN-01", "facility_type": "Loan"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_activate_twice(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        facility = create_facility(client, admin_headers)

        response = client.post(
            f"/api/v1/facilities/{facility['id']}/activate", headers=admin_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_requires_admin(self, client: TestClient, user_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/facilities",
            json={"name": "Loan", "code": "L1", "facility_type": "Loan"},
            headers=user_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestCycles:
    def test_cycle_lifecycle(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"], activate=False)

        cycles = client.get(
            f"/api/v1/facilities/{facility['id']}/cycles", headers=user_headers
        ).json()
        assert cycles[0]["status"] == "Draft"
        assert cycles[0]["remaining_quota"] == 2

        activated = client.post(
            f"/api/v1/facilities/cycles/{cycle_id}/activate", headers=admin_headers
        )
        assert activated.json()["status"] == "Active"

        closed = client.post(f"/api/v1/facilities/cycles/{cycle_id}/close", headers=admin_headers)
        assert closed.json()["status"] == "Closed"

        again = client.post(f"/api/v1/facilities/cycles/{cycle_id}/close", headers=admin_headers)
        assert again.status_code == status.HTTP_409_CONFLICT

    def test_cycle_amount_limits_are_validated(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        facility = create_facility(client, admin_headers)

        response = client.post(
            f"/api/v1/facilities/{facility['id']}/cycles",
            json={
                "name": "Broken",
                "start_date": iso(utc_now()),
                "end_date": iso(utc_now() + timedelta(days=1)),
                "quota": 1,
                "min_amount_rials": 5_000,
                "max_amount_rials": 1_000,
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cycle_for_unknown_facility(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/facilities/9999/cycles",
            json={
                "name": "Orphan",
                "start_date": iso(utc_now()),
                "end_date": iso(utc_now() + timedelta(days=1)),
                "quota": 1,
                "min_amount_rials": 0,
                "max_amount_rials": 1_000,
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestFacilityRequests:
    """Test suite for submitting and reviewing facility requests."""

    def test_submit_review_and_approve(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])

        response = submit_request(client, user_headers, cycle_id, description="Home repair")

        assert response.status_code == status.HTTP_201_CREATED
        request = response.json()["request"]
        assert request["status"] == "PendingApproval"
        assert request["request_number"].startswith("FR-")
        assert request["member_full_name"] == "Sara Ahmadi"
        assert request["national_code"] == test_member["national_code"]

        reviewed = client.post(
            f"/api/v1/facility-requests/{request['id']}/review", headers=admin_headers
        )
        assert reviewed.json()["request"]["status"] == "UnderReview"

        approved = client.post(
            f"/api/v1/facility-requests/{request['id']}/approve",
            json={"approved_amount_rials": 80_000_000, "notes": "Reduced"},
            headers=admin_headers,
        )
        assert approved.status_code == status.HTTP_200_OK
        data = approved.json()["request"]
        assert data["status"] == "Approved"
        assert data["approved_amount_rials"] == 80_000_000
        assert data["final_amount_rials"] == 80_000_000
        assert data["approved_at"] is not None

        cycles = client.get(
            f"/api/v1/facilities/{facility['id']}/cycles", headers=user_headers
        ).json()
        assert cycles[0]["used_quota"] == 1

    def test_approve_requires_review(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])
        request_id = submit_request(client, user_headers, cycle_id).json()["request"]["id"]

        response = client.post(
            f"/api/v1/facility-requests/{request_id}/approve",
            json={"approved_amount_rials": 1_000},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_reject_frees_quota(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])
        request_id = submit_request(client, user_headers, cycle_id).json()["request"]["id"]
        client.post(f"/api/v1/facility-requests/{request_id}/review", headers=admin_headers)

        response = client.post(
            f"/api/v1/facility-requests/{request_id}/reject",
            json={"reason": "Missing documents"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        rejected = response.json()["request"]
        assert rejected["status"] == "Rejected"
        assert rejected["rejection_reason"] == "Missing documents"

        cycles = client.get(
            f"/api/v1/facilities/{facility['id']}/cycles", headers=user_headers
        ).json()
        assert cycles[0]["used_quota"] == 0

        # A rejected request no longer blocks a new one
        again = submit_request(client, user_headers, cycle_id)
        assert again.status_code == status.HTTP_201_CREATED

    def test_single_active_request_per_cycle(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])
        submit_request(client, user_headers, cycle_id)

        response = submit_request(client, user_headers, cycle_id)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already have an active request" in response.json()["detail"]

    def test_quota_is_enforced(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        other_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        create_test_member(client, admin_headers, national_code=OTHER_NATIONAL_CODE)
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"], quota=1)
        submit_request(client, user_headers, cycle_id)

        response = submit_request(client, other_headers, cycle_id)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "quota is full" in response.json()["detail"]

    def test_amount_outside_limits(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])

        response = submit_request(client, user_headers, cycle_id, amount=1_000)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_inactive_cycle(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"], activate=False)

        response = submit_request(client, user_headers, cycle_id)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_non_member_cannot_request(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])

        response = submit_request(client, other_headers, cycle_id)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_prohibited_capability_disqualifies(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        create_test_member(client, admin_headers, capabilities=["Retired", "Employee"])
        facility = create_facility(
            client,
            admin_headers,
            required_capabilities=["Employee"],
            prohibited_capabilities=["Retired"],
        )
        cycle_id = create_cycle(client, admin_headers, facility["id"])

        response = submit_request(client, user_headers, cycle_id)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "prohibited capabilities: Retired" in response.json()["detail"]

    def test_required_feature_is_checked(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        create_test_member(client, admin_headers, features=["Married"])
        facility = create_facility(client, admin_headers, required_features=["Married", "Veteran"])
        cycle_id = create_cycle(client, admin_headers, facility["id"])

        response = submit_request(client, user_headers, cycle_id)

        assert response.status_code == status.HTTP_201_CREATED

    def test_idempotency_key_replays_request(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])
        first = submit_request(client, user_headers, cycle_id, idempotency_key="req-1").json()
        client.post(
            f"/api/v1/facility-requests/{first['request']['id']}/cancel",
            json={"reason": "Wrong amount"},
            headers=user_headers,
        )

        replay = submit_request(client, user_headers, cycle_id, idempotency_key="req-1")

        assert replay.status_code == status.HTTP_201_CREATED
        assert replay.json()["request"]["id"] == first["request"]["id"]
        assert replay.json()["request"]["status"] == "Cancelled"

    def test_idempotency_key_is_scoped_to_member(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        other_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        create_test_member(
            client, admin_headers, national_code=OTHER_NATIONAL_CODE, first_name="Reza"
        )
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])
        first = submit_request(client, user_headers, cycle_id, idempotency_key="k-1").json()

        response = submit_request(client, other_headers, cycle_id, idempotency_key="k-1")

        assert response.status_code == status.HTTP_201_CREATED
        request = response.json()["request"]
        assert request["id"] != first["request"]["id"]
        assert request["national_code"] == OTHER_NATIONAL_CODE
        assert request["member_full_name"].startswith("Reza")

    def test_cancel_and_access_rules(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        other_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        facility = create_facility(client, admin_headers)
        cycle_id = create_cycle(client, admin_headers, facility["id"])
        request_id = submit_request(client, user_headers, cycle_id).json()["request"]["id"]

        forbidden = client.get(f"/api/v1/facility-requests/{request_id}", headers=other_headers)
        assert forbidden.status_code == status.HTTP_403_FORBIDDEN
        not_owner = client.post(
            f"/api/v1/facility-requests/{request_id}/cancel", json={}, headers=other_headers
        )
        assert not_owner.status_code == status.HTTP_403_FORBIDDEN

        cancelled = client.post(
            f"/api/v1/facility-requests/{request_id}/cancel", json={}, headers=user_headers
        )
        assert cancelled.json()["request"]["status"] == "Cancelled"
        assert cancelled.json()["request"]["cancelled_at"] is not None

        twice = client.post(
            f"/api/v1/facility-requests/{request_id}/cancel", json={}, headers=user_headers
        )
        assert twice.status_code == status.HTTP_409_CONFLICT

        mine = client.get("/api/v1/facility-requests/me", headers=user_headers).json()
        assert mine["total"] == 1
