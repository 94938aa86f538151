"""Tests for the tour reservation lifecycle."""

from datetime import timedelta
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from refahi import models
from refahi.utils import utc_now
from tests.conftest import (
    GUEST_NATIONAL_CODE,
    MEMBER_NATIONAL_CODE,
    OTHER_NATIONAL_CODE,
    create_test_member,
    create_test_tour,
    iso,
)


def start_reservation(
    client: TestClient, headers: dict[str, str], tour: dict[str, int]
) -> dict[str, Any]:
    response = client.post(
        f"/api/v1/tours/{tour['tour_id']}/reservations",
        json={"capacity_id": tour["capacity_id"]},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["reservation"]


def hold_reservation(
    client: TestClient, headers: dict[str, str], reservation_id: int
) -> dict[str, Any]:
    response = client.post(f"/api/v1/reservations/{reservation_id}/hold", headers=headers)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["reservation"]


def pay_reservation(
    client: TestClient,
    user_headers: dict[str, str],
    admin_headers: dict[str, str],
    reservation_id: int,
) -> dict[str, Any]:
    """Initiate payment, open an online payment and complete it through the callback."""
    initiated = client.post(f"/api/v1/reservations/{reservation_id}/pay", headers=user_headers)
    assert initiated.status_code == status.HTTP_200_OK, initiated.text
    bill_id = initiated.json()["bill_id"]

    payment = client.post(f"/api/v1/bills/{bill_id}/payments", headers=user_headers)
    assert payment.status_code == status.HTTP_201_CREATED, payment.text
    payment_id = payment.json()["payment"]["id"]

    completed = client.post(
        f"/api/v1/payments/{payment_id}/complete",
        json={"gateway_transaction_id": "GW-1001"},
        headers=admin_headers,
    )
    assert completed.status_code == status.HTTP_200_OK, completed.text
    return completed.json()


def guest_payload(national_number: str = GUEST_NATIONAL_CODE) -> dict[str, Any]:
    return {"first_name": "Nima", "last_name": "Ahmadi", "national_number": national_number}


class TestStartReservation:
    """Test suite for POST /tours/{id}/reservations endpoint."""

    def test_start_reservation_success(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        assert reservation["status"] == "Draft"
        assert reservation["tracking_code"].startswith("RSV-")
        assert reservation["capacity_id"] == open_tour["capacity_id"]
        assert reservation["participant_count"] == 1

        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        main = detail["participants"][0]
        assert main["is_main"] is True
        assert main["participant_type"] == "Member"
        assert main["national_number"] == test_member["national_code"]

    def test_start_requires_membership(
        self, client: TestClient, other_headers: dict[str, str], open_tour: dict[str, int]
    ) -> None:
        response = client.post(
            f"/api/v1/tours/{open_tour['tour_id']}/reservations",
            json={"capacity_id": open_tour["capacity_id"]},
            headers=other_headers,
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_start_on_unpublished_tour(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        tour = create_test_tour(client, admin_headers, publish=False)

        response = client.post(
            f"/api/v1/tours/{tour['tour_id']}/reservations",
            json={"capacity_id": tour["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "not open" in response.json()["detail"]

    def test_start_requires_capabilities(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        tour = create_test_tour(client, admin_headers, required_capabilities=["Retired"])

        response = client.post(
            f"/api/v1/tours/{tour['tour_id']}/reservations",
            json={"capacity_id": tour["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_capacity_of_another_tour_is_rejected(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        other = create_test_tour(client, admin_headers)

        response = client.post(
            f"/api/v1/tours/{open_tour['tour_id']}/reservations",
            json={"capacity_id": other["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_single_pending_reservation_per_tour(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        start_reservation(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/tours/{open_tour['tour_id']}/reservations",
            json={"capacity_id": open_tour["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_restricted_tour_blocks_reservation(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])
        restricted = create_test_tour(
            client, admin_headers, restricted_tour_ids=[open_tour["tour_id"]]
        )

        response = client.post(
            f"/api/v1/tours/{restricted['tour_id']}/reservations",
            json={"capacity_id": restricted["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "Kish Island Tour" in response.json()["detail"]


class TestGuests:
    """Test suite for guest management on a draft reservation."""

    def test_guest_limit_defaults_to_zero(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/guests",
            json=guest_payload(),
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_add_and_remove_guest(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        tour = create_test_tour(
            client, admin_headers, guest_price=500_000, max_guests_per_reservation=2
        )
        reservation = start_reservation(client, user_headers, tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/guests",
            json=guest_payload(),
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["participant"]["participant_type"] == "Guest"
        assert data["participant"]["is_main"] is False
        assert data["estimated_total_rials"] == 1_500_000

        removed = client.delete(
            f"/api/v1/reservations/{reservation['id']}/guests/{data['participant']['id']}",
            headers=user_headers,
        )
        assert removed.status_code == status.HTTP_200_OK
        assert removed.json()["reservation"]["participant_count"] == 1

    def test_guest_who_is_a_member_pays_member_price(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        create_test_member(client, admin_headers, national_code=OTHER_NATIONAL_CODE)
        tour = create_test_tour(
            client, admin_headers, guest_price=500_000, max_guests_per_reservation=1
        )
        reservation = start_reservation(client, user_headers, tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/guests",
            json=guest_payload(OTHER_NATIONAL_CODE),
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["participant"]["participant_type"] == "Member"

    def test_duplicate_participant_is_rejected(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        tour = create_test_tour(
            client, admin_headers, guest_price=500_000, max_guests_per_reservation=2
        )
        reservation = start_reservation(client, user_headers, tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/guests",
            json=guest_payload(test_member["national_code"]),
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_main_participant_cannot_be_removed(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        main_id = detail["participants"][0]["id"]

        response = client.delete(
            f"/api/v1/reservations/{reservation['id']}/guests/{main_id}", headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestHoldReservation:
    """Test suite for POST /reservations/{id}/hold endpoint."""

    def test_hold_freezes_prices(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        held = hold_reservation(client, user_headers, reservation["id"])

        assert held["status"] == "OnHold"
        assert held["total_amount_rials"] == 1_000_000
        assert held["expiry_date"] is not None

        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        assert detail["price_snapshots"][0]["final_price_rials"] == 1_000_000
        assert 0 < detail["remaining_hold_seconds"] <= 30 * 60

        tour = client.get(f"/api/v1/tours/{open_tour['tour_id']}").json()
        assert tour["remaining_capacity"] == 19

    def test_hold_too_close_to_tour_start(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        tour = create_test_tour(client, admin_headers, tour_start=utc_now() + timedelta(hours=12))
        reservation = start_reservation(client, user_headers, tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/hold", headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "hours before" in response.json()["detail"]

    def test_hold_without_seats(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        other_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        create_test_member(client, admin_headers, national_code=OTHER_NATIONAL_CODE)
        tour = create_test_tour(client, admin_headers, max_participants=1)
        first = start_reservation(client, user_headers, tour)
        second = start_reservation(client, other_headers, tour)
        hold_reservation(client, user_headers, first["id"])

        response = client.post(f"/api/v1/reservations/{second['id']}/hold", headers=other_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "Not enough seats" in response.json()["detail"]

    def test_cannot_hold_someone_elses_reservation(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        other_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/hold", headers=other_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestPaymentFlow:
    """Test suite for paying, confirming, cancelling and refunding a reservation."""

    def test_initiate_payment_creates_bill(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/pay", headers=user_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_amount_rials"] == 1_000_000
        assert data["payment_url"] == f"/payment/pay/{data['bill_id']}"

        # A second call reuses the bill
        again = client.post(f"/api/v1/reservations/{reservation['id']}/pay", headers=user_headers)
        assert again.json()["bill_id"] == data["bill_id"]

        bill = client.get(f"/api/v1/bills/{data['bill_id']}", headers=user_headers).json()
        assert bill["status"] == "Issued"
        assert bill["bill_type"] == "TourReservation"
        assert bill["reference_id"] == reservation["tracking_code"]

    def test_pay_requires_hold(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/pay", headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_full_payment_confirms_reservation(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])

        completed = pay_reservation(client, user_headers, admin_headers, reservation["id"])

        assert completed["bill_status"] == "FullyPaid"
        assert completed["payment"]["status"] == "Completed"
        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        assert detail["status"] == "Confirmed"
        assert detail["paid_amount_rials"] == 1_000_000
        assert detail["expiry_date"] is None
        assert detail["confirmation_date"] is not None

    def test_cancel_on_hold_is_refused(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/cancel", json={}, headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_cancel_draft(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/cancel",
            json={"reason": "Changed plans"},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["reservation"]["status"] == "Cancelled"

        # A cancelled reservation no longer blocks a new one
        start_reservation(client, user_headers, open_tour)

    def test_cancel_after_deadline(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        tour = create_test_tour(client, admin_headers, tour_start=utc_now() + timedelta(hours=12))
        reservation = start_reservation(client, user_headers, tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/cancel", json={}, headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_cancel_confirmed_refunds_to_wallet(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])
        completed = pay_reservation(client, user_headers, admin_headers, reservation["id"])

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/cancel", json={}, headers=user_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["reservation"]["status"] == "Cancelled"

        wallet = client.get("/api/v1/wallets/me", headers=user_headers).json()
        assert wallet["balance_rials"] == 1_000_000
        transactions = client.get("/api/v1/wallets/me/transactions", headers=user_headers).json()
        assert transactions["items"][0]["transaction_type"] == "Refund"

        bill = client.get(f"/api/v1/bills/{completed['bill_id']}", headers=user_headers).json()
        assert bill["status"] == "Refunded"
        assert bill["refunded_amount_rials"] == 1_000_000


class TestExpiry:
    """Test suite for hold expiry and reactivation."""

    def _expire_hold(self, db_session: Session, reservation_id: int) -> None:
        row = db_session.get(models.TourReservation, reservation_id)
        assert row is not None
        row.expiry_date = utc_now() - timedelta(minutes=1)
        db_session.commit()

    def test_expire_cancels_bill(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])
        bill_id = client.post(
            f"/api/v1/reservations/{reservation['id']}/pay", headers=user_headers
        ).json()["bill_id"]
        self._expire_hold(db_session, reservation["id"])

        response = client.post("/api/v1/reservations/expire", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["expired_count"] == 1
        assert data["tracking_codes"] == [reservation["tracking_code"]]

        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        assert detail["status"] == "Expired"
        assert detail["is_expired"] is True
        bill = client.get(f"/api/v1/bills/{bill_id}", headers=user_headers).json()
        assert bill["status"] == "Cancelled"

        # Nothing left to expire
        again = client.post("/api/v1/reservations/expire", headers=admin_headers)
        assert again.json()["expired_count"] == 0

    def test_expire_requires_admin(self, client: TestClient, user_headers: dict[str, str]) -> None:
        response = client.post("/api/v1/reservations/expire", headers=user_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_reactivate_expired_reservation(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])
        self._expire_hold(db_session, reservation["id"])
        client.post("/api/v1/reservations/expire", headers=admin_headers)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/reactivate", headers=user_headers
        )

        assert response.status_code == status.HTTP_200_OK
        reactivated = response.json()["reservation"]
        assert reactivated["status"] == "OnHold"
        assert reactivated["bill_id"] is None

    def test_reactivate_requires_expired(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/reactivate", headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestMyReservations:
    def test_list_my_reservations(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        other_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        start_reservation(client, user_headers, open_tour)

        mine = client.get("/api/v1/reservations/me", headers=user_headers).json()
        theirs = client.get("/api/v1/reservations/me", headers=other_headers).json()

        assert mine["total"] == 1
        assert theirs["total"] == 0

    def test_get_unknown_reservation(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/reservations/9999", headers=user_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestChangeCapacity:
    """Test suite for PUT /reservations/{id}/capacity endpoint."""

    def _add_later_capacity(
        self, client: TestClient, admin_headers: dict[str, str], tour_id: int
    ) -> int:
        now = utc_now()
        response = client.post(
            f"/api/v1/tours/{tour_id}/capacities",
            json={
                "max_participants": 10,
                "registration_start": iso(now + timedelta(days=6)),
                "registration_end": iso(now + timedelta(days=7)),
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED, response.text
        capacities = client.get(f"/api/v1/tours/{tour_id}").json()["capacities"]
        return max(capacity["id"] for capacity in capacities)

    def test_change_to_open_capacity(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        capacity_id = self._add_later_capacity(client, admin_headers, open_tour["tour_id"])
        reservation = start_reservation(client, user_headers, open_tour)
        # Open the second window now
        row = db_session.get(models.TourCapacity, capacity_id)
        assert row is not None
        row.registration_start = utc_now() - timedelta(hours=1)
        db_session.commit()

        response = client.put(
            f"/api/v1/reservations/{reservation['id']}/capacity",
            json={"capacity_id": capacity_id},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_200_OK, response.text
        assert response.json()["reservation"]["capacity_id"] == capacity_id

    def test_capacity_not_open_yet(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        capacity_id = self._add_later_capacity(client, admin_headers, open_tour["tour_id"])
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.put(
            f"/api/v1/reservations/{reservation['id']}/capacity",
            json={"capacity_id": capacity_id},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "not open" in response.json()["detail"]

    def test_capacity_of_another_tour(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        other = create_test_tour(client, admin_headers)
        reservation = start_reservation(client, user_headers, open_tour)

        response = client.put(
            f"/api/v1/reservations/{reservation['id']}/capacity",
            json={"capacity_id": other["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "does not belong" in response.json()["detail"]

    def test_only_draft_reservation_can_change(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_reservation(client, user_headers, open_tour)
        hold_reservation(client, user_headers, reservation["id"])

        response = client.put(
            f"/api/v1/reservations/{reservation['id']}/capacity",
            json={"capacity_id": open_tour["capacity_id"]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestBillEvents:
    """Test suite for how reservations follow what happens to their bills."""

    def _held_with_bill(
        self, client: TestClient, user_headers: dict[str, str], tour: dict[str, int]
    ) -> tuple[dict[str, Any], int]:
        reservation = start_reservation(client, user_headers, tour)
        hold_reservation(client, user_headers, reservation["id"])
        response = client.post(
            f"/api/v1/reservations/{reservation['id']}/pay", headers=user_headers
        )
        assert response.status_code == status.HTTP_200_OK, response.text
        return reservation, response.json()["bill_id"]

    def _create_bill(
        self, client: TestClient, admin_headers: dict[str, str], reference_id: str, bill_type: str
    ) -> int:
        response = client.post(
            "/api/v1/bills",
            json={
                "title": "Manual bill",
                "reference_id": reference_id,
                "bill_type": bill_type,
                "user_national_code": MEMBER_NATIONAL_CODE,
                "items": [{"title": "Seat", "unit_price_rials": 1_000_000}],
                "issue_immediately": True,
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED, response.text
        return response.json()["bill"]["id"]

    def _pay_bill(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        admin_headers: dict[str, str],
        bill_id: int,
    ) -> None:
        payment = client.post(f"/api/v1/bills/{bill_id}/payments", headers=user_headers)
        assert payment.status_code == status.HTTP_201_CREATED, payment.text
        completed = client.post(
            f"/api/v1/payments/{payment.json()['payment']['id']}/complete",
            json={"gateway_transaction_id": f"GW-{bill_id}"},
            headers=admin_headers,
        )
        assert completed.status_code == status.HTTP_200_OK, completed.text
        assert completed.json()["bill_status"] == "FullyPaid"

    def _status(self, client: TestClient, headers: dict[str, str], reservation_id: int) -> str:
        return client.get(f"/api/v1/reservations/{reservation_id}", headers=headers).json()[
            "status"
        ]

    def test_cancelled_bill_cancels_held_reservation(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation, bill_id = self._held_with_bill(client, user_headers, open_tour)

        response = client.post(
            f"/api/v1/bills/{bill_id}/cancel",
            json={"reason": "Tour rescheduled"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK, response.text
        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        assert detail["status"] == "SystemCancelled"
        assert "Tour rescheduled" in detail["cancellation_reason"]
        tour = client.get(f"/api/v1/tours/{open_tour['tour_id']}").json()
        assert tour["remaining_capacity"] == 20

    def test_failed_payment_keeps_reservation_on_hold(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation, bill_id = self._held_with_bill(client, user_headers, open_tour)
        payment = client.post(f"/api/v1/bills/{bill_id}/payments", headers=user_headers)
        payment_id = payment.json()["payment"]["id"]

        response = client.post(
            f"/api/v1/payments/{payment_id}/fail",
            json={"reason": "Card declined"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK, response.text
        assert response.json()["payment"]["status"] == "Failed"
        assert self._status(client, user_headers, reservation["id"]) == "OnHold"

        # A retry on the same bill still confirms the reservation
        self._pay_bill(client, user_headers, admin_headers, bill_id)
        assert self._status(client, user_headers, reservation["id"]) == "Confirmed"

    def test_paid_bill_of_another_type_is_ignored(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation, _ = self._held_with_bill(client, user_headers, open_tour)
        bill_id = self._create_bill(
            client, admin_headers, reservation["tracking_code"], "General"
        )

        self._pay_bill(client, user_headers, admin_headers, bill_id)

        assert self._status(client, user_headers, reservation["id"]) == "OnHold"

    def test_paid_bill_for_unknown_tracking_code_is_ignored(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
    ) -> None:
        bill_id = self._create_bill(client, admin_headers, "RSV-UNKNOWN", "TourReservation")

        self._pay_bill(client, user_headers, admin_headers, bill_id)

        assert client.get("/api/v1/reservations/me", headers=user_headers).json()["total"] == 0

    def test_paid_bill_with_other_bill_id_is_ignored(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation, own_bill_id = self._held_with_bill(client, user_headers, open_tour)
        bill_id = self._create_bill(
            client, admin_headers, reservation["tracking_code"], "TourReservation"
        )
        assert bill_id != own_bill_id

        self._pay_bill(client, user_headers, admin_headers, bill_id)

        assert self._status(client, user_headers, reservation["id"]) == "OnHold"

    def test_late_payment_on_expired_reservation_is_ignored(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation, bill_id = self._held_with_bill(client, user_headers, open_tour)
        # Expired without the bill being cancelled yet
        row = db_session.get(models.TourReservation, reservation["id"])
        assert row is not None
        row.status = "Expired"
        row.expiry_date = utc_now() - timedelta(minutes=1)
        db_session.commit()

        self._pay_bill(client, user_headers, admin_headers, bill_id)

        assert self._status(client, user_headers, reservation["id"]) == "Expired"
        bill = client.get(f"/api/v1/bills/{bill_id}", headers=user_headers).json()
        assert bill["status"] == "FullyPaid"
