"""Tests for bill, payment and wallet endpoints."""

from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

from tests.conftest import MEMBER_NATIONAL_CODE


def create_bill(
    client: TestClient,
    admin_headers: dict[str, str],
    issue_immediately: bool = True,
    **overrides: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Annual membership fee",
        "reference_id": "FEE-1403",
        "user_national_code": MEMBER_NATIONAL_CODE,
        "items": [
            {"title": "Membership", "unit_price_rials": 300_000, "quantity": 2},
            {"title": "Card", "unit_price_rials": 100_000, "discount_percentage": 50},
        ],
        "issue_immediately": issue_immediately,
    }
    payload.update(overrides)
    response = client.post("/api/v1/bills", json=payload, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["bill"]


def pay_online(
    client: TestClient,
    user_headers: dict[str, str],
    admin_headers: dict[str, str],
    bill_id: int,
) -> dict[str, Any]:
    payment = client.post(f"/api/v1/bills/{bill_id}/payments", headers=user_headers)
    assert payment.status_code == status.HTTP_201_CREATED, payment.text
    completed = client.post(
        f"/api/v1/payments/{payment.json()['payment']['id']}/complete",
        json={"gateway_transaction_id": "GW-42"},
        headers=admin_headers,
    )
    assert completed.status_code == status.HTTP_200_OK, completed.text
    return completed.json()


class TestBills:
    """Test suite for bill endpoints."""

    def test_create_and_issue_bill(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        bill = create_bill(client, admin_headers)

        assert bill["status"] == "Issued"
        assert bill["bill_number"].startswith("BL-")
        assert bill["bill_type"] == "General"
        assert bill["total_amount_rials"] == 650_000
        assert bill["remaining_amount_rials"] == 650_000
        assert [item["line_total_rials"] for item in bill["items"]] == [600_000, 50_000]

        mine = client.get("/api/v1/bills/me", headers=user_headers).json()
        assert mine["total"] == 1
        assert mine["items"][0]["id"] == bill["id"]

    def test_draft_bill_is_issued_later(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        bill = create_bill(client, admin_headers, issue_immediately=False)
        assert bill["status"] == "Draft"

        response = client.post(f"/api/v1/bills/{bill['id']}/issue", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["bill"]["status"] == "Issued"

    def test_issue_requires_items(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/bills",
            json={
                "title": "Empty",
                "reference_id": "EMPTY-1",
                "user_national_code": MEMBER_NATIONAL_CODE,
                "issue_immediately": True,
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_bill_requires_admin(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/bills",
            json={
                "title": "Fee",
                "reference_id": "FEE-1",
                "user_national_code": MEMBER_NATIONAL_CODE,
            },
            headers=user_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_bill_of_someone_else_is_forbidden(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        bill = create_bill(client, admin_headers)

        response = client.get(f"/api/v1/bills/{bill['id']}", headers=other_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

        # Administrators see every bill
        response = client.get(f"/api/v1/bills/{bill['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

    def test_get_unknown_bill(self, client: TestClient, user_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/bills/9999", headers=user_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_filter_my_bills_by_status(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        create_bill(client, admin_headers)
        create_bill(client, admin_headers, issue_immediately=False, reference_id="FEE-1404")

        drafts = client.get("/api/v1/bills/me?status=Draft", headers=user_headers).json()

        assert drafts["total"] == 1
        assert drafts["items"][0]["reference_id"] == "FEE-1404"

    def test_cancel_issued_bill(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        bill = create_bill(client, admin_headers)
        client.post(f"/api/v1/bills/{bill['id']}/payments", headers=user_headers)

        response = client.post(
            f"/api/v1/bills/{bill['id']}/cancel",
            json={"reason": "Issued by mistake"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        cancelled = response.json()["bill"]
        assert cancelled["status"] == "Cancelled"
        assert cancelled["cancellation_reason"] == "Issued by mistake"
        assert cancelled["payments"][0]["status"] == "Cancelled"

        # Paying a cancelled bill is refused
        response = client.post(f"/api/v1/bills/{bill['id']}/payments", headers=user_headers)
        assert response.status_code == status.HTTP_409_CONFLICT


class TestPayments:
    """Test suite for online payments and gateway callbacks."""

    def test_complete_payment_marks_bill_paid(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        bill = create_bill(client, admin_headers)

        completed = pay_online(client, user_headers, admin_headers, bill["id"])

        assert completed["bill_status"] == "FullyPaid"
        assert completed["payment"]["amount_rials"] == 650_000
        assert completed["payment"]["method"] == "Online"
        assert completed["payment"]["gateway_transaction_id"] == "GW-42"

        detail = client.get(f"/api/v1/bills/{bill['id']}", headers=user_headers).json()
        assert detail["paid_amount_rials"] == 650_000
        assert detail["remaining_amount_rials"] == 0
        assert detail["fully_paid_date"] is not None

    def test_paid_bill_cannot_be_cancelled_or_paid_again(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        bill = create_bill(client, admin_headers)
        pay_online(client, user_headers, admin_headers, bill["id"])

        cancel = client.post(f"/api/v1/bills/{bill['id']}/cancel", json={}, headers=admin_headers)
        again = client.post(f"/api/v1/bills/{bill['id']}/payments", headers=user_headers)

        assert cancel.status_code == status.HTTP_409_CONFLICT
        assert again.status_code == status.HTTP_409_CONFLICT
        assert "already fully paid" in again.json()["detail"]

    def test_failed_payment_leaves_bill_payable(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        bill = create_bill(client, admin_headers)
        payment = client.post(f"/api/v1/bills/{bill['id']}/payments", headers=user_headers)
        payment_id = payment.json()["payment"]["id"]

        response = client.post(
            f"/api/v1/payments/{payment_id}/fail",
            json={"reason": "Card declined"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["bill_status"] == "Issued"
        assert data["payment"]["status"] == "Failed"
        assert data["payment"]["failure_reason"] == "Card declined"

        # A failed payment cannot be completed afterwards
        response = client.post(
            f"/api/v1/payments/{payment_id}/complete",
            json={"gateway_transaction_id": "GW-43"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_callbacks_require_admin(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        bill = create_bill(client, admin_headers)
        payment = client.post(f"/api/v1/bills/{bill['id']}/payments", headers=user_headers)

        response = client.post(
            f"/api/v1/payments/{payment.json()['payment']['id']}/complete",
            json={"gateway_transaction_id": "GW-1"},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_complete_unknown_payment(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/payments/9999/complete",
            json={"gateway_transaction_id": "GW-1"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestWallet:
    """Test suite for wallet endpoints."""

    def _charge(
        self,
        client: TestClient,
        user_headers: dict[str, str],
        admin_headers: dict[str, str],
        amount: int,
    ) -> None:
        response = client.post(
            "/api/v1/wallets/me/charge", json={"amount_rials": amount}, headers=user_headers
        )
        assert response.status_code == status.HTTP_201_CREATED, response.text
        bill = response.json()["bill"]
        assert bill["bill_type"] == "WalletCharge"
        assert bill["status"] == "Issued"
        pay_online(client, user_headers, admin_headers, bill["id"])

    def test_wallet_is_opened_on_first_access(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/wallets/me", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        wallet = response.json()
        assert wallet["balance_rials"] == 0
        assert wallet["status"] == "Active"
        assert wallet["user_national_code"] == MEMBER_NATIONAL_CODE

        again = client.get("/api/v1/wallets/me", headers=user_headers).json()
        assert again["id"] == wallet["id"]

    def test_paid_charge_credits_wallet(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        self._charge(client, user_headers, admin_headers, 2_000_000)

        wallet = client.get("/api/v1/wallets/me", headers=user_headers).json()
        assert wallet["balance_rials"] == 2_000_000

        transactions = client.get("/api/v1/wallets/me/transactions", headers=user_headers).json()
        assert transactions["total"] == 1
        deposit = transactions["items"][0]
        assert deposit["transaction_type"] == "Deposit"
        assert deposit["is_credit"] is True
        assert deposit["balance_after_rials"] == 2_000_000

    def test_pay_bill_with_wallet(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        self._charge(client, user_headers, admin_headers, 1_000_000)
        bill = create_bill(client, admin_headers)

        response = client.post(
            "/api/v1/wallets/me/pay", json={"bill_id": bill["id"]}, headers=user_headers
        )

        assert response.status_code == status.HTTP_200_OK
        paid = response.json()["bill"]
        assert paid["status"] == "FullyPaid"
        assert paid["payments"][0]["method"] == "Wallet"

        wallet = client.get("/api/v1/wallets/me", headers=user_headers).json()
        assert wallet["balance_rials"] == 350_000
        latest = client.get("/api/v1/wallets/me/transactions", headers=user_headers).json()
        assert latest["items"][0]["transaction_type"] == "BillPayment"
        assert latest["items"][0]["reference_id"] == bill["bill_number"]

    def test_insufficient_balance(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        self._charge(client, user_headers, admin_headers, 100_000)
        bill = create_bill(client, admin_headers)

        response = client.post(
            "/api/v1/wallets/me/pay", json={"bill_id": bill["id"]}, headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "Insufficient wallet balance" in response.json()["detail"]

        detail = client.get(f"/api/v1/bills/{bill['id']}", headers=user_headers).json()
        assert detail["status"] == "Issued"
        assert detail["payments"] == []

    def test_pay_without_wallet(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        bill = create_bill(client, admin_headers)

        response = client.post(
            "/api/v1/wallets/me/pay", json={"bill_id": bill["id"]}, headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_charge_amount_must_be_positive(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/wallets/me/charge", json={"amount_rials": 0}, headers=user_headers
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
