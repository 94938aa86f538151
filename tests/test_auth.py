"""Tests for one-time password login and token endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from refahi import models
from tests.conftest import (
    ADMIN_NATIONAL_CODE,
    MEMBER_NATIONAL_CODE,
    auth_headers,
    create_test_user,
)


def send_otp(
    client: TestClient,
    national_code: str = MEMBER_NATIONAL_CODE,
    phone_number: str = "09121234567",
) -> int:
    response = client.post(
        "/api/v1/auth/send-otp",
        json={"national_code": national_code, "phone_number": phone_number},
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["challenge_id"]


class TestSendOtp:
    """Test suite for POST /auth/send-otp endpoint."""

    def test_send_otp_creates_challenge(self, client: TestClient, db_session: Session) -> None:
        response = client.post(
            "/api/v1/auth/send-otp",
            json={"national_code": MEMBER_NATIONAL_CODE, "phone_number": "+989121234567"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["challenge_id"] > 0
        assert "expires_at" in data

        challenge = db_session.query(models.OtpChallenge).filter_by(id=data["challenge_id"]).one()
        assert challenge.national_code == MEMBER_NATIONAL_CODE
        assert challenge.phone_number == "09121234567"
        assert challenge.status == "Sent"
        # Only the hash is stored
        assert len(challenge.code_hash) > 20

    def test_send_otp_invalid_national_code(self, client: TestClient) -> None:
        """A national code with a wrong check digit is rejected."""
        response = client.post(
            "/api/v1/auth/send-otp",
            json={"national_code": "1234567890", "phone_number": "09121234567"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "national code" in response.json()["detail"].lower()

    def test_send_otp_non_ascii_digits(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/send-otp",
            json={"national_code": "12345678¹1", "phone_number": "09121234567"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_send_otp_invalid_phone_number(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/send-otp",
            json={"national_code": MEMBER_NATIONAL_CODE, "phone_number": "0212345678"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_send_otp_is_rate_limited(self, client: TestClient) -> None:
        for _ in range(5):
            send_otp(client)
        response = client.post(
            "/api/v1/auth/send-otp",
            json={"national_code": MEMBER_NATIONAL_CODE, "phone_number": "09121234567"},
        )
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS


class TestVerifyOtp:
    """Test suite for POST /auth/verify-otp endpoint."""

    def test_first_login_creates_user(
        self, client: TestClient, db_session: Session, fixed_otp_code: str
    ) -> None:
        challenge_id = send_otp(client)

        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": fixed_otp_code}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["is_new_user"] is True
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["user"]["national_code"] == MEMBER_NATIONAL_CODE
        assert data["user"]["is_admin"] is False

        user = db_session.query(models.User).filter_by(national_code=MEMBER_NATIONAL_CODE).one()
        assert user.id == data["user"]["id"]

    def test_login_existing_user(
        self, client: TestClient, db_session: Session, fixed_otp_code: str
    ) -> None:
        existing = create_test_user(db_session, phone_number="09350000000")
        challenge_id = send_otp(client, phone_number="09121234567")

        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": fixed_otp_code}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["is_new_user"] is False
        assert data["user"]["id"] == existing.id
        # The phone number follows the latest login
        assert data["user"]["phone_number"] == "09121234567"

    def test_configured_admin_gets_admin_flag(
        self, client: TestClient, fixed_otp_code: str
    ) -> None:
        challenge_id = send_otp(client, national_code=ADMIN_NATIONAL_CODE)

        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": fixed_otp_code}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["is_admin"] is True

    def test_wrong_code_is_rejected(self, client: TestClient, fixed_otp_code: str) -> None:
        challenge_id = send_otp(client)

        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": "000000"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_challenge_locks_after_max_attempts(
        self, client: TestClient, db_session: Session, fixed_otp_code: str
    ) -> None:
        challenge_id = send_otp(client)
        for _ in range(3):
            response = client.post(
                "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": "000000"}
            )
            assert response.status_code == status.HTTP_401_UNAUTHORIZED

        # Even the right code fails once the challenge is locked
        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": fixed_otp_code}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

        challenge = db_session.query(models.OtpChallenge).filter_by(id=challenge_id).one()
        assert challenge.status == "Locked"
        assert challenge.attempts_left == 0

    def test_code_cannot_be_reused(self, client: TestClient, fixed_otp_code: str) -> None:
        challenge_id = send_otp(client)
        payload = {"challenge_id": challenge_id, "code": fixed_otp_code}

        assert client.post("/api/v1/auth/verify-otp", json=payload).status_code == 200
        response = client.post("/api/v1/auth/verify-otp", json=payload)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_challenge(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": 9999, "code": "123456"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestTokens:
    """Test suite for /auth/refresh and /auth/me endpoints."""

    def _login(self, client: TestClient, code: str) -> dict:
        challenge_id = send_otp(client)
        response = client.post(
            "/api/v1/auth/verify-otp", json={"challenge_id": challenge_id, "code": code}
        )
        assert response.status_code == status.HTTP_200_OK
        return response.json()

    def test_me_returns_current_user(self, client: TestClient, fixed_otp_code: str) -> None:
        login = self._login(client, fixed_otp_code)

        response = client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {login['access_token']}"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["national_code"] == MEMBER_NATIONAL_CODE

    def test_refresh_issues_new_pair(self, client: TestClient, fixed_otp_code: str) -> None:
        login = self._login(client, fixed_otp_code)

        response = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["access_token"]
        me = client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert me.status_code == status.HTTP_200_OK

    def test_access_token_is_not_a_refresh_token(
        self, client: TestClient, fixed_otp_code: str
    ) -> None:
        login = self._login(client, fixed_otp_code)

        response = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": login["access_token"]}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_inactive_user_is_rejected(self, client: TestClient, db_session: Session) -> None:
        user = create_test_user(db_session, is_active=False)

        response = client.get("/api/v1/auth/me", headers=auth_headers(user))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
