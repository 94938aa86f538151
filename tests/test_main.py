"""Tests for application-level endpoints, authentication and error mapping."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from refahi.infrastructure.identity.services.token_service import create_token_pair
from tests.conftest import OTHER_NATIONAL_CODE, auth_headers, create_test_user


def test_service_endpoints(client: TestClient) -> None:
    assert client.get("/").json() == {"message": "Welcome to Refahi API"}
    assert client.get("/health").json() == {"status": "healthy"}

    data = client.get("/api/v1/").json()
    assert data == {"message": "Refahi API v1", "version": "0.1.0", "docs": "/api/v1/docs"}


class TestAuthentication:
    def test_token_required(self, client: TestClient) -> None:
        assert client.get("/api/v1/reservations/me").status_code == 401

    def test_garbage_token(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/reservations/me", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    def test_refresh_token_is_not_an_access_token(
        self, client: TestClient, db_session: Session
    ) -> None:
        user = create_test_user(db_session)
        refresh = create_token_pair(user.id).refresh_token

        response = client.get(
            "/api/v1/reservations/me", headers={"Authorization": f"Bearer {refresh}"}
        )

        assert response.status_code == 401

    def test_inactive_user(self, client: TestClient, db_session: Session) -> None:
        user = create_test_user(db_session, national_code=OTHER_NATIONAL_CODE, is_active=False)
        response = client.get("/api/v1/reservations/me", headers=auth_headers(user))
        assert response.status_code == 401

    def test_admin_route_forbidden_for_members(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/v1/reservations/expire", headers=user_headers)
        assert response.status_code == 403


class TestErrorMapping:
    def test_not_found_uses_detail(self, client: TestClient) -> None:
        response = client.get("/api/v1/tours/9999")
        assert response.status_code == 404
        assert "detail" in response.json()

    def test_request_validation(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/v1/tours", json={"title": "No dates"}, headers=admin_headers)
        assert response.status_code == 422
