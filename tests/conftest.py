"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import datetime, timedelta
from typing import Any

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
# Configured without leading zeros; matches ADMIN_NATIONAL_CODE once normalized
os.environ["ADMIN_NATIONAL_CODES"] = '["12345679"]'

import pytest  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from refahi import models  # noqa: E402
from refahi.core import container  # noqa: E402
from refahi.database import Base, get_db  # noqa: E402
from refahi.infrastructure.identity.routers.auth import limiter  # noqa: E402
from refahi.infrastructure.identity.services.token_service import (  # noqa: E402
    create_access_token,
)
from refahi.main import app  # noqa: E402
from refahi.utils import utc_now  # noqa: E402

ADMIN_NATIONAL_CODE = "0012345679"
MEMBER_NATIONAL_CODE = "1234567891"
OTHER_NATIONAL_CODE = "9876543210"
GUEST_NATIONAL_CODE = "1122334451"
FIXED_OTP_CODE = "123456"

# Test database URL (in-memory SQLite shared by every connection)
TEST_DATABASE_URL = "sqlite://"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def fixed_otp_code() -> Generator[str, None, None]:
    """Make every issued one-time password equal to FIXED_OTP_CODE."""
    container.otp_code_generator.override(providers.Object(lambda length: FIXED_OTP_CODE))
    yield FIXED_OTP_CODE
    container.otp_code_generator.reset_override()


def iso(value: datetime) -> str:
    return value.isoformat()


def create_test_user(
    db_session: Session,
    national_code: str = MEMBER_NATIONAL_CODE,
    phone_number: str = "09121234567",
    is_admin: bool = False,
    is_active: bool = True,
) -> models.User:
    """Helper function to create a user row."""
    user = models.User(
        national_code=national_code,
        phone_number=phone_number,
        is_admin=is_admin,
        is_active=is_active,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def auth_headers(user: models.User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def create_test_member(
    client: TestClient,
    admin_headers: dict[str, str],
    national_code: str = MEMBER_NATIONAL_CODE,
    **overrides: Any,
) -> dict[str, Any]:
    """Helper function to register a member with an active membership through the API."""
    now = utc_now()
    payload: dict[str, Any] = {
        "membership_number": f"M-{national_code}",
        "national_code": national_code,
        "first_name": "Sara",
        "last_name": "Ahmadi",
        "membership_start": iso(now - timedelta(days=365)),
        "membership_end": iso(now + timedelta(days=365)),
        "phone_number": "09121234567",
    }
    payload.update(overrides)
    response = client.post("/api/v1/members", json=payload, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()["member"]


def create_test_tour(
    client: TestClient,
    admin_headers: dict[str, str],
    member_price: int = 1_000_000,
    guest_price: int | None = None,
    max_participants: int = 20,
    tour_start: datetime | None = None,
    publish: bool = True,
    **overrides: Any,
) -> dict[str, int]:
    """
    Helper function to create a tour with one open capacity and member pricing.

    Returns the tour id and the capacity id.
    """
    now = utc_now()
    start = tour_start or now + timedelta(days=10)
    payload: dict[str, Any] = {
        "title": "Kish Island Tour",
        "tour_start": iso(start),
        "tour_end": iso(start + timedelta(days=3)),
    }
    payload.update(overrides)
    response = client.post("/api/v1/tours", json=payload, headers=admin_headers)
    assert response.status_code == 201, response.text
    tour_id = response.json()["tour_id"]

    registration_end = min(now + timedelta(days=5), start - timedelta(hours=1))
    response = client.post(
        f"/api/v1/tours/{tour_id}/capacities",
        json={
            "max_participants": max_participants,
            "registration_start": iso(now - timedelta(days=1)),
            "registration_end": iso(registration_end),
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text

    response = client.post(
        f"/api/v1/tours/{tour_id}/pricing",
        json={"participant_type": "Member", "price_rials": member_price, "is_default": True},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    if guest_price is not None:
        response = client.post(
            f"/api/v1/tours/{tour_id}/pricing",
            json={"participant_type": "Guest", "price_rials": guest_price, "is_default": True},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text

    if publish:
        response = client.post(f"/api/v1/tours/{tour_id}/publish", headers=admin_headers)
        assert response.status_code == 200, response.text

    detail = client.get(f"/api/v1/tours/{tour_id}").json()
    return {"tour_id": tour_id, "capacity_id": detail["capacities"][0]["id"]}


@pytest.fixture
def admin_user(db_session: Session) -> models.User:
    return create_test_user(
        db_session, national_code=ADMIN_NATIONAL_CODE, phone_number="09120000000", is_admin=True
    )


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    return create_test_user(db_session)


@pytest.fixture
def other_user(db_session: Session) -> models.User:
    return create_test_user(
        db_session, national_code=OTHER_NATIONAL_CODE, phone_number="09351234567"
    )


@pytest.fixture
def admin_headers(admin_user: models.User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(test_user: models.User) -> dict[str, str]:
    return auth_headers(test_user)


@pytest.fixture
def other_headers(other_user: models.User) -> dict[str, str]:
    return auth_headers(other_user)


@pytest.fixture
def test_member(client: TestClient, admin_headers: dict[str, str]) -> dict[str, Any]:
    """Active member linked to test_user by national code."""
    return create_test_member(client, admin_headers)


@pytest.fixture
def open_tour(client: TestClient, admin_headers: dict[str, str]) -> dict[str, int]:
    return create_test_tour(client, admin_headers)
