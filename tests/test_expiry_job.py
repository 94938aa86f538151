"""Tests for the scheduled expiry of reservation holds."""

import asyncio
import threading
from datetime import timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from refahi import models
from refahi.config import get_settings
from refahi.core import container
from refahi.infrastructure.recreation.services import expiry_job
from refahi.utils import utc_now
from tests.conftest import TestSessionLocal


def start_and_hold(client: TestClient, headers: dict[str, str], tour: dict[str, int]) -> dict:
    response = client.post(
        f"/api/v1/tours/{tour['tour_id']}/reservations",
        json={"capacity_id": tour["capacity_id"]},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    reservation = response.json()["reservation"]
    held = client.post(f"/api/v1/reservations/{reservation['id']}/hold", headers=headers)
    assert held.status_code == 200, held.text
    return reservation


class TestExpiryCleanup:
    def test_cleanup_expires_overdue_holds(
        self,
        client: TestClient,
        db_session: Session,
        monkeypatch: pytest.MonkeyPatch,
        user_headers: dict[str, str],
        test_member: dict[str, Any],
        open_tour: dict[str, int],
    ) -> None:
        reservation = start_and_hold(client, user_headers, open_tour)
        row = db_session.get(models.TourReservation, reservation["id"])
        assert row is not None
        row.expiry_date = utc_now() - timedelta(minutes=1)
        db_session.commit()
        monkeypatch.setattr(expiry_job, "get_session_factory", lambda settings: TestSessionLocal)

        result = expiry_job.run_expiry_cleanup(get_settings())

        assert result.expired_count == 1
        assert result.tracking_codes == [reservation["tracking_code"]]
        # The job's session is no longer bound to the container
        assert not container.db.overridden

        db_session.expire_all()
        detail = client.get(
            f"/api/v1/reservations/{reservation['id']}", headers=user_headers
        ).json()
        assert detail["status"] == "Expired"

    def test_tick_runs_cleanup_in_worker_thread(self, monkeypatch: pytest.MonkeyPatch) -> None:
        threads: list[int] = []
        monkeypatch.setattr(
            expiry_job, "run_expiry_cleanup", lambda settings: threads.append(threading.get_ident())
        )

        asyncio.run(expiry_job._expiry_tick(get_settings()))

        assert len(threads) == 1
        assert threads[0] != threading.get_ident()

    def test_failed_tick_does_not_raise(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(settings: Any) -> None:
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(expiry_job, "run_expiry_cleanup", fail)

        asyncio.run(expiry_job._expiry_tick(get_settings()))

    def test_scheduler_is_not_built_when_disabled(self) -> None:
        settings = get_settings().model_copy(update={"EXPIRY_CLEANUP_ENABLED": False})
        assert expiry_job.create_expiry_scheduler(settings) is None
