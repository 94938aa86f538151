"""Background job that expires reservation holds."""

import asyncio

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from refahi.application.recreation.commands.expire_reservations import (
    ExpireReservationsCommand,
    ExpireReservationsResult,
)
from refahi.config import Settings
from refahi.core import container
from refahi.database import get_session_factory
from refahi.infrastructure.common.di import resolve_with_session

logger = structlog.get_logger(__name__)

EXPIRY_JOB_ID = "expire_reservation_holds"


def run_expiry_cleanup(settings: Settings) -> ExpireReservationsResult:
    """Expire overdue holds on a dedicated session."""
    db = get_session_factory(settings)()
    try:
        handler = resolve_with_session(container.expire_reservations_handler, db)
        return handler.handle(ExpireReservationsCommand())
    finally:
        db.close()


async def _expiry_tick(settings: Settings) -> None:
    try:
        # Blocking database work stays off the event loop
        await asyncio.to_thread(run_expiry_cleanup, settings)
    except Exception:
        # Next tick retries
        logger.exception("expiry_cleanup_failed")


def create_expiry_scheduler(settings: Settings) -> AsyncIOScheduler | None:
    if not settings.EXPIRY_CLEANUP_ENABLED:
        logger.info("expiry_cleanup_disabled")
        return None

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        _expiry_tick,
        IntervalTrigger(seconds=settings.EXPIRY_CLEANUP_INTERVAL_SECONDS),
        args=[settings],
        id=EXPIRY_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info(
        "expiry_cleanup_scheduled", interval_seconds=settings.EXPIRY_CLEANUP_INTERVAL_SECONDS
    )
    return scheduler
