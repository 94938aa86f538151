"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from refahi.config import configure_logging, get_settings
from refahi.database import dispose_engine, initialize_database
from refahi.infrastructure.common.exception_handlers import register_exception_handlers
from refahi.infrastructure.facilities.routers import facilities, facility_requests
from refahi.infrastructure.finance.routers import bills, payments, wallets
from refahi.infrastructure.identity.routers import auth
from refahi.infrastructure.identity.routers.auth import limiter
from refahi.infrastructure.membership.routers import members
from refahi.infrastructure.recreation.routers import reservations, tours
from refahi.infrastructure.recreation.services.expiry_job import create_expiry_scheduler
from refahi.infrastructure.surveying.routers import surveys

settings = get_settings()

configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize the database and the expiry scheduler for the app lifetime."""
    initialize_database(settings)
    scheduler = create_expiry_scheduler(settings) if settings.ENVIRONMENT != "test" else None
    if scheduler is not None:
        scheduler.start()
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    if scheduler is not None:
        scheduler.shutdown(wait=False)
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for api_router in (
    auth.router,
    members.router,
    tours.router,
    reservations.router,
    bills.router,
    payments.router,
    wallets.router,
    facilities.router,
    facility_requests.router,
    surveys.router,
):
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Welcome to Refahi API"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@app.get(f"{settings.API_V1_PREFIX}/")
async def api_root() -> dict[str, str]:
    return {
        "message": "Refahi API v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }
