"""HotelDesk — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hoteldesk.api.v1.add_ons import router as add_ons_router
from hoteldesk.api.v1.auth import router as auth_router
from hoteldesk.api.v1.billings import router as billings_router
from hoteldesk.api.v1.bookings import router as bookings_router
from hoteldesk.api.v1.customers import router as customers_router
from hoteldesk.api.v1.expenses import router as expenses_router
from hoteldesk.api.v1.gst import router as gst_router
from hoteldesk.api.v1.kitchen import router as kitchen_router
from hoteldesk.api.v1.rooms import router as rooms_router
from hoteldesk.api.v1.staff import router as staff_router
from hoteldesk.config import settings
from hoteldesk.database import Base, create_engine_from_settings, create_session_factory
from hoteldesk.exceptions import register_exception_handlers

# Configure root logger so all hoteldesk.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    engine = create_engine_from_settings(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    if settings.auto_create_tables:
        import hoteldesk.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured at %s", settings.async_database_url)

    yield

    # Shutdown — dispose engine connections
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Back office for a small hotel: rooms, bookings, kitchen orders and checkout billing.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(auth_router)
app.include_router(rooms_router)
app.include_router(customers_router)
app.include_router(bookings_router)
app.include_router(kitchen_router)
app.include_router(add_ons_router)
app.include_router(expenses_router)
app.include_router(gst_router)
app.include_router(staff_router)
app.include_router(billings_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
