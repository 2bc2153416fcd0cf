"""
Production FastAPI Application

Seat map, booking flow and the seat status SSE feed in one process.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config import di
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Seat Booking] Starting up...')

    tracing = TracingConfig(service_name='seat-booking')
    tracing.setup()
    Logger.base.info('📊 [Seat Booking] OpenTelemetry tracing configured')

    di.container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seat Booking] Dependency injection wired')

    # Fail fast on invalid layout settings (ConfigurationError)
    di.setup()
    seat_count = len(di.container.seat_state_store())
    Logger.base.info(f'💺 [Seat Booking] Seat map ready with {seat_count} seats')

    yield

    Logger.base.info('🛑 [Seat Booking] Shutting down...')

    di.cleanup()
    Logger.base.info('📡 [Seat Booking] Seat status subscribers released')

    tracing.shutdown()
    di.container.unwire()

    Logger.base.info('👋 [Seat Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
