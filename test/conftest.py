"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (log directory, fast timeouts) before app imports
- Seat map / booking collaborators built on a small seat layout
- A FastAPI TestClient running the test app with a fresh DI container

Architecture:
- Unit tests (*_unit_test.py): construct collaborators directly, no HTTP
- Integration tests (*_integration_test.py): go through the HTTP app
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('FACILITY_TIMEZONE', 'UTC')
    os.environ.setdefault('SIMULATED_BACKEND_LATENCY_SECONDS', '0')
    os.environ.setdefault('AVAILABILITY_CHECK_TIMEOUT_SECONDS', '2')
    os.environ.setdefault('SUBMISSION_TIMEOUT_SECONDS', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncIterator, Callable, Generator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config import di  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.logging.loguru_io import Logger  # noqa: E402
from src.platform.types import Clock  # noqa: E402
from src.service.booking.app.command.booking_conflict_guard import (  # noqa: E402
    BookingConflictGuard,
)
from src.service.booking.app.query.check_seat_availability_use_case import (  # noqa: E402
    CheckSeatAvailabilityUseCase,
)
from src.service.booking.domain.booking_entity import Booking  # noqa: E402
from src.service.booking.driven_adapter.in_memory_booking_repo_impl import (  # noqa: E402
    InMemoryBookingRepoImpl,
)
from src.service.seat_map.domain.seat_layout import SeatLayoutGeometry  # noqa: E402
from src.service.seat_map.driven_adapter.in_memory_seat_state_store import (  # noqa: E402
    InMemorySeatStateStore,
)
from src.service.shared_kernel.driven_adapter.seat_status_bus_impl import (  # noqa: E402
    SeatStatusBusImpl,
)
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent  # noqa: E402
from src.service.shared_kernel.domain.enum import ShiftId  # noqa: E402
from src.service.shared_kernel.domain.value_object import StudentRef, TimeInterval  # noqa: E402


# Wall clock used by unit tests: well after the 2024-04-15 scenario bookings
FIXED_NOW = datetime(2024, 4, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> Clock:
    return lambda: FIXED_NOW


@pytest.fixture
def geometry() -> SeatLayoutGeometry:
    # 14 rows x (3 + 4): S-12 sits in row 2
    return SeatLayoutGeometry(rows=14, left_width=3, right_width=4)


@pytest.fixture
def seat_state_store(geometry: SeatLayoutGeometry) -> InMemorySeatStateStore:
    return InMemorySeatStateStore.from_geometry(geometry=geometry)


@pytest.fixture
def seat_status_bus() -> SeatStatusBusImpl:
    return SeatStatusBusImpl()


@pytest.fixture
def booking_repo() -> InMemoryBookingRepoImpl:
    return InMemoryBookingRepoImpl()


@pytest.fixture
def availability_checker(
    seat_state_store: InMemorySeatStateStore, booking_repo: InMemoryBookingRepoImpl
) -> CheckSeatAvailabilityUseCase:
    return CheckSeatAvailabilityUseCase(
        seat_state_store=seat_state_store, booking_repo=booking_repo
    )


@pytest.fixture
def conflict_guard(
    seat_state_store: InMemorySeatStateStore,
    booking_repo: InMemoryBookingRepoImpl,
    seat_status_bus: SeatStatusBusImpl,
    fixed_clock: Clock,
) -> BookingConflictGuard:
    return BookingConflictGuard(
        seat_state_store=seat_state_store,
        booking_repo=booking_repo,
        seat_status_bus=seat_status_bus,
        clock=fixed_clock,
    )


@pytest.fixture
def received_events(seat_status_bus: SeatStatusBusImpl) -> list[SeatStatusChangedEvent]:
    """Every event published on the bus during the test"""
    events: list[SeatStatusChangedEvent] = []
    seat_status_bus.subscribe(events.append, name='test-recorder')
    return events


BookingFactory = Callable[..., Booking]


@pytest.fixture
def make_booking() -> BookingFactory:
    def _make(
        *,
        seat_id: str = 'S-12',
        start: str = '09:00',
        end: str = '11:00',
        day: str = '2024-04-15',
        student_id: str = 'stu-1',
        student_name: Optional[str] = None,
    ) -> Booking:
        return Booking.create(
            student=StudentRef(id=student_id, name=student_name),
            seat_id=seat_id,
            interval=TimeInterval.parse(date=day, start_time=start, end_time=end),
            shift=ShiftId.MORNING,
        )

    return _make


# =============================================================================
# Test app: same routers and handlers as production, no tracing export.
# Each TestClient context starts from a freshly built container.
# =============================================================================


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🧪 [Test App] Starting up...')
    di.container.wire(modules=WIRE_MODULES)
    di.setup()

    yield

    di.cleanup()
    di.container.unwire()
    Logger.base.info('👋 [Test App] Shutdown complete')


test_app = create_app(lifespan=lifespan_for_tests, title_suffix=' (Test)')


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(test_app) as test_client:
        yield test_client
