"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.types import facility_clock
from src.service.booking.app.command.booking_conflict_guard import BookingConflictGuard
from src.service.booking.driven_adapter.in_memory_booking_repo_impl import (
    InMemoryBookingRepoImpl,
)
from src.service.seat_map.domain.seat_layout import SeatLayoutGeometry
from src.service.seat_map.driven_adapter.in_memory_seat_state_store import (
    InMemorySeatStateStore,
)
from src.service.shared_kernel.driven_adapter.seat_status_bus_impl import SeatStatusBusImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Facility clock (decides occupied vs pre-booked)
    clock = providers.Singleton(facility_clock, tz_name=config_service.provided.FACILITY_TIMEZONE)

    # Seat layout geometry (raises ConfigurationError on bad settings)
    seat_layout_geometry = providers.Singleton(
        SeatLayoutGeometry.from_settings, settings=config_service
    )

    # Seat status bus: one per process, views subscribe on mount
    seat_status_bus = providers.Singleton(SeatStatusBusImpl)

    # Authoritative seat state, seeded all-available from the layout
    seat_state_store = providers.Singleton(
        InMemorySeatStateStore.from_geometry,
        geometry=seat_layout_geometry,
        id_prefix=config_service.provided.SEAT_ID_PREFIX,
    )

    # Booking persistence
    booking_repo = providers.Singleton(
        InMemoryBookingRepoImpl,
        latency_seconds=config_service.provided.SIMULATED_BACKEND_LATENCY_SECONDS,
    )

    # Single writer of booked seat state
    booking_conflict_guard = providers.Singleton(
        BookingConflictGuard,
        seat_state_store=seat_state_store,
        booking_repo=booking_repo,
        seat_status_bus=seat_status_bus,
        clock=clock,
    )


container = Container()


def setup() -> None:
    """Build the singletons eagerly so bad layout settings fail at startup."""
    container.config_service()
    container.seat_state_store()
    container.booking_conflict_guard()


def cleanup() -> None:
    container.seat_status_bus().clear()
    container.reset_singletons()
