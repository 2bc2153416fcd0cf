class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class ConfigurationError(CustomBaseError):
    """Invalid facility setup (e.g. seat geometry). Fatal at startup, never retried."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class InvalidIntervalError(DomainError):
    def __init__(self, message: str = 'End time must be after start time') -> None:
        super().__init__(message, 400)


class DraftValidationError(DomainError):
    """Booking form input failed local checks. Carries one message per field."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = field_errors
        super().__init__(
            '; '.join(f'{field}: {error}' for field, error in field_errors.items()), 400
        )


class InvalidTransitionError(CustomBaseError):
    """Seat status/occupant mismatch. Raised on caller bugs, never user input."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class SeatNotFoundError(NotFoundError):
    def __init__(self, seat_id: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat not found: {seat_id}')


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: str) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking not found: {booking_id}')


class BookingConflictError(ConflictError):
    def __init__(self, message: str = 'Seat was taken by someone else for this time slot') -> None:
        super().__init__(message)


class OperationTimeoutError(CustomBaseError):
    retryable = True

    def __init__(self, message: str) -> None:
        super().__init__(message, 504)
