"""
Booking Submission Flow

One booking form, driven through a fixed sequence of states:

Draft → Validating → AwaitingAvailabilityConfirmation → Submitting → Committed | Rejected

- Validating: local field checks only; failures go back to Draft with field errors
- AwaitingAvailabilityConfirmation: advisory check; cancelled when the user
  edits the form while it is pending
- Submitting: Booking Conflict Guard commit, the final word on conflicts
- Rejected: the next submit() starts over from Draft
- Committed: terminal

Stale results:
    Every edit bumps a generation counter and cancels the pending check.
    A check that still returns (it finished before the cancel landed) is
    compared against the generation captured when it started and dropped
    if they differ, so it can never move the flow forward.

Timeouts on either await return the flow to Draft with a retryable error.
"""

from typing import Any, List, Optional, Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    BookingConflictError,
    DomainError,
    DraftValidationError,
    SeatNotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.booking_conflict_guard import BookingConflictGuard
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.app.query.check_seat_availability_use_case import (
    AvailabilityResult,
    CheckSeatAvailabilityUseCase,
)
from src.service.booking.domain.booking_draft import BookingDraft, CandidateBooking
from src.service.booking.domain.booking_entity import Booking
from src.service.booking.domain.submission_state import (
    RejectionReason,
    SubmissionOutcome,
    SubmissionState,
)
from src.service.seat_map.app.interface.i_seat_state_store import ISeatStateStore


class BookingSubmissionFlow:
    def __init__(
        self,
        *,
        availability_checker: CheckSeatAvailabilityUseCase,
        conflict_guard: BookingConflictGuard,
        availability_timeout: float,
        submission_timeout: float,
        draft: Optional[BookingDraft] = None,
    ) -> None:
        self.availability_checker = availability_checker
        self.conflict_guard = conflict_guard
        self.availability_timeout = availability_timeout
        self.submission_timeout = submission_timeout
        self.draft = draft or BookingDraft()
        self.state = SubmissionState.DRAFT
        self.history: List[SubmissionState] = [SubmissionState.DRAFT]
        self.booking: Optional[Booking] = None
        self.tracer = trace.get_tracer(__name__)
        self._generation = 0
        self._pending_check: Optional[anyio.CancelScope] = None

    @classmethod
    @inject
    def depends(
        cls,
        seat_state_store: ISeatStateStore = Depends(Provide[Container.seat_state_store]),
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        conflict_guard: BookingConflictGuard = Depends(Provide[Container.booking_conflict_guard]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            availability_checker=CheckSeatAvailabilityUseCase(
                seat_state_store=seat_state_store, booking_repo=booking_repo
            ),
            conflict_guard=conflict_guard,
            availability_timeout=config.AVAILABILITY_CHECK_TIMEOUT_SECONDS,
            submission_timeout=config.SUBMISSION_TIMEOUT_SECONDS,
        )

    @property
    def generation(self) -> int:
        return self._generation

    def _transition(self, state: SubmissionState) -> None:
        Logger.base.debug(f'[SUBMISSION-FLOW] {self.state} → {state}')
        self.state = state
        self.history.append(state)

    def _outcome(self, **kwargs: Any) -> SubmissionOutcome:
        return SubmissionOutcome(state=self.state, booking=self.booking, **kwargs)

    def edit(self, **changes: Optional[str]) -> BookingDraft:
        """
        Change form fields. Invalidates any availability check in flight.

        Raises:
            DomainError: the booking is already being submitted or committed
        """
        if self.state in (SubmissionState.SUBMITTING, SubmissionState.COMMITTED):
            raise DomainError(f'Booking can no longer be edited ({self.state})')

        self.draft = self.draft.edit(**changes)
        self._generation += 1
        if self._pending_check is not None:
            Logger.base.info(
                f'✋ [SUBMISSION-FLOW] Form edited, cancelling availability check '
                f'(generation → {self._generation})'
            )
            self._pending_check.cancel()
        if self.state != SubmissionState.DRAFT:
            self._transition(SubmissionState.DRAFT)
        return self.draft

    async def submit(self) -> SubmissionOutcome:
        """
        Run the form through validation, the advisory check and the commit

        Raises:
            DomainError: already committed, or a submission is still running
        """
        if self.state == SubmissionState.COMMITTED:
            raise DomainError('Booking already committed')
        if self.state != SubmissionState.DRAFT and not self.state.is_final:
            raise DomainError(f'Submission already in progress ({self.state})')
        if self.state.is_final:
            # Rejected: start over from Draft
            self._transition(SubmissionState.DRAFT)

        with self.tracer.start_as_current_span('submission_flow.submit') as span:
            outcome = await self._run(self._generation)
            span.set_attribute('submission.state', outcome.state.value)
            if outcome.rejection_reason:
                span.set_attribute('submission.rejection_reason', outcome.rejection_reason.value)
            return outcome

    async def _run(self, generation: int) -> SubmissionOutcome:
        self._transition(SubmissionState.VALIDATING)
        try:
            candidate = CandidateBooking.from_draft(self.draft)
        except DraftValidationError as e:
            self._transition(SubmissionState.DRAFT)
            return self._outcome(field_errors=e.field_errors, message=e.message)

        self._transition(SubmissionState.AWAITING_AVAILABILITY_CONFIRMATION)
        checked = await self._await_availability(candidate, generation)
        if isinstance(checked, SubmissionOutcome):
            return checked

        if not checked.available:
            assert checked.reason is not None
            self._transition(SubmissionState.REJECTED)
            Logger.base.info(
                f'🚫 [SUBMISSION-FLOW] {candidate.seat_id} {candidate.interval} rejected: '
                f'{checked.reason}'
            )
            return self._outcome(
                rejection_reason=RejectionReason(checked.reason.value), message=checked.message
            )

        self._transition(SubmissionState.SUBMITTING)
        return await self._commit(candidate)

    async def _await_availability(
        self, candidate: CandidateBooking, generation: int
    ) -> AvailabilityResult | SubmissionOutcome:
        result: Optional[AvailabilityResult] = None
        with anyio.CancelScope() as scope:
            self._pending_check = scope
            try:
                with anyio.fail_after(self.availability_timeout):
                    result = await self.availability_checker.check_interval(
                        seat_id=candidate.seat_id, interval=candidate.interval
                    )
            except TimeoutError:
                if generation == self._generation:
                    self._transition(SubmissionState.DRAFT)
                Logger.base.warning(
                    f'⏱️ [SUBMISSION-FLOW] Availability check for {candidate.seat_id} '
                    f'timed out after {self.availability_timeout}s'
                )
                return self._outcome(
                    message='Checking seat availability timed out, please try again',
                    retryable=True,
                )
            except SeatNotFoundError as e:
                if generation == self._generation:
                    self._transition(SubmissionState.DRAFT)
                return self._outcome(field_errors={'seat_id': e.message}, message=e.message)
            except Exception:
                if generation == self._generation:
                    self._transition(SubmissionState.DRAFT)
                raise
            finally:
                if self._pending_check is scope:
                    self._pending_check = None

        if result is None or generation != self._generation:
            Logger.base.info(
                f'🗑️ [SUBMISSION-FLOW] Discarded stale availability result for '
                f'{candidate.seat_id} (generation {generation}, current {self._generation})'
            )
            return self._outcome(message='Booking details changed, availability will be re-checked')
        return result

    async def _commit(self, candidate: CandidateBooking) -> SubmissionOutcome:
        booking = Booking.create(
            student=candidate.student,
            seat_id=candidate.seat_id,
            interval=candidate.interval,
            shift=candidate.shift,
            notes=candidate.notes,
        )
        try:
            with anyio.fail_after(self.submission_timeout):
                await self.conflict_guard.commit(booking=booking)
        except BookingConflictError as e:
            self._transition(SubmissionState.REJECTED)
            return self._outcome(
                rejection_reason=RejectionReason.BOOKING_CONFLICT, message=e.message
            )
        except TimeoutError:
            self._transition(SubmissionState.DRAFT)
            Logger.base.warning(
                f'⏱️ [SUBMISSION-FLOW] Commit for {candidate.seat_id} timed out '
                f'after {self.submission_timeout}s'
            )
            return self._outcome(
                message='Submitting the booking timed out, please try again', retryable=True
            )
        except Exception:
            self._transition(SubmissionState.DRAFT)
            raise

        self.booking = booking
        self._transition(SubmissionState.COMMITTED)
        Logger.base.info(
            f'🎉 [SUBMISSION-FLOW] Booking {booking.id} committed on {booking.seat_id} '
            f'{booking.interval}'
        )
        return self._outcome(message='Booking confirmed')
