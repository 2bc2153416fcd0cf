"""Seat Status Bus Interface (Port)

Process-wide publish/subscribe channel ("seat-status-changed") that keeps every
seat map view in step with committed seat transitions.
"""

from abc import ABC, abstractmethod
from typing import Callable

import attrs

from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent


SeatStatusHandler = Callable[[SeatStatusChangedEvent], None]


@attrs.define(frozen=True)
class Subscription:
    """Handle returned by subscribe(); pass it back to unsubscribe() on teardown."""

    id: str
    handler: SeatStatusHandler = attrs.field(eq=False, repr=False)
    name: str = attrs.field(default='', eq=False)


@attrs.define(frozen=True)
class HandlerFailure:
    subscription_id: str
    subscriber_name: str
    error: Exception


@attrs.define(frozen=True)
class PublishReport:
    delivered: int
    failures: tuple[HandlerFailure, ...] = ()

    @property
    def failed(self) -> int:
        return len(self.failures)


class ISeatStatusBus(ABC):
    @abstractmethod
    def subscribe(self, handler: SeatStatusHandler, *, name: str = '') -> Subscription:
        """
        Register a handler for seat status changes

        Args:
            handler: Called synchronously with each published event
            name: Label used in logs (e.g. the view name)

        Returns:
            Subscription handle for unsubscribe()
        """
        pass

    @abstractmethod
    def unsubscribe(self, subscription: Subscription) -> bool:
        """
        Remove a subscription

        Returns:
            True if it was registered; unknown or already removed handles return False
        """
        pass

    @abstractmethod
    def publish(self, event: SeatStatusChangedEvent) -> PublishReport:
        """
        Deliver an event to every handler registered at publish time, in
        subscription order. A raising handler never blocks the others.
        """
        pass

    @property
    @abstractmethod
    def subscriber_count(self) -> int:
        pass
