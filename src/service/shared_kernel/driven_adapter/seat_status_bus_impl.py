"""
In-memory Seat Status Bus

Singleton pub/sub that carries SeatStatusChangedEvent from the booking side
to every mounted seat map view (and every SSE client) in this process.

Delivery:
- Synchronous, in subscription order, at most once per publish per subscriber
- Subscriber list is snapshotted before delivery; handlers may subscribe or
  unsubscribe from inside a handler
- A handler removed during a publish is skipped for the rest of that publish
- No replay for late subscribers
"""

import uuid_utils

from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_seat_status_bus import (
    HandlerFailure,
    ISeatStatusBus,
    PublishReport,
    SeatStatusHandler,
    Subscription,
)
from src.service.shared_kernel.domain.domain_event import (
    SEAT_STATUS_CHANNEL,
    SeatStatusChangedEvent,
)


class SeatStatusBusImpl(ISeatStatusBus):
    channel = SEAT_STATUS_CHANNEL

    def __init__(self) -> None:
        # subscription id → subscription, insertion ordered
        self._subscriptions: dict[str, Subscription] = {}

    def subscribe(self, handler: SeatStatusHandler, *, name: str = '') -> Subscription:
        subscription = Subscription(id=str(uuid_utils.uuid7()), handler=handler, name=name)
        self._subscriptions[subscription.id] = subscription

        Logger.base.debug(
            f'📡 [SEAT-BUS] Subscribed {name or subscription.id} '
            f'(total subscribers: {len(self._subscriptions)})'
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        removed = self._subscriptions.pop(subscription.id, None)
        if removed is None:
            return False

        Logger.base.debug(
            f'📡 [SEAT-BUS] Unsubscribed {subscription.name or subscription.id} '
            f'(remaining: {len(self._subscriptions)})'
        )
        return True

    def publish(self, event: SeatStatusChangedEvent) -> PublishReport:
        snapshot = list(self._subscriptions.values())
        delivered = 0
        failures: list[HandlerFailure] = []

        for subscription in snapshot:
            if subscription.id not in self._subscriptions:
                continue
            try:
                subscription.handler(event)
                delivered += 1
            except Exception as e:
                failures.append(
                    HandlerFailure(
                        subscription_id=subscription.id,
                        subscriber_name=subscription.name,
                        error=e,
                    )
                )
                Logger.base.opt(exception=e).error(
                    f'❌ [SEAT-BUS] Handler {subscription.name or subscription.id} failed '
                    f'on seat {event.seat_id}: {type(e).__name__}: {e}'
                )

        Logger.base.info(
            f'📡 [SEAT-BUS] {self.channel} seat={event.seat_id} status={event.status}: '
            f'delivered={delivered}, failed={len(failures)}'
        )
        return PublishReport(delivered=delivered, failures=tuple(failures))

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def clear(self) -> None:
        """Drop every subscription. Called on application shutdown."""
        self._subscriptions.clear()
