"""Status Scheduler: simulated courier progress for placed orders.

Each placed order gets three pending transitions, due at fixed offsets from
its placement time (not from the previous transition):

    +2.5s  PREPARING
    +6.0s  OUT_FOR_DELIVERY
    +10s   DELIVERED

Pending transitions sit in a min-heap keyed by due time and carry the order
number they were scheduled for, never a pointer to "the current order".
Nothing here touches an order directly: when a transition falls due the
scheduler calls ``on_due(order_id, target_status)`` and the owner decides
what that means.

Time comes from an injectable monotonic clock. ``run_pending()`` fires
whatever is due right now; ``run()`` is an asyncio driver that sleeps until
the next due transition.
"""

import asyncio
import heapq
import itertools
import threading
import time
from dataclasses import dataclass, field

import structlog

from ordering.order.order import OrderStatus

logger = structlog.get_logger(__name__)

DEFAULT_OFFSETS = (
    (2.5, OrderStatus.PREPARING),
    (6.0, OrderStatus.OUT_FOR_DELIVERY),
    (10.0, OrderStatus.DELIVERED),
)


def offsets_from_settings(tracking):
    return (
        (tracking.preparing_after, OrderStatus.PREPARING),
        (tracking.out_for_delivery_after, OrderStatus.OUT_FOR_DELIVERY),
        (tracking.delivered_after, OrderStatus.DELIVERED),
    )


@dataclass(order=True)
class ScheduledTransition:
    due_at: float
    seq: int
    order_id: int = field(compare=False)
    target_status: OrderStatus = field(compare=False)


class StatusScheduler:
    def __init__(self, on_due, clock=time.monotonic, offsets=DEFAULT_OFFSETS) -> None:
        self._on_due = on_due
        self._clock = clock
        self._offsets = tuple(sorted(offsets, key=lambda pair: pair[0]))
        self._heap: list[ScheduledTransition] = []
        self._seq = itertools.count()
        self._lock = threading.Lock()
        self._closed = False
        self._loop = None
        self._wakeup = None

    # -------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------
    def schedule(self, order_id, placed_at=None) -> list[ScheduledTransition]:
        """Queue the full delivery simulation for ``order_id``."""
        if self._closed:
            logger.warning("Scheduler is closed, ignoring order", order_id=order_id)
            return []

        placed_at = self._clock() if placed_at is None else placed_at
        entries = [
            ScheduledTransition(
                due_at=placed_at + offset,
                seq=next(self._seq),
                order_id=order_id,
                target_status=status,
            )
            for offset, status in self._offsets
        ]
        with self._lock:
            for entry in entries:
                heapq.heappush(self._heap, entry)

        logger.debug(
            "Scheduled status transitions",
            order_id=order_id,
            due=[round(e.due_at - placed_at, 3) for e in entries],
        )
        self._wake()
        return entries

    def cancel(self, order_id) -> int:
        """Drop every pending transition for ``order_id``."""
        with self._lock:
            remaining = [e for e in self._heap if e.order_id != order_id]
            cancelled = len(self._heap) - len(remaining)
            heapq.heapify(remaining)
            self._heap = remaining
        if cancelled:
            logger.debug("Cancelled status transitions", order_id=order_id, count=cancelled)
        return cancelled

    def cancel_all(self) -> int:
        with self._lock:
            cancelled = len(self._heap)
            self._heap = []
        return cancelled

    def close(self) -> None:
        """Cancel everything and stop the driver. Further schedules are ignored."""
        cancelled = self.cancel_all()
        self._closed = True
        self._wake()
        logger.debug("Scheduler closed", cancelled=cancelled)

    # -------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------
    def pending(self, order_id=None) -> list[ScheduledTransition]:
        with self._lock:
            entries = sorted(self._heap)
        if order_id is None:
            return entries
        return [e for e in entries if e.order_id == order_id]

    def next_due(self) -> float | None:
        with self._lock:
            return self._heap[0].due_at if self._heap else None

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------
    # Firing
    # -------------------------------------------------------------------
    def _pop_due(self, now):
        with self._lock:
            if self._heap and self._heap[0].due_at <= now:
                return heapq.heappop(self._heap)
        return None

    def run_pending(self, now=None) -> int:
        """Fire, in chronological order, every transition due at ``now``."""
        now = self._clock() if now is None else now
        fired = 0
        while (entry := self._pop_due(now)) is not None:
            try:
                self._on_due(entry.order_id, entry.target_status)
            except Exception:
                logger.exception(
                    "Status transition handler failed",
                    order_id=entry.order_id,
                    target_status=entry.target_status.value,
                )
            fired += 1
        return fired

    async def run(self) -> None:
        """Fire transitions as they fall due until ``close()`` is called."""
        self._loop = asyncio.get_running_loop()
        self._wakeup = asyncio.Event()
        logger.info("Status scheduler started")
        try:
            while not self._closed:
                self._wakeup.clear()
                self.run_pending()
                next_due = self.next_due()
                timeout = None if next_due is None else max(0.0, next_due - self._clock())
                try:
                    await asyncio.wait_for(self._wakeup.wait(), timeout=timeout)
                except TimeoutError:
                    pass
        finally:
            self._loop = None
            self._wakeup = None
            logger.info("Status scheduler stopped")

    def _wake(self) -> None:
        loop, wakeup = self._loop, self._wakeup
        if loop is None or wakeup is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            wakeup.set()
        else:
            loop.call_soon_threadsafe(wakeup.set)
