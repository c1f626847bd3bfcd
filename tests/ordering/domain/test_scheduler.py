"""Tests for StatusScheduler against a fake clock."""

import pytest
from ordering.order.order import OrderStatus
from ordering.tracking.scheduler import DEFAULT_OFFSETS, StatusScheduler, offsets_from_settings
from shared.config import TrackingSettings


@pytest.fixture
def fired():
    return []


@pytest.fixture
def scheduler(clock, fired):
    return StatusScheduler(on_due=lambda order_id, status: fired.append((order_id, status)), clock=clock)


class TestSchedule:
    def test_three_transitions_per_order(self, scheduler, clock):
        entries = scheduler.schedule(100000)
        assert [e.target_status for e in entries] == [
            OrderStatus.PREPARING,
            OrderStatus.OUT_FOR_DELIVERY,
            OrderStatus.DELIVERED,
        ]
        assert [e.due_at - clock() for e in entries] == [2.5, 6.0, 10.0]

    def test_offsets_measured_from_placement(self, scheduler):
        entries = scheduler.schedule(100000, placed_at=50.0)
        assert [e.due_at for e in entries] == [52.5, 56.0, 60.0]

    def test_next_due(self, scheduler, clock):
        assert scheduler.next_due() is None
        scheduler.schedule(100000)
        assert scheduler.next_due() == clock() + 2.5

    def test_offsets_from_settings(self):
        tracking = TrackingSettings(preparing_after=1, out_for_delivery_after=2, delivered_after=3)
        assert [o for o, _ in offsets_from_settings(tracking)] == [1, 2, 3]
        assert [o for o, _ in DEFAULT_OFFSETS] == [2.5, 6.0, 10.0]


class TestRunPending:
    def test_nothing_due_before_first_offset(self, scheduler, clock, fired):
        scheduler.schedule(100000)
        clock.advance(2.4)
        assert scheduler.run_pending() == 0
        assert fired == []

    def test_fires_in_chronological_order(self, scheduler, clock, fired):
        scheduler.schedule(100000)
        clock.advance(10)
        assert scheduler.run_pending() == 3
        assert fired == [
            (100000, OrderStatus.PREPARING),
            (100000, OrderStatus.OUT_FOR_DELIVERY),
            (100000, OrderStatus.DELIVERED),
        ]
        assert scheduler.pending() == []

    def test_interleaves_orders_by_due_time(self, scheduler, clock, fired):
        scheduler.schedule(1)
        clock.advance(3)
        scheduler.schedule(2)
        clock.advance(3)
        scheduler.run_pending()
        assert fired == [
            (1, OrderStatus.PREPARING),
            (2, OrderStatus.PREPARING),
            (1, OrderStatus.OUT_FOR_DELIVERY),
        ]

    def test_explicit_now(self, scheduler, fired):
        scheduler.schedule(7, placed_at=0.0)
        scheduler.run_pending(now=6.0)
        assert [status for _, status in fired] == [OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY]

    def test_handler_failure_does_not_stop_later_transitions(self, clock):
        calls = []

        def on_due(order_id, status):
            calls.append(status)
            if status == OrderStatus.PREPARING:
                raise RuntimeError("boom")

        scheduler = StatusScheduler(on_due=on_due, clock=clock)
        scheduler.schedule(1)
        clock.advance(6)
        assert scheduler.run_pending() == 2
        assert calls == [OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY]


class TestCancellation:
    def test_cancel_one_order(self, scheduler, clock, fired):
        scheduler.schedule(1)
        scheduler.schedule(2)
        assert scheduler.cancel(1) == 3
        assert {e.order_id for e in scheduler.pending()} == {2}
        clock.advance(10)
        scheduler.run_pending()
        assert {order_id for order_id, _ in fired} == {2}

    def test_cancel_unknown_order(self, scheduler):
        assert scheduler.cancel(42) == 0

    def test_close_cancels_and_ignores_new_work(self, scheduler, clock, fired):
        scheduler.schedule(1)
        scheduler.close()
        assert scheduler.closed
        assert scheduler.pending() == []
        assert scheduler.schedule(2) == []
        clock.advance(20)
        assert scheduler.run_pending() == 0
        assert fired == []
