"""The asyncio scheduler driver against the real monotonic clock."""

import asyncio

import pytest
from ordering.engine import StorefrontEngine
from ordering.order.events import OrderStatusAdvanced
from ordering.order.order import OrderStatus
from shared.config import Settings, TrackingSettings


@pytest.fixture
def fast_engine(catalog):
    settings = Settings(
        tracking=TrackingSettings(preparing_after=0.05, out_for_delivery_after=0.1, delivered_after=0.15)
    )
    engine = StorefrontEngine(catalog=catalog, settings=settings)
    yield engine
    engine.close()


async def _wait_for(predicate, timeout=2.0):
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), timeout=timeout)


def test_driver_delivers_orders_without_lookups(fast_engine, catalog):
    delivered = []
    fast_engine.subscribe(
        lambda event: delivered.append(event.order_id)
        if isinstance(event, OrderStatusAdvanced) and event.new_status == "Delivered"
        else None
    )

    async def scenario():
        driver = asyncio.create_task(fast_engine.run_scheduler())
        try:
            fast_engine.add(catalog.product("beer"))
            order = fast_engine.place_order()
            await _wait_for(lambda: delivered)
            return order
        finally:
            fast_engine.close()
            await asyncio.wait_for(driver, timeout=1.0)

    order = asyncio.run(scenario())

    assert delivered == [order.id]
    assert fast_engine.order(order.id).status == OrderStatus.DELIVERED


def test_close_stops_the_driver(fast_engine):
    async def scenario():
        driver = asyncio.create_task(fast_engine.run_scheduler())
        await asyncio.sleep(0.01)
        fast_engine.close()
        await asyncio.wait_for(driver, timeout=1.0)
        return driver

    assert asyncio.run(scenario()).done()


def test_close_freezes_in_flight_orders(fast_engine, catalog):
    advanced = []
    fast_engine.subscribe(lambda event: advanced.append(event) if isinstance(event, OrderStatusAdvanced) else None)

    async def scenario():
        driver = asyncio.create_task(fast_engine.run_scheduler())
        fast_engine.add(catalog.product("beer"))
        order = fast_engine.place_order()
        await _wait_for(lambda: advanced)

        fast_engine.close()
        frozen = fast_engine.order(order.id).status
        await asyncio.sleep(0.2)
        await asyncio.wait_for(driver, timeout=1.0)
        return order, frozen

    order, frozen = asyncio.run(scenario())

    assert frozen != OrderStatus.RECEIVED
    assert fast_engine.order(order.id).status == frozen
