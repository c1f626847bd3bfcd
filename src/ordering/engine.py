"""Storefront engine: the cart/order lifecycle for one storefront session.

The engine owns every piece of mutable state the storefront has: the cart,
the order history (most recent first), the active-order slot, the checkout
preferences and the status scheduler. The host application creates one
engine, hands it to the presentation layer and closes it on shutdown; there
are no module-level singletons.

The Cart and Order aggregates never leave the engine. Reads hand out frozen
``PlacedOrder`` snapshots and ``CartEntryView`` copies, so nothing a caller
does to a returned value can change an order's status.

All reads and writes go through a single re-entrant lock and run inside the
ordering domain's context, so the scheduler driver and threaded hosts see
the same serialised behaviour as a single event loop.

Status catch-up: reading orders (``order``, ``orders_history``,
``active_order``) first applies every scheduled transition that is already
due, so a lookup never shows a status older than the simulation says it
should be.
"""

import contextlib
import threading
import time

from structlog.contextvars import bound_contextvars

from catalogue.cache import CatalogCache
from ordering.cart.cart import Cart
from ordering.domain import ordering
from ordering.order.numbering import OrderNumberSequence
from ordering.order.order import Order
from ordering.preferences import CheckoutPreferences
from ordering.pricing import PriceBreakdown
from ordering.projections.cart_view import CartEntryView
from ordering.projections.placed_order import PlacedOrder
from ordering.tracking.scheduler import StatusScheduler, offsets_from_settings
from shared.config import Settings
from shared.exceptions import EmptyCartError, EngineClosedError, OrderNotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)


class StorefrontEngine:
    def __init__(
        self,
        catalog=None,
        settings=None,
        session=None,
        clock=time.monotonic,
        numbers=None,
        domain=ordering,
    ) -> None:
        self.settings = settings or Settings()
        self.catalog = catalog if catalog is not None else CatalogCache()
        self.session = session
        self.domain = domain
        self._preferences = CheckoutPreferences.from_settings(self.settings)
        self._orders: list[Order] = []
        self._active_order_id: int | None = None
        self._numbers = numbers or OrderNumberSequence()
        self._listeners = []
        self._lock = threading.RLock()
        self._closed = False
        self._scheduler = StatusScheduler(
            on_due=self._apply_transition,
            clock=clock,
            offsets=offsets_from_settings(self.settings.tracking),
        )
        with self.domain.domain_context():
            self._cart = Cart()

    @contextlib.contextmanager
    def _locked(self):
        with self._lock, self.domain.domain_context():
            yield

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def close(self) -> None:
        """Cancel all pending status transitions. Orders stop moving after this."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._scheduler.close()
        logger.info("Storefront engine closed", orders=len(self._orders))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def scheduler(self) -> StatusScheduler:
        return self._scheduler

    async def run_scheduler(self) -> None:
        await self._scheduler.run()

    # -------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------
    def subscribe(self, listener):
        """Register ``listener(event)``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, aggregate) -> None:
        events = list(aggregate._events)
        aggregate._events.clear()
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception("Event listener failed", event_type=type(event).__name__)

    # -------------------------------------------------------------------
    # Catalogue, identity & preferences
    # -------------------------------------------------------------------
    def refresh_catalog(self, source) -> None:
        """Re-fetch the catalogue. CatalogUnavailableError propagates; the old snapshot stays."""
        with self._lock:
            self.catalog.refresh(source)

    def sign_in(self, session) -> None:
        with self._lock:
            self.session = session
        logger.info("Session started", email=session.email)

    def sign_out(self) -> None:
        with self._lock:
            self.session = None

    def preferences(self) -> CheckoutPreferences:
        with self._lock:
            return self._preferences

    def set_preferences(self, address=None, payment_method=None) -> CheckoutPreferences:
        """Change the default address and/or payment method used at checkout."""
        with self._lock:
            self._preferences = self._preferences.update(address=address, payment_method=payment_method)
            logger.debug(
                "Checkout preferences updated",
                payment_method=self._preferences.payment_method.value,
            )
            return self._preferences

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add(self, product) -> CartEntryView:
        """Add one unit of ``product``. Listeners receive CartItemAdded."""
        with self._locked():
            entry = self._cart.add(product)
            logger.debug("Added to cart", product_id=entry.product_id, quantity=entry.quantity)
            self._publish(self._cart)
            return CartEntryView(product_id=entry.product_id, quantity=entry.quantity)

    def change_quantity(self, product_id, delta: int) -> None:
        with self._locked():
            self._cart.change_quantity(product_id, delta)
            self._publish(self._cart)

    def clear(self) -> None:
        with self._locked():
            self._cart.clear()
            self._publish(self._cart)

    def cart_entries(self) -> list[CartEntryView]:
        with self._locked():
            return [CartEntryView(product_id=e.product_id, quantity=e.quantity) for e in self._cart.entries]

    def detailed_items(self):
        with self._locked():
            return self._cart.detailed_items(self.catalog, currency=self.settings.currency)

    def pricing(self, items=None) -> PriceBreakdown:
        with self._lock:
            items = self.detailed_items() if items is None else items
            return PriceBreakdown.of(items, fee=self.settings.delivery_fee, currency=self.settings.currency)

    def subtotal(self):
        return self.pricing().subtotal

    def delivery_fee(self):
        return self.pricing().delivery_fee

    def total(self):
        return self.pricing().total

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def place_order(self, address=None, payment_method=None, items=None) -> PlacedOrder:
        """Check out the cart.

        ``items`` defaults to the cart's current priced lines; ``address`` and
        ``payment_method`` default to the checkout preferences. Raises
        EmptyCartError, leaving history and cart untouched, when there is
        nothing to buy, and EngineClosedError once the engine is closed.
        """
        with self._locked():
            if self._closed:
                raise EngineClosedError("Storefront engine is closed")

            items = self.detailed_items() if items is None else list(items)
            if not items:
                logger.info("Checkout rejected: empty cart", cart_entries=len(self._cart.entries))
                raise EmptyCartError()

            preferences = self._preferences
            order = Order.place(
                order_id=self._numbers.next(),
                items=items,
                address=preferences.address if address is None else address,
                payment_method=payment_method or preferences.payment_method,
                fee=self.settings.delivery_fee,
                customer=self.session,
            )
            with bound_contextvars(order_id=order.id):
                self._orders.insert(0, order)
                self._cart.clear()
                self._active_order_id = order.id
                self._scheduler.schedule(order.id)

                logger.info(
                    "Order placed",
                    items=order.item_count,
                    total=str(order.total.amount),
                    payment_method=order.payment_method,
                )
                self._publish(order)
                self._publish(self._cart)
            return PlacedOrder.of(order)

    def _find(self, order_id) -> Order | None:
        return next((o for o in self._orders if o.id == order_id), None)

    def _apply_transition(self, order_id, target_status) -> None:
        with self._locked(), bound_contextvars(order_id=order_id):
            order = self._find(order_id)
            if order is None:
                logger.debug("Skipping transition for unknown order")
                return
            if not order.advance_to(target_status):
                logger.debug("Skipping stale transition", status=order.status, target_status=target_status.value)
                return
            logger.info("Order status advanced", status=order.status)
            self._publish(order)

    def catch_up(self) -> int:
        """Apply every status transition already due."""
        with self._locked():
            if self._closed:
                return 0
            return self._scheduler.run_pending()

    def _get(self, order_id) -> Order:
        order = self._find(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def orders_history(self) -> list[PlacedOrder]:
        with self._locked():
            self.catch_up()
            return [PlacedOrder.of(order) for order in self._orders]

    def order(self, order_id) -> PlacedOrder:
        with self._locked():
            self.catch_up()
            return PlacedOrder.of(self._get(order_id))

    def active_order(self) -> PlacedOrder | None:
        with self._locked():
            self.catch_up()
            if self._active_order_id is None:
                return None
            order = self._find(self._active_order_id)
            return PlacedOrder.of(order) if order is not None else None

    def track(self, order_id) -> PlacedOrder:
        """Make a past order the active one, as when it is opened from history."""
        with self._locked():
            self.catch_up()
            order = self._get(order_id)
            self._active_order_id = order.id
            return PlacedOrder.of(order)

    def stop_tracking(self) -> None:
        with self._lock:
            self._active_order_id = None
