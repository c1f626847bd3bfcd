"""FastAPI routes for the Ordering domain: cart, orders and checkout preferences."""

from fastapi import APIRouter, Depends, HTTPException

from ordering.api.schemas import (
    AddToCartRequest,
    ChangeQuantityRequest,
    CheckoutRequest,
    PreferencesRequest,
    PreferencesResponse,
)
from ordering.projections.cart_view import CartEntryView, CartView, build_cart_view
from ordering.projections.order_detail import OrderDetail, order_detail
from ordering.projections.order_summary import OrderSummary, order_history
from ordering.projections.order_tracking import OrderTracking, tracking_for
from shared.api import get_engine


def _cart_view(engine) -> CartView:
    items = engine.detailed_items()
    return build_cart_view(items, engine.pricing(items))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartView)
async def get_cart(engine=Depends(get_engine)) -> CartView:
    return _cart_view(engine)


@cart_router.get("/entries", response_model=list[CartEntryView])
async def get_cart_entries(engine=Depends(get_engine)) -> list[CartEntryView]:
    """Raw entries, including ones whose product is missing from the catalogue."""
    return engine.cart_entries()


@cart_router.post("/items", response_model=CartView)
async def add_cart_item(body: AddToCartRequest, engine=Depends(get_engine)) -> CartView:
    product = engine.catalog.product(body.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {body.product_id} not found")
    engine.add(product)
    return _cart_view(engine)


@cart_router.patch("/items/{product_id}", response_model=CartView)
async def change_cart_item_quantity(
    product_id: str, body: ChangeQuantityRequest, engine=Depends(get_engine)
) -> CartView:
    engine.change_quantity(product_id, body.delta)
    return _cart_view(engine)


@cart_router.delete("", response_model=CartView)
async def clear_cart(engine=Depends(get_engine)) -> CartView:
    engine.clear()
    return _cart_view(engine)


@cart_router.post("/checkout", status_code=201, response_model=OrderDetail)
async def checkout_cart(body: CheckoutRequest, engine=Depends(get_engine)) -> OrderDetail:
    order = engine.place_order(address=body.address, payment_method=body.payment_method)
    return order_detail(order)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderSummary])
async def list_orders(engine=Depends(get_engine)) -> list[OrderSummary]:
    return order_history(engine.orders_history())


@order_router.get("/active", response_model=OrderTracking | None)
async def get_active_order(engine=Depends(get_engine)) -> OrderTracking | None:
    order = engine.active_order()
    return tracking_for(order) if order is not None else None


@order_router.get("/{order_id}", response_model=OrderDetail)
async def get_order(order_id: int, engine=Depends(get_engine)) -> OrderDetail:
    return order_detail(engine.order(order_id))


@order_router.get("/{order_id}/tracking", response_model=OrderTracking)
async def get_order_tracking(order_id: int, engine=Depends(get_engine)) -> OrderTracking:
    return tracking_for(engine.order(order_id))


@order_router.post("/{order_id}/track", response_model=OrderTracking)
async def track_order(order_id: int, engine=Depends(get_engine)) -> OrderTracking:
    return tracking_for(engine.track(order_id))


# ---------------------------------------------------------------------------
# Profile Router
# ---------------------------------------------------------------------------
profile_router = APIRouter(prefix="/profile", tags=["profile"])


@profile_router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(engine=Depends(get_engine)) -> PreferencesResponse:
    return PreferencesResponse.from_preferences(engine.preferences())


@profile_router.put("/preferences", response_model=PreferencesResponse)
async def update_preferences(body: PreferencesRequest, engine=Depends(get_engine)) -> PreferencesResponse:
    """Change the defaults used when checkout omits an address or payment method."""
    preferences = engine.set_preferences(address=body.address, payment_method=body.payment_method)
    return PreferencesResponse.from_preferences(preferences)
