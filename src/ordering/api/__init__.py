"""Ordering domain API package."""

from ordering.api.routes import cart_router, order_router, profile_router

__all__ = ["cart_router", "order_router", "profile_router"]
