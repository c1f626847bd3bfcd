"""Catalogue domain API package."""

from catalogue.api.routes import catalogue_router, category_router, product_router

__all__ = ["product_router", "category_router", "catalogue_router"]
