"""FastAPI endpoints for the Catalogue: read-only views of the Catalog Cache."""

from fastapi import APIRouter, Depends, HTTPException, Request

from catalogue.api.schemas import CategoryResponse, ProductResponse, RefreshResponse
from shared.api import get_engine

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
catalogue_router = APIRouter(prefix="/catalogue", tags=["catalogue"])


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(q: str = "", category_id: str | None = None, engine=Depends(get_engine)):
    currency = engine.settings.currency
    return [ProductResponse.from_product(p, currency) for p in engine.catalog.search(q, category_id)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, engine=Depends(get_engine)):
    product = engine.catalog.product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return ProductResponse.from_product(product, engine.settings.currency)


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories(engine=Depends(get_engine)):
    return [CategoryResponse(id=c.id, name=c.name) for c in engine.catalog.categories()]


# --- Maintenance ---
# Plain def: the source fetch blocks, so it runs in the threadpool


@catalogue_router.post("/refresh", response_model=RefreshResponse)
def refresh_catalogue(request: Request, engine=Depends(get_engine)):
    source = getattr(request.app.state, "catalog_source", None)
    if source is None:
        raise HTTPException(status_code=503, detail="No catalogue source configured")
    engine.refresh_catalog(source)
    return RefreshResponse(products=len(engine.catalog.products()), categories=len(engine.catalog.categories()))
