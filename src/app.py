"""TurboDrink storefront FastAPI application.

The ordering domain is initialised at module level; ``PROTEAN_ENV`` selects
the ``domain.toml`` overlay it is configured with. One storefront engine
per process, created and torn down by the app lifespan. The lifespan also
loads the catalogue off the event loop (tolerating an outage) and runs the
status scheduler driver in the background.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api import catalogue_router, category_router, product_router
from catalogue.cache import CatalogCache
from catalogue.seed import demo_source
from catalogue.sources import SupabaseCatalogSource
from ordering.api import cart_router, order_router, profile_router
from ordering.domain import ordering
from ordering.engine import StorefrontEngine
from shared.api import register_exception_handlers
from shared.config import Settings, current_env
from shared.exceptions import CatalogUnavailableError
from shared.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_catalog_source(settings: Settings):
    """Supabase when credentials are configured, the demo catalogue otherwise."""
    conf = settings.catalogue
    if conf.supabase_url and conf.supabase_key:
        return SupabaseCatalogSource(conf.supabase_url, conf.supabase_key, timeout=conf.timeout)
    logger.info("No Supabase credentials configured, serving the demo catalogue")
    return demo_source()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    engine = app.state.engine
    owns_engine = engine is None
    if owns_engine:
        engine = StorefrontEngine(catalog=CatalogCache(), settings=settings)
        app.state.engine = engine

    if app.state.catalog_source is None:
        app.state.catalog_source = build_catalog_source(settings)
    try:
        await asyncio.to_thread(engine.refresh_catalog, app.state.catalog_source)
    except CatalogUnavailableError as exc:
        logger.warning("Starting with an empty catalogue", error=str(exc))

    driver = asyncio.create_task(engine.run_scheduler())
    try:
        yield
    finally:
        engine.close()
        driver.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await driver
        close_source = getattr(app.state.catalog_source, "close", None)
        if close_source is not None:
            close_source()
        if owns_engine:
            app.state.engine = None


def create_app(settings=None, engine=None, catalog_source=None) -> FastAPI:
    settings = settings or (engine.settings if engine is not None else Settings.load(ordering.config))

    app = FastAPI(
        title="TurboDrink Storefront API",
        description="Beverage delivery storefront: catalogue, cart and order tracking",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.catalog_source = catalog_source

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(catalogue_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(profile_router)

    @app.get("/health")
    async def health():
        engine = app.state.engine
        return JSONResponse(
            content={
                "status": "ok" if engine is not None and not engine.closed else "stopped",
                "environment": settings.env,
                "catalogue": {"products": len(engine.catalog) if engine is not None else 0},
            }
        )

    return app


configure_logging(log_dir=None if current_env() == "test" else "logs")

ordering.init()

app = create_app()
