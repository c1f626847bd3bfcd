"""Map storefront exceptions onto HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from shared.exceptions import CatalogUnavailableError, EngineClosedError, OrderNotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)


async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"errors": exc.messages})


async def _order_not_found(request: Request, exc: OrderNotFoundError):
    return JSONResponse(status_code=404, content={"errors": {"order_id": [f"Order {exc.order_id} not found"]}})


async def _catalog_unavailable(request: Request, exc: CatalogUnavailableError):
    logger.warning("Catalogue unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"errors": {"catalogue": [str(exc)]}})


async def _engine_closed(request: Request, exc: EngineClosedError):
    return JSONResponse(status_code=503, content={"errors": {"engine": [str(exc)]}})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(OrderNotFoundError, _order_not_found)
    app.add_exception_handler(CatalogUnavailableError, _catalog_unavailable)
    app.add_exception_handler(EngineClosedError, _engine_closed)
