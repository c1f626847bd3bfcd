"""FastAPI dependencies."""

from fastapi import HTTPException, Request


def get_engine(request: Request):
    """Return the storefront engine owned by the running application."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None or engine.closed:
        raise HTTPException(status_code=503, detail="Storefront engine is not running")
    return engine
