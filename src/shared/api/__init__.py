"""HTTP plumbing shared by the catalogue and ordering routers."""

from shared.api.dependencies import get_engine
from shared.api.errors import register_exception_handlers

__all__ = ["get_engine", "register_exception_handlers"]
