"""structlog setup for the storefront.

Development gets coloured console output at DEBUG; production and staging
get JSON lines at INFO. Tests only see warnings. ``LOG_LEVEL`` overrides the
level for any environment.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

from shared.config import current_env

_LEVELS = {
    "development": "DEBUG",
    "test": "WARNING",
    "staging": "INFO",
    "production": "INFO",
}

_JSON_ENVIRONMENTS = ("production", "staging")

# Chatty third-party loggers
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")

_MAX_LOG_BYTES = 10 * 1024 * 1024


def get_log_level(env=None) -> str:
    env = env or current_env()
    return os.getenv("LOG_LEVEL", _LEVELS.get(env, "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def _configure_stdlib(level: str, log_dir, log_file_prefix: str) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_handler(directory / f"{log_file_prefix}.log", level))
        handlers.append(_rotating_handler(directory / f"{log_file_prefix}_error.log", logging.ERROR))

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(env: str):
    if env in _JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_dir="logs", log_file_prefix="storefront", env=None) -> None:
    """Route structlog through the standard library.

    Pass ``log_dir=None`` to log to the console only. Values bound with
    ``structlog.contextvars`` (the engine binds ``order_id``) are merged into
    every event logged while they are bound.
    """
    env = env or current_env()
    _configure_stdlib(get_log_level(env), log_dir, log_file_prefix)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(env),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
