"""
Configuration package.
"""

from .database import (
    create_engine,
    get_async_session_factory,
    get_db_session,
    get_session_factory,
    set_session_factory,
)
from .logging import bind_request_context, configure_logging, get_logger
from .settings import settings

__all__ = [
    "settings",
    # Database
    "create_engine",
    "get_async_session_factory",
    "get_session_factory",
    "set_session_factory",
    "get_db_session",
    # Logging
    "bind_request_context",
    "configure_logging",
    "get_logger",
]
