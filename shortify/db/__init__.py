"""Database module for the URL shortener service."""
from shortify.db.base import (
    DatabaseHealthCheck,
    build_session_factory,
    create_tables,
    get_engine,
)
from shortify.db.session import get_db, get_session_factory

__all__ = [
    "get_engine",
    "build_session_factory",
    "create_tables",
    "DatabaseHealthCheck",
    "get_db",
    "get_session_factory",
]
