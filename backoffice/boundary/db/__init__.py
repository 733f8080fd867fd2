"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management

Dependencies: sqlalchemy, backoffice.configs
System role: Database adapter for all back-office entities
"""

from backoffice.boundary.db.base import Base, TimestampMixin, UUIDMixin
from backoffice.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from backoffice.boundary.db import models  # noqa: F401

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
