"""
Database package exposing entity base classes, connection options and
engine/session management.
"""

from .base import AuditEntity, AuditMixin, Base, BaseEntity, IdMixin, SoftDeleteMixin, TimestampMixin
from .config import DbOptions, DbType, get_db_options
from .session import (
    create_all,
    dispose_database,
    get_async_session,
    get_engine,
    get_session_maker,
    init_database,
)

__all__ = [
    "AuditEntity",
    "AuditMixin",
    "Base",
    "BaseEntity",
    "IdMixin",
    "SoftDeleteMixin",
    "TimestampMixin",
    "DbOptions",
    "DbType",
    "get_db_options",
    "create_all",
    "dispose_database",
    "get_async_session",
    "get_engine",
    "get_session_maker",
    "init_database",
]
