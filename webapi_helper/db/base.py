from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import BigInteger, MetaData, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from webapi_helper.extensions.datetimes import now_timestamp


# Standardized naming convention for migration-friendly constraints/indexes.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base class with metadata naming conventions."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class IdMixin:
    """Mixin that provides a UUID primary key generated on the client."""
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """Mixin that provides created_at/updated_at columns as Unix epoch seconds."""
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_timestamp)
    updated_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)


class SoftDeleteMixin:
    """Mixin for soft deletion; a non-null deleted_at marks the row as deleted."""
    deleted_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class AuditMixin:
    """Mixin that records who created and last updated the row."""
    created_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)


class BaseEntity(IdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    Abstract base for audit-stamped records.

    Subclasses declare __tablename__ and their own columns; id, created_at,
    updated_at and deleted_at are inherited.
    """
    __abstract__ = True

    def touch(self, operator: Optional[str] = None) -> None:
        """Stamp updated_at with the current time."""
        self.updated_at = now_timestamp()


class AuditEntity(AuditMixin, BaseEntity):
    """Abstract base that additionally tracks created_by/updated_by."""
    __abstract__ = True

    def touch(self, operator: Optional[str] = None) -> None:
        super().touch(operator)
        if operator is not None:
            self.updated_by = operator
