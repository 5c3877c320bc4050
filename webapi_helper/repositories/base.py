from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Executable, delete, func, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from webapi_helper.core.exceptions import NotFoundException
from webapi_helper.db.base import Base
from webapi_helper.extensions.datetimes import now_timestamp
from webapi_helper.schemas.result import PagedResult

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Generic CRUD and paging repository over an AsyncSession.

    Either subclass with a model attribute:

        class UserRepository(BaseRepository[User]):
            model = User

    or pass the model directly: BaseRepository(session, User).

    Entities with a deleted_at column are soft-delete aware: queries skip
    deleted rows unless include_deleted=True. Write methods commit when
    auto_commit is set, otherwise they only flush and leave the transaction
    to the caller.
    """

    model: Type[T]

    def __init__(
        self,
        session: AsyncSession,
        model: Optional[Type[T]] = None,
        *,
        operator: Optional[str] = None,
        auto_commit: bool = True,
    ) -> None:
        if model is not None:
            self.model = model
        if getattr(self, "model", None) is None:
            raise TypeError(f"{type(self).__name__} requires a model class")
        self.session = session
        self.operator = operator
        self.auto_commit = auto_commit

    # Low-level helpers

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return a single scalar or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()

    async def commit(self) -> None:
        """Commit current transaction."""
        await self.session.commit()

    async def add(self, entity: T) -> None:
        """Add a single entity to session."""
        self.session.add(entity)

    async def add_all(self, entities: Iterable[T]) -> None:
        """Add multiple entities to session."""
        self.session.add_all(list(entities))

    # Internals

    @property
    def _pk(self):
        return inspect(self.model).primary_key[0]

    @property
    def soft_delete_enabled(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _conditions(self, where: Sequence[Any], include_deleted: bool) -> List[Any]:
        conditions = list(where)
        if self.soft_delete_enabled and not include_deleted:
            conditions.append(self.model.deleted_at.is_(None))
        return conditions

    def _default_order(self) -> List[Any]:
        if hasattr(self.model, "created_at"):
            return [self.model.created_at.desc(), self._pk]
        return [self._pk]

    async def _save(self, entities: Sequence[T]) -> None:
        if self.auto_commit:
            await self.session.commit()
            for entity in entities:
                await self.session.refresh(entity)
        else:
            await self.session.flush()

    def _stamp_insert(self, entity: T) -> None:
        if getattr(entity, "created_at", 0) is None:
            entity.created_at = now_timestamp()
        if self.operator and hasattr(entity, "created_by") and entity.created_by is None:
            entity.created_by = self.operator

    def _stamp_update(self, entity: T) -> None:
        touch = getattr(entity, "touch", None)
        if touch is not None:
            touch(self.operator)
        elif hasattr(entity, "updated_at"):
            entity.updated_at = now_timestamp()

    def _stamp_values(self, values: dict[str, Any]) -> dict[str, Any]:
        values = dict(values)
        if hasattr(self.model, "updated_at"):
            values.setdefault("updated_at", now_timestamp())
        if self.operator and hasattr(self.model, "updated_by"):
            values.setdefault("updated_by", self.operator)
        return values

    # Queries

    # PUBLIC_INTERFACE
    async def get_by_id(self, entity_id: Any, *, include_deleted: bool = False) -> Optional[T]:
        """Return the entity with the given primary key, or None."""
        stmt = select(self.model).where(*self._conditions([self._pk == entity_id], include_deleted))
        return await self.scalar_one_or_none(stmt)

    # PUBLIC_INTERFACE
    async def get_first(self, *where: Any, order_by: Any = None, include_deleted: bool = False) -> Optional[T]:
        """Return the first entity matching the conditions, or None."""
        stmt = select(self.model).where(*self._conditions(where, include_deleted))
        stmt = stmt.order_by(*self._as_list(order_by)).limit(1)
        result = await self.scalars(stmt)
        return result.first()

    # PUBLIC_INTERFACE
    async def get_list(
        self,
        *where: Any,
        order_by: Any = None,
        limit: Optional[int] = None,
        include_deleted: bool = False,
    ) -> List[T]:
        """Return all entities matching the conditions."""
        stmt = select(self.model).where(*self._conditions(where, include_deleted))
        stmt = stmt.order_by(*self._as_list(order_by))
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.scalars(stmt)
        return list(result)

    # PUBLIC_INTERFACE
    async def count(self, *where: Any, include_deleted: bool = False) -> int:
        """Count entities matching the conditions."""
        stmt = select(func.count()).select_from(self.model).where(*self._conditions(where, include_deleted))
        result = await self.execute(stmt)
        return int(result.scalar_one())

    # PUBLIC_INTERFACE
    async def exists(self, *where: Any, include_deleted: bool = False) -> bool:
        """Return True when at least one entity matches the conditions."""
        stmt = select(self._pk).where(*self._conditions(where, include_deleted)).limit(1)
        return (await self.scalar_one_or_none(stmt)) is not None

    # PUBLIC_INTERFACE
    async def get_page(
        self,
        page_index: int,
        page_size: int,
        *where: Any,
        order_by: Any = None,
        include_deleted: bool = False,
    ) -> PagedResult:
        """
        Return one page of matching entities plus the total count.

        Parameters:
            page_index: 1-based page number; values below 1 are treated as 1
            page_size: number of records per page, must be positive
            order_by: column(s) to sort by; newest first when omitted
        """
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")
        page_index = max(page_index, 1)

        conditions = self._conditions(where, include_deleted)
        total = await self.count(*where, include_deleted=include_deleted)
        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(*(self._as_list(order_by) or self._default_order()))
            .offset((page_index - 1) * page_size)
            .limit(page_size)
        )
        items = list(await self.scalars(stmt))
        return PagedResult(items=items, total=total, page_index=page_index, page_size=page_size)

    @staticmethod
    def _as_list(order_by: Any) -> List[Any]:
        if order_by is None:
            return []
        if isinstance(order_by, (list, tuple)):
            return list(order_by)
        return [order_by]

    # Writes

    # PUBLIC_INTERFACE
    async def insert(self, entity: T) -> T:
        """Insert an entity, stamping created_at/created_by."""
        self._stamp_insert(entity)
        await self.add(entity)
        await self._save([entity])
        return entity

    # PUBLIC_INTERFACE
    async def insert_range(self, entities: Iterable[T]) -> List[T]:
        """Insert several entities in one transaction."""
        rows = list(entities)
        for entity in rows:
            self._stamp_insert(entity)
        await self.add_all(rows)
        await self._save(rows)
        return rows

    # PUBLIC_INTERFACE
    async def update(self, entity: T) -> T:
        """
        Persist changes to an existing entity, stamping updated_at/updated_by.

        Raises:
            NotFoundException: no row with the entity's primary key exists.
        """
        await self._require_existing(entity)
        self._stamp_update(entity)
        merged = await self.session.merge(entity)
        await self._save([merged])
        return merged

    # PUBLIC_INTERFACE
    async def update_range(self, entities: Iterable[T]) -> List[T]:
        """
        Persist changes to several existing entities in one transaction.

        Raises:
            NotFoundException: any entity has no matching row; nothing is written.
        """
        rows = list(entities)
        for entity in rows:
            await self._require_existing(entity)
        merged: List[T] = []
        for entity in rows:
            self._stamp_update(entity)
            merged.append(await self.session.merge(entity))
        await self._save(merged)
        return merged

    # PUBLIC_INTERFACE
    async def update_columns(self, entity_id: Any, *, include_deleted: bool = False, **values: Any) -> int:
        """
        Update selected columns of one row without loading it.

        Soft-deleted rows are left untouched unless include_deleted is set.

        Returns:
            Number of rows affected (0 when the id does not exist).
        """
        if not values:
            return 0
        stmt = (
            update(self.model)
            .where(*self._conditions([self._pk == entity_id], include_deleted))
            .values(**self._stamp_values(values))
            .execution_options(synchronize_session="fetch")
        )
        result = await self.execute(stmt)
        await self._finish()
        return int(result.rowcount or 0)

    # PUBLIC_INTERFACE
    async def delete(self, entity: T) -> None:
        """Physically delete an entity."""
        await self.session.delete(entity)
        await self._finish()

    # PUBLIC_INTERFACE
    async def delete_by_id(self, entity_id: Any) -> int:
        """Physically delete the row with the given primary key; returns rows affected."""
        stmt = delete(self.model).where(self._pk == entity_id)
        result = await self.execute(stmt)
        await self._finish()
        return int(result.rowcount or 0)

    # PUBLIC_INTERFACE
    async def soft_delete(self, entity: T) -> T:
        """Mark an entity as deleted by stamping deleted_at."""
        self._require_soft_delete()
        entity.deleted_at = now_timestamp()
        return await self.update(entity)

    # PUBLIC_INTERFACE
    async def soft_delete_by_id(self, entity_id: Any) -> int:
        """Stamp deleted_at on a live row; returns rows affected."""
        self._require_soft_delete()
        stmt = (
            update(self.model)
            .where(self._pk == entity_id, self.model.deleted_at.is_(None))
            .values(**self._stamp_values({"deleted_at": now_timestamp()}))
            .execution_options(synchronize_session="fetch")
        )
        result = await self.execute(stmt)
        await self._finish()
        return int(result.rowcount or 0)

    async def _require_existing(self, entity: T) -> None:
        # merge() would INSERT an unknown primary key
        entity_id = inspect(self.model).primary_key_from_instance(entity)[0]
        if entity_id is None or await self.session.get(self.model, entity_id) is None:
            raise NotFoundException(self.model.__name__, entity_id)

    def _require_soft_delete(self) -> None:
        if not self.soft_delete_enabled:
            raise TypeError(f"{self.model.__name__} does not support soft delete")

    async def _finish(self) -> None:
        if self.auto_commit:
            await self.session.commit()
        else:
            await self.session.flush()
