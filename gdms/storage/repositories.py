"""Generic repository over the declarative models."""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import Uuid, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gdms.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    CRUD access to one record type.

    Calls share the caller's session, so several repositories used inside one
    manager operation commit or roll back together. Reads use
    populate_existing so rows changed by bulk statements or database-side
    cascades are never served stale from the identity map.

    A filter value that is not a UUID can never match a UUID column; such
    lookups return no rows without reaching the database, whose driver
    would refuse to bind the value.
    """

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self.db = db
        self.model = model

    def _matchable(self, filters: dict[str, Any]) -> bool:
        for field, value in filters.items():
            if value is None or not isinstance(self.model.__table__.c[field].type, Uuid):
                continue
            try:
                uuid.UUID(str(value))
            except ValueError:
                return False
        return True

    def _where(self, stmt, filters: dict[str, Any]):
        for field, value in filters.items():
            column = getattr(self.model, field)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        return stmt

    async def find_by_id(self, record_id: Any, *, for_update: bool = False) -> ModelT | None:
        """Get a record by primary key, optionally locking the row."""
        if not self._matchable({"id": record_id}):
            return None
        stmt = select(self.model).where(self.model.id == record_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def find_by_field(self, field: str, value: Any, *, exclude_id: Any = None) -> ModelT | None:
        """Find the record holding a unique value, ignoring ``exclude_id``."""
        if not self._matchable({field: value}):
            return None
        stmt = select(self.model).where(getattr(self.model, field) == value)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self.db.execute(stmt.limit(1).execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def find_one(self, *, for_update: bool = False, **filters: Any) -> ModelT | None:
        if not self._matchable(filters):
            return None
        stmt = self._where(select(self.model), filters)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt.limit(1).execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def find_all_ordered(
        self, order_by: str = "created_at", *, descending: bool = True, **filters: Any
    ) -> list[ModelT]:
        """All records matching ``filters``, ordered by one column."""
        if not self._matchable(filters):
            return []
        column = getattr(self.model, order_by)
        stmt = self._where(select(self.model), filters).order_by(column.desc() if descending else column.asc())
        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def count(self, **filters: Any) -> int:
        if not self._matchable(filters):
            return 0
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def insert(self, record: ModelT) -> ModelT:
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def update(self, record: ModelT, values: dict[str, Any]) -> ModelT:
        """Overwrite the given attributes and flush."""
        for field, value in values.items():
            setattr(record, field, value)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def update_where(self, filters: dict[str, Any], values: dict[str, Any]) -> int:
        """Bulk update every matching row; returns the number of rows touched."""
        if not self._matchable(filters):
            return 0
        stmt = self._where(update(self.model), filters).values(**values)
        result = await self.db.execute(stmt.execution_options(synchronize_session="fetch"))
        return result.rowcount

    async def delete(self, record: ModelT) -> None:
        await self.db.delete(record)
        await self.db.flush()
