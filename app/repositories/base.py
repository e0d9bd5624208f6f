"""Generic repository over a single SQLAlchemy Core table."""

from collections.abc import Sequence
from typing import Any, ClassVar

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession


class Repository:
    """
    CRUD surface shared by every entity repository.

    Writes run inside the session's open transaction and only become durable
    once ``save_changes`` commits, so a request can stage several writes and
    persist them together. Storage errors are never caught here.
    """

    table: ClassVar[Table]

    def __init__(self, db: AsyncSession):
        """Initialize repository with the request's database session."""
        self.db = db

    @property
    def _columns(self) -> list[str]:
        return [column.name for column in self.table.columns if not column.primary_key]

    async def get_by_id(self, entity_id: int) -> dict | None:
        """Get a row by primary key, or None when it does not exist."""
        query = select(self.table).where(self.table.c.id == entity_id)
        result = await self.db.execute(query)
        row = result.mappings().first()

        return dict(row) if row else None

    async def get_many(self, entity_ids: Sequence[int]) -> list[dict]:
        """Get the rows matching the given ids; unknown ids are left out."""
        if not entity_ids:
            return []

        query = select(self.table).where(self.table.c.id.in_(set(entity_ids)))
        result = await self.db.execute(query)

        return [dict(row) for row in result.mappings().all()]

    async def get_all(self) -> list[dict]:
        """Get every row, unfiltered and unpaginated."""
        query = select(self.table).order_by(self.table.c.id)
        result = await self.db.execute(query)

        return [dict(row) for row in result.mappings().all()]

    async def add(self, values: dict[str, Any]) -> dict:
        """Stage an insert and return the new row with its generated id."""
        query = insert(self.table).values(**values).returning(self.table)
        result = await self.db.execute(query)
        row = result.mappings().first()

        if not row:
            raise ValueError(f"Failed to insert into {self.table.name}")

        return dict(row)

    async def update(self, entity: dict[str, Any]) -> dict | None:
        """
        Stage a full replace of a row.

        Every non-key column present in ``entity`` is overwritten; there is no
        version check, so the last writer wins.

        Args:
            entity: Row values including ``id``

        Returns:
            The updated row, or None when no row has that id
        """
        values = {name: entity[name] for name in self._columns if name in entity}

        query = (
            update(self.table)
            .where(self.table.c.id == entity["id"])
            .values(**values)
            .returning(self.table)
        )
        result = await self.db.execute(query)
        row = result.mappings().first()

        return dict(row) if row else None

    async def delete(self, entity_id: int) -> None:
        """Stage a delete; a missing id is silently ignored."""
        await self.db.execute(delete(self.table).where(self.table.c.id == entity_id))

    async def save_changes(self) -> None:
        """Commit all staged writes for this unit of work."""
        await self.db.commit()

    async def discard_changes(self) -> None:
        """Roll back all staged writes for this unit of work."""
        await self.db.rollback()
