"""Metadata catalog - FileRecord persistence and query patterns."""
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from files_manager.models.file_record import FileRecord


class FileCatalog:
    """File/folder records stored through async SQLAlchemy.

    Each method runs in its own session, so every insert or update is atomic
    for the single record it touches.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, record: FileRecord) -> uuid.UUID:
        """Persist a new record. The catalog assigns ``id`` and ``seq``."""
        async with self._session_factory() as db:
            db.add(record)
            await db.commit()
            await db.refresh(record)
        return record.id

    async def find_by_id(self, file_id: uuid.UUID) -> FileRecord | None:
        async with self._session_factory() as db:
            result = await db.execute(
                select(FileRecord).where(FileRecord.id == file_id)
            )
            return result.scalar_one_or_none()

    async def find(
        self,
        parent_id: uuid.UUID | None,
        skip: int,
        limit: int,
    ) -> list[FileRecord]:
        """Records in insertion order. ``parent_id=None`` matches every record."""
        query = select(FileRecord).order_by(FileRecord.seq).offset(skip).limit(limit)
        if parent_id is not None:
            query = query.where(FileRecord.parent_id == parent_id)
        async with self._session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def update_visibility(self, file_id: uuid.UUID, is_public: bool) -> FileRecord | None:
        """Set ``is_public`` with a single-row UPDATE. Returns the updated record."""
        async with self._session_factory() as db:
            result = await db.execute(
                update(FileRecord)
                .where(FileRecord.id == file_id)
                .values(is_public=is_public)
            )
            await db.commit()
        if result.rowcount == 0:
            return None
        return await self.find_by_id(file_id)

    async def count(self) -> int:
        async with self._session_factory() as db:
            result = await db.execute(select(func.count()).select_from(FileRecord))
            return result.scalar_one()
