"""
Protocols for the collaborators of the files pipelines.

FileService only depends on these interfaces, so the SQLAlchemy, filesystem
and queue implementations can be swapped for in-memory doubles in tests.
"""

import uuid
from typing import Protocol, runtime_checkable

from files_manager.models.file_record import FileRecord


@runtime_checkable
class TokenAuthGate(Protocol):
    """Maps an opaque session token to a user id."""

    async def resolve_identity(self, token: str | None) -> str | None:
        """Return the user id, or None when the token is missing or unknown."""
        ...


@runtime_checkable
class Catalog(Protocol):
    """Metadata store for file records."""

    async def insert(self, record: FileRecord) -> uuid.UUID:
        ...

    async def find_by_id(self, file_id: uuid.UUID) -> FileRecord | None:
        ...

    async def find(
        self, parent_id: uuid.UUID | None, skip: int, limit: int
    ) -> list[FileRecord]:
        """
        List records in insertion order.

        Args:
            parent_id: Parent folder to filter on. None matches every record.
            skip: Number of records to skip.
            limit: Maximum number of records returned.
        """
        ...

    async def update_visibility(self, file_id: uuid.UUID, is_public: bool) -> FileRecord | None:
        ...

    async def count(self) -> int:
        ...


@runtime_checkable
class ContentStore(Protocol):
    """Blob storage addressed by opaque paths."""

    def new_path(self) -> str:
        ...

    def variant_path(self, storage_path: str, size: int) -> str:
        ...

    async def write(self, storage_path: str, file_bytes: bytes) -> None:
        ...

    async def exists(self, storage_path: str) -> bool:
        ...

    async def read(self, storage_path: str) -> bytes:
        ...

    async def delete(self, storage_path: str) -> None:
        ...


@runtime_checkable
class JobQueue(Protocol):
    """Post-processing queue. ``enqueue`` raises if the job cannot be queued."""

    async def enqueue(self, job_type: str, params: dict, user_id: str) -> uuid.UUID:
        ...
