"""
In-memory implementations of the FileService collaborators for testing.
"""

import uuid

from files_manager.models.file_record import FileRecord


class FakeTokenGate:
    def __init__(self, tokens: dict[str, str] = None):
        self.tokens = tokens or {}

    async def resolve_identity(self, token: str | None) -> str | None:
        return self.tokens.get(token) if token else None


class FakeCatalog:
    """Keeps records in insertion order, like the real catalog. Set
    ``insert_error`` to make insert fail."""

    def __init__(self):
        self.records: list[FileRecord] = []
        self.insert_error: Exception = None

    async def insert(self, record: FileRecord) -> uuid.UUID:
        if self.insert_error:
            raise self.insert_error
        record.id = uuid.uuid4()
        record.seq = len(self.records) + 1
        self.records.append(record)
        return record.id

    async def find_by_id(self, file_id: uuid.UUID) -> FileRecord | None:
        return next((r for r in self.records if r.id == file_id), None)

    async def find(self, parent_id: uuid.UUID | None, skip: int, limit: int) -> list[FileRecord]:
        matching = [r for r in self.records if parent_id is None or r.parent_id == parent_id]
        return matching[skip:skip + limit]

    async def update_visibility(self, file_id: uuid.UUID, is_public: bool) -> FileRecord | None:
        record = await self.find_by_id(file_id)
        if record is not None:
            record.is_public = is_public
        return record

    async def count(self) -> int:
        return len(self.records)


class FakeContentStore:
    def __init__(self):
        self.blobs: dict[str, bytes] = {}

    def new_path(self) -> str:
        return f"/fake-storage/{uuid.uuid4()}"

    def variant_path(self, storage_path: str, size: int) -> str:
        return f"{storage_path}_{size}"

    async def write(self, storage_path: str, file_bytes: bytes) -> None:
        self.blobs[storage_path] = file_bytes

    async def exists(self, storage_path: str) -> bool:
        return storage_path in self.blobs

    async def read(self, storage_path: str) -> bytes:
        return self.blobs[storage_path]

    async def delete(self, storage_path: str) -> None:
        self.blobs.pop(storage_path, None)


class FakeJobQueue:
    """Records enqueued jobs. Set ``error`` to make enqueue fail."""

    def __init__(self, error: Exception = None):
        self.error = error
        self.jobs: list[tuple[str, dict, str]] = []

    async def enqueue(self, job_type: str, params: dict, user_id: str) -> uuid.UUID:
        if self.error:
            raise self.error
        self.jobs.append((job_type, params, user_id))
        return uuid.uuid4()
