"""Content store. Raw file bytes on the local filesystem."""
import logging
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)


class FileStorageService:
    """Handles blob read/write under ``base_path``.

    Blobs are named by a fresh UUID4 with no extension. Size variants written
    by the thumbnail worker sit next to them as ``<name>_<size>``.
    """

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)

    def new_path(self) -> str:
        """Generate the storage path for a new blob."""
        return str(self.base_path / str(uuid.uuid4()))

    @staticmethod
    def variant_path(storage_path: str, size: int) -> str:
        return f"{storage_path}_{size}"

    async def write(self, storage_path: str, file_bytes: bytes) -> None:
        """Write bytes to storage path, creating the storage root if needed."""
        await aiofiles.os.makedirs(Path(storage_path).parent, exist_ok=True)
        async with aiofiles.open(storage_path, "wb") as f:
            await f.write(file_bytes)
        logger.debug(f"Wrote {len(file_bytes)} bytes to {storage_path}")

    async def delete(self, storage_path: str) -> None:
        """Remove a blob. A blob that is already gone is not an error."""
        try:
            await aiofiles.os.remove(storage_path)
        except FileNotFoundError:
            return
        logger.debug(f"Deleted {storage_path}")

    async def exists(self, storage_path: str) -> bool:
        return await aiofiles.os.path.isfile(storage_path)

    async def read(self, storage_path: str) -> bytes:
        """Read file bytes from storage path."""
        async with aiofiles.open(storage_path, "rb") as f:
            return await f.read()

    async def is_available(self) -> bool:
        """Whether the storage root exists or can be created."""
        try:
            await aiofiles.os.makedirs(self.base_path, exist_ok=True)
        except OSError as e:
            logger.error(f"Storage root {self.base_path} unavailable: {e}")
            return False
        return True
