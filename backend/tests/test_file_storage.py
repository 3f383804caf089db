"""
Tests for the local content store.
"""

from pathlib import Path

import pytest

from files_manager.services.file_storage import FileStorageService


class TestFileStorageService:
    def test_new_paths_are_unique_and_under_root(self, storage_root):
        storage = FileStorageService(storage_root)
        first, second = storage.new_path(), storage.new_path()

        assert first != second
        assert Path(first).parent == storage_root
        assert Path(first).suffix == ""

    def test_variant_path(self):
        assert FileStorageService.variant_path("/data/abc", 250) == "/data/abc_250"

    @pytest.mark.asyncio
    async def test_write_creates_root(self, storage_root):
        storage = FileStorageService(storage_root)
        assert not storage_root.exists()

        path = storage.new_path()
        await storage.write(path, b"\x00\x01binary\xff")

        assert storage_root.is_dir()
        assert Path(path).read_bytes() == b"\x00\x01binary\xff"

    @pytest.mark.asyncio
    async def test_read_and_exists(self, storage_root):
        storage = FileStorageService(storage_root)
        path = storage.new_path()

        assert await storage.exists(path) is False
        await storage.write(path, b"hello")
        assert await storage.exists(path) is True
        assert await storage.read(path) == b"hello"

    @pytest.mark.asyncio
    async def test_delete(self, storage_root):
        storage = FileStorageService(storage_root)
        path = storage.new_path()
        await storage.write(path, b"hello")

        await storage.delete(path)
        assert await storage.exists(path) is False
        await storage.delete(path)

    @pytest.mark.asyncio
    async def test_directory_is_not_a_blob(self, storage_root):
        storage = FileStorageService(storage_root)
        assert await storage.is_available() is True
        assert await storage.exists(str(storage_root)) is False
