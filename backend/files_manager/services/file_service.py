"""Upload, lookup, listing, publish and content pipelines for file records.

Every pipeline starts from the raw request token. Identity, catalog, content
store and job queue are injected so the pipelines never touch globals.

Visibility policy:
    - metadata (show, index) is readable by any authenticated user
    - publish/unpublish requires ownership
    - content requires ``is_public`` or ownership
Ownership and visibility failures raise NotFoundError, same as absence.
"""
import logging
import mimetypes
import uuid
from dataclasses import dataclass, field
from typing import Union

from files_manager.exceptions import (
    BadRequestError,
    DispatchWarning,
    MissingFieldError,
    NotFoundError,
    ParentNotFolderError,
    ParentNotFoundError,
    UnauthorizedError,
)
from files_manager.models.file_record import FILE_TYPES, FOLDER, IMAGE, FileRecord
from files_manager.schemas.file import FileCreate
from files_manager.services.protocols import Catalog, ContentStore, JobQueue, TokenAuthGate
from files_manager.services.validation import decode_data, is_root, parse_count, parse_id, parse_parent_id

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_PAGE_SIZE = 20
THUMBNAIL_JOB_TYPE = "generate-thumbnails"


def guess_mime_type(name: str) -> str:
    """MIME type from the file name extension."""
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or DEFAULT_MIME_TYPE


@dataclass
class UploadResult:
    record: FileRecord
    job_id: uuid.UUID | None = None
    warnings: list[DispatchWarning] = field(default_factory=list)


@dataclass
class FileContent:
    data: bytes
    mime_type: str


class FileService:
    """Storage-and-access core for file records."""

    def __init__(
        self,
        auth_gate: TokenAuthGate,
        catalog: Catalog,
        storage: ContentStore,
        job_queue: JobQueue,
        page_size: int = DEFAULT_PAGE_SIZE,
        thumbnail_job_type: str = THUMBNAIL_JOB_TYPE,
    ):
        self.auth_gate = auth_gate
        self.catalog = catalog
        self.storage = storage
        self.job_queue = job_queue
        self.page_size = page_size
        self.thumbnail_job_type = thumbnail_job_type

    # ── Upload ───────────────────────────────────────────────────

    async def upload(self, token: str | None, body: FileCreate) -> UploadResult:
        """Validate, write the blob, insert the record, then queue thumbnails.

        Checks run in a fixed order and stop at the first failure: identity,
        name, type, data, parent.
        """
        user_id = await self._require_user(token)
        if not body.name or not isinstance(body.name, str):
            raise MissingFieldError("name")
        if not isinstance(body.type, str) or body.type not in FILE_TYPES:
            raise MissingFieldError("type")
        if body.type != FOLDER and (not body.data or not isinstance(body.data, str)):
            raise MissingFieldError("data")
        parent_id = await self._resolve_parent(body.parent_id)

        record = FileRecord(
            user_id=user_id,
            name=body.name,
            type=body.type,
            is_public=body.is_public is True,
            parent_id=parent_id,
        )
        if body.type != FOLDER:
            file_bytes = decode_data(body.data)
            record.local_path = self.storage.new_path()
            await self.storage.write(record.local_path, file_bytes)

        try:
            await self.catalog.insert(record)
        except Exception:
            if record.local_path:
                await self.storage.delete(record.local_path)
            raise
        logger.info(f"User {user_id} created {record.type} {record.id} ({record.name!r})")

        result = UploadResult(record=record)
        if record.type == IMAGE:
            await self._dispatch_thumbnails(result)
        return result

    async def _resolve_parent(self, raw_parent_id: Union[int, str, None]) -> uuid.UUID | None:
        parent_id = parse_parent_id(raw_parent_id)
        if parent_id is None:
            return None
        parent = await self.catalog.find_by_id(parent_id)
        if parent is None:
            raise ParentNotFoundError()
        if parent.type != FOLDER:
            raise ParentNotFolderError()
        return parent_id

    async def _dispatch_thumbnails(self, result: UploadResult) -> None:
        """Best-effort enqueue. A failure is recorded on the result, never raised."""
        record = result.record
        params = {
            "user_id": record.user_id,
            "file_id": str(record.id),
            "local_path": record.local_path,
        }
        try:
            result.job_id = await self.job_queue.enqueue(self.thumbnail_job_type, params, record.user_id)
        except Exception as e:
            warning = DispatchWarning(job_type=self.thumbnail_job_type, reason=str(e) or type(e).__name__)
            logger.warning(f"Could not enqueue {warning.job_type} for file {record.id}: {warning.reason}")
            result.warnings.append(warning)

    # ── Metadata ─────────────────────────────────────────────────

    async def show(self, token: str | None, file_id: str) -> FileRecord:
        await self._require_user(token)
        return await self._get_record(file_id)

    async def index(
        self,
        token: str | None,
        parent_id: Union[int, str, None] = None,
        page: Union[int, str, None] = 0,
    ) -> list[FileRecord]:
        """One page of records under ``parent_id`` in insertion order.

        Root matches every record. A parent id that does not parse matches
        nothing.
        """
        await self._require_user(token)
        if is_root(parent_id):
            parent = None
        else:
            parent = parse_id(parent_id)
            if parent is None:
                return []
        page = parse_count(page)
        return await self.catalog.find(parent, skip=page * self.page_size, limit=self.page_size)

    async def publish(self, token: str | None, file_id: str) -> FileRecord:
        return await self._set_visibility(token, file_id, True)

    async def unpublish(self, token: str | None, file_id: str) -> FileRecord:
        return await self._set_visibility(token, file_id, False)

    async def _set_visibility(self, token: str | None, file_id: str, is_public: bool) -> FileRecord:
        user_id = await self._require_user(token)
        record = await self._get_record(file_id)
        if record.user_id != user_id:
            raise NotFoundError()
        updated = await self.catalog.update_visibility(record.id, is_public)
        if updated is None:
            raise NotFoundError()
        logger.info(f"User {user_id} set is_public={is_public} on {record.id}")
        return updated

    # ── Content ──────────────────────────────────────────────────

    async def read_content(
        self,
        token: str | None,
        file_id: str,
        size: Union[int, str, None] = 0,
    ) -> FileContent:
        """Bytes of a file or image, or of its ``size`` variant when one exists.

        The token is optional: public content is served anonymously, and a
        token that does not resolve counts as anonymous.
        """
        record = await self._get_record(file_id)
        if not record.is_public:
            user_id = await self.auth_gate.resolve_identity(token)
            if user_id is None or user_id != record.user_id:
                raise NotFoundError()
        if record.is_folder:
            raise BadRequestError("A folder doesn't have content")

        path = await self._content_path(record.local_path, parse_count(size))
        if not await self.storage.exists(path):
            raise NotFoundError()
        data = await self.storage.read(path)
        return FileContent(data=data, mime_type=guess_mime_type(record.name))

    async def _content_path(self, local_path: str, size: int) -> str:
        if size:
            variant = self.storage.variant_path(local_path, size)
            if await self.storage.exists(variant):
                return variant
        return local_path

    # ── Helpers ──────────────────────────────────────────────────

    async def _require_user(self, token: str | None) -> str:
        user_id = await self.auth_gate.resolve_identity(token)
        if not user_id:
            raise UnauthorizedError()
        return user_id

    async def _get_record(self, file_id: str) -> FileRecord:
        parsed = parse_id(file_id)
        if parsed is None:
            raise NotFoundError()
        record = await self.catalog.find_by_id(parsed)
        if record is None:
            raise NotFoundError()
        return record
