"""FileRecord model - file/folder metadata (actual bytes on local disk)."""
import uuid
from typing import Final
from sqlalchemy import String, Boolean, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from files_manager.models.base import Base, TimestampMixin, UserMixin

FOLDER: Final = "folder"
FILE: Final = "file"
IMAGE: Final = "image"
FILE_TYPES: Final = (FOLDER, FILE, IMAGE)


class FileRecord(Base, TimestampMixin, UserMixin):
    """A node of the file tree.

    ``parent_id`` is ``None`` for records at the root, otherwise the id of a
    folder record. ``local_path`` is only set for files and images.
    """
    __tablename__ = "files"

    # Insertion order; listings page over this column
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, index=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    local_path: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER
