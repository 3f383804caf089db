"""Exceptions raised by the files pipelines.

Every error carries the HTTP status and the short message sent to the client
as ``{"error": message}``.
"""
from dataclasses import dataclass


class FilesManagerError(Exception):
    """Base class for errors returned to the client."""

    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnauthorizedError(FilesManagerError):
    """Raised when the request token does not resolve to a user."""

    status_code = 401
    message = "Unauthorized"


class NotFoundError(FilesManagerError):
    """Raised for absent records, malformed ids and hidden records alike."""

    status_code = 404
    message = "Not found"


class BadRequestError(FilesManagerError):
    """Raised for operations that make no sense for the record."""

    status_code = 400


class FileValidationError(FilesManagerError):
    """Raised when an upload request is invalid."""

    status_code = 400


class MissingFieldError(FileValidationError):
    """Raised when a required upload field is missing or invalid."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing {field}")


class InvalidDataError(FileValidationError):
    message = "Invalid data"


class ParentNotFoundError(FileValidationError):
    message = "Parent not found"


class ParentNotFolderError(FileValidationError):
    message = "Parent is not a folder"


@dataclass(frozen=True)
class DispatchWarning:
    """A post-processing job could not be enqueued. Never fails the upload."""

    job_type: str
    reason: str
