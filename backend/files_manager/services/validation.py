"""Parsing helpers shared by the upload and retrieval pipelines."""
import base64
import binascii
import uuid
from typing import Union

from files_manager.exceptions import InvalidDataError, ParentNotFoundError

_ROOT_VALUES = (None, 0, "0", "")


def parse_id(value: Union[str, uuid.UUID, None]) -> uuid.UUID | None:
    """Parse a record or job id. Returns None when the value is not a valid id."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def is_root(parent_id: Union[int, str, uuid.UUID, None]) -> bool:
    return parent_id in _ROOT_VALUES


def parse_parent_id(parent_id: Union[int, str, uuid.UUID, None]) -> uuid.UUID | None:
    """Parse an upload parentId. Root becomes None.

    A value that cannot be an id cannot name an existing folder, so it fails
    the same way as a missing parent.
    """
    if is_root(parent_id):
        return None
    parsed = parse_id(parent_id)
    if parsed is None:
        raise ParentNotFoundError()
    return parsed


def decode_data(data: str) -> bytes:
    """Decode the base64 transport encoding of an upload.

    Characters outside the base64 alphabet (line breaks in wrapped payloads)
    are skipped; bad padding is an error.
    """
    try:
        return base64.b64decode(data)
    except (binascii.Error, ValueError):
        raise InvalidDataError()


def parse_count(value: Union[int, str, None]) -> int:
    """Parse a ``page`` or ``size`` query value. Anything that is not a
    non-negative integer counts as 0."""
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return 0
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return max(value, 0)
    return 0
