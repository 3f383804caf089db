"""Files API routes."""
from typing import Optional
from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import Response

from files_manager.dependencies import get_file_service
from files_manager.schemas.file import FileCreate, FileProjection
from files_manager.services.file_service import FileService

router = APIRouter(prefix="/files", tags=["files"])


@router.post("", response_model=FileProjection, status_code=201)
async def upload_file(
    body: FileCreate,
    x_token: Optional[str] = Header(None),
    service: FileService = Depends(get_file_service),
):
    """Create a folder, or store a base64-encoded file/image."""
    result = await service.upload(x_token, body)
    return result.record


@router.get("", response_model=list[FileProjection])
async def list_files(
    parent_id: Optional[str] = Query(None, alias="parentId"),
    page: Optional[str] = Query(None),
    x_token: Optional[str] = Header(None),
    service: FileService = Depends(get_file_service),
):
    """List one page of records under a parent folder (root lists everything)."""
    return await service.index(x_token, parent_id, page)


@router.get("/{file_id}", response_model=FileProjection)
async def get_file(
    file_id: str,
    x_token: Optional[str] = Header(None),
    service: FileService = Depends(get_file_service),
):
    """Get record metadata by ID."""
    return await service.show(x_token, file_id)


@router.put("/{file_id}/publish", response_model=FileProjection)
async def publish_file(
    file_id: str,
    x_token: Optional[str] = Header(None),
    service: FileService = Depends(get_file_service),
):
    return await service.publish(x_token, file_id)


@router.put("/{file_id}/unpublish", response_model=FileProjection)
async def unpublish_file(
    file_id: str,
    x_token: Optional[str] = Header(None),
    service: FileService = Depends(get_file_service),
):
    return await service.unpublish(x_token, file_id)


@router.get("/{file_id}/data")
async def get_file_data(
    file_id: str,
    size: Optional[str] = Query(None),
    x_token: Optional[str] = Header(None),
    service: FileService = Depends(get_file_service),
):
    """Raw content of a file, or of its resized variant when ``size`` is given."""
    content = await service.read_content(x_token, file_id, size)
    return Response(content=content.data, media_type=content.mime_type)
