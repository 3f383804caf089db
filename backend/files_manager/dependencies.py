"""FastAPI dependencies returning the service handles built by create_app."""
from fastapi import Request

from files_manager.services.file_service import FileService


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def get_app_state(request: Request):
    return request.app.state
