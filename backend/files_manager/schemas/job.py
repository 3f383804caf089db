"""Job response schema."""
import uuid
from typing import Optional
from datetime import datetime
from files_manager.schemas.base import CamelORMModel


class JobResponse(CamelORMModel):
    id: uuid.UUID
    job_type: str
    status: str
    params: dict
    result: Optional[dict] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    user_id: str
