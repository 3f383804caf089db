"""Service status and stats routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy import text

from files_manager.dependencies import get_app_state
from files_manager.schemas.common import StatsResponse, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(state=Depends(get_app_state)):
    """Verify database connectivity and that the storage root is usable."""
    try:
        async with state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        db_ok = True
    except Exception as e:
        logger.error(f"Database check failed: {e}")
        db_ok = False
    return {"db": db_ok, "storage": await state.file_storage.is_available()}


@router.get("/stats", response_model=StatsResponse)
async def get_stats(state=Depends(get_app_state)):
    """Count file records and queued/processed jobs."""
    return {
        "files": await state.catalog.count(),
        "jobs": await state.job_dispatcher.count(),
    }
