"""Jobs API - check the status of post-processing jobs."""
from typing import Optional
from fastapi import APIRouter, Depends, Header

from files_manager.dependencies import get_app_state
from files_manager.exceptions import NotFoundError, UnauthorizedError
from files_manager.schemas.job import JobResponse
from files_manager.services.validation import parse_id

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    x_token: Optional[str] = Header(None),
    state=Depends(get_app_state),
):
    """Get job status. Only the user who triggered the job can see it."""
    user_id = await state.auth_gate.resolve_identity(x_token)
    if not user_id:
        raise UnauthorizedError()
    parsed = parse_id(job_id)
    job = await state.job_dispatcher.get(parsed) if parsed else None
    if not job or job.user_id != user_id:
        raise NotFoundError()
    return job
