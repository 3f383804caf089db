"""Background job worker.

Polls the jobs table for 'queued' jobs and processes them. The files service
ships no handlers; the thumbnail worker registers its own with
``register_job_handler`` and runs ``worker_loop``:

    @register_job_handler("generate-thumbnails")
    async def make_thumbnails(job_id, params: dict) -> dict:
        ...

    await worker_loop(session_factory)

It can also run inside the API process when RUN_JOB_WORKER is set.
"""
import asyncio
import logging
import traceback
import uuid
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from files_manager.models.job import Job

logger = logging.getLogger(__name__)


def safe_error_message(e: Exception, fallback: str = "Job interrupted") -> str:
    """Extract a meaningful error message from an exception.

    Some exceptions produce an empty str(e). This helper falls back to the
    exception class name.
    """
    msg = str(e).strip()
    if not msg:
        msg = f"{type(e).__name__}: {fallback}"
    return msg


# Job handler registry - job_type -> async handler(job_id, params) -> dict
JOB_HANDLERS = {}


def register_job_handler(job_type: str):
    """Decorator to register a job handler function."""
    def decorator(func):
        JOB_HANDLERS[job_type] = func
        return func
    return decorator


async def process_job(job_id, job_type: str, params: dict) -> dict:
    """Dispatch job to the appropriate handler."""
    handler = JOB_HANDLERS.get(job_type)
    if not handler:
        raise ValueError(f"Unknown job type: {job_type}")
    return await handler(job_id, params)


async def claim_job(db: AsyncSession, job_id: uuid.UUID) -> bool:
    """Move a job from queued to running. False if another worker got it first."""
    result = await db.execute(
        update(Job)
        .where(Job.id == job_id, Job.status == "queued")
        .values(status="running", started_at=datetime.now(timezone.utc))
    )
    await db.commit()
    return result.rowcount == 1


async def process_next_job(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """Claim and run the oldest queued job. Returns False when the queue is empty."""
    async with session_factory() as db:
        result = await db.execute(
            select(Job.id)
            .where(Job.status == "queued")
            .order_by(Job.created_at)
            .limit(1)
        )
        job_id = result.scalar_one_or_none()
        if job_id is None:
            return False
        if not await claim_job(db, job_id):
            logger.info(f"Job {job_id} already claimed by another worker")
            return True

        job = await db.get(Job, job_id)
        logger.info(f"Processing job {job.id} (type={job.job_type})")

        try:
            result_data = await process_job(job.id, job.job_type, job.params)
        except Exception as e:
            logger.error(f"Job {job.id} failed: {e}")
            logger.error(traceback.format_exc())
            job.status = "failed"
            job.error_message = safe_error_message(e)[:2000]
        else:
            job.status = "completed"
            job.result = result_data or {}
            logger.info(f"Job {job.id} completed")
        job.completed_at = datetime.now(timezone.utc)
        await db.commit()
    return True


async def worker_loop(session_factory: async_sessionmaker[AsyncSession], poll_interval: float = 5.0):
    """Main worker loop. Drains the queue, then sleeps ``poll_interval`` seconds."""
    logger.info("Job worker started")
    while True:
        try:
            while await process_next_job(session_factory):
                pass
        except Exception as e:
            logger.error(f"Worker loop error: {e}")

        await asyncio.sleep(poll_interval)
