"""Job dispatcher - enqueues post-processing work on the jobs table."""
import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from files_manager.models.job import Job

logger = logging.getLogger(__name__)


class JobDispatcher:
    """Inserts ``queued`` jobs for a worker to pick up.

    Enqueueing only guarantees the job row is committed, not that any worker
    processes it.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def enqueue(self, job_type: str, params: dict, user_id: str) -> uuid.UUID:
        async with self._session_factory() as db:
            job = Job(job_type=job_type, params=params, user_id=user_id, status="queued")
            db.add(job)
            await db.commit()
            await db.refresh(job)
        logger.info(f"Enqueued job {job.id} (type={job_type})")
        return job.id

    async def get(self, job_id: uuid.UUID) -> Job | None:
        async with self._session_factory() as db:
            return await db.get(Job, job_id)

    async def count(self) -> int:
        async with self._session_factory() as db:
            result = await db.execute(select(func.count()).select_from(Job))
            return result.scalar_one()
