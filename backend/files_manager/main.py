"""FastAPI application entry point."""
import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from files_manager.config import Settings
from files_manager.database import build_engine, build_session_factory, create_tables
from files_manager.exceptions import FilesManagerError
from files_manager.services.auth_gate import DatabaseTokenGate
from files_manager.services.catalog import FileCatalog
from files_manager.services.file_service import FileService
from files_manager.services.file_storage import FileStorageService
from files_manager.services.job_dispatcher import JobDispatcher

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, optionally start the background job worker."""
    await create_tables(app.state.engine)

    worker_task = None
    if app.state.settings.RUN_JOB_WORKER:
        from files_manager.services.job_worker import worker_loop
        worker_task = asyncio.create_task(
            worker_loop(app.state.session_factory, app.state.settings.JOB_POLL_INTERVAL)
        )

    yield

    # Cleanup
    if worker_task:
        worker_task.cancel()
        with suppress(asyncio.CancelledError):
            await worker_task
    await app.state.engine.dispose()


async def files_manager_error_handler(request: Request, exc: FilesManagerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app and the service handles it injects into the routes."""
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Files Manager API",
        version="1.0.0",
        description="Upload, list, publish and serve user files.",
        lifespan=lifespan,
    )

    engine = build_engine(settings.DATABASE_URL)
    session_factory = build_session_factory(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.auth_gate = DatabaseTokenGate(session_factory)
    app.state.catalog = FileCatalog(session_factory)
    app.state.file_storage = FileStorageService(settings.FILE_STORAGE_PATH)
    app.state.job_dispatcher = JobDispatcher(session_factory)
    app.state.file_service = FileService(
        auth_gate=app.state.auth_gate,
        catalog=app.state.catalog,
        storage=app.state.file_storage,
        job_queue=app.state.job_dispatcher,
        page_size=settings.PAGE_SIZE,
        thumbnail_job_type=settings.THUMBNAIL_JOB_TYPE,
    )

    # CORS
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FilesManagerError, files_manager_error_handler)

    # Register routers
    from files_manager.routes.files import router as files_router
    from files_manager.routes.jobs import router as jobs_router
    from files_manager.routes.status import router as status_router
    app.include_router(files_router)
    app.include_router(jobs_router)
    app.include_router(status_router)

    logger.info(f"Storing files under {settings.FILE_STORAGE_PATH}")
    return app
