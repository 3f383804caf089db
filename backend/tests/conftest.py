"""
Shared fixtures.

Pipeline tests run FileService against the in-memory fakes. Catalog, worker
and route tests run against a SQLite catalog in a temporary directory.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from files_manager.config import Settings
from files_manager.database import build_engine, build_session_factory, create_tables
from files_manager.main import create_app
from files_manager.models import AuthToken
from files_manager.services.file_service import FileService
from tests.fakes import FakeCatalog, FakeContentStore, FakeJobQueue, FakeTokenGate

OWNER = "user-owner"
OTHER = "user-other"
OWNER_TOKEN = "token-owner"
OTHER_TOKEN = "token-other"


# =============================================================================
# In-memory pipeline fixtures
# =============================================================================

@pytest.fixture
def gate():
    return FakeTokenGate({OWNER_TOKEN: OWNER, OTHER_TOKEN: OTHER})


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def content_store():
    return FakeContentStore()


@pytest.fixture
def job_queue():
    return FakeJobQueue()


@pytest.fixture
def service(gate, catalog, content_store, job_queue):
    return FileService(
        auth_gate=gate,
        catalog=catalog,
        storage=content_store,
        job_queue=job_queue,
        page_size=20,
    )


# =============================================================================
# Database fixtures
# =============================================================================

@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "files"


@pytest.fixture
def settings(tmp_path, storage_root):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        FILE_STORAGE_PATH=str(storage_root),
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = build_engine(settings.DATABASE_URL)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


# =============================================================================
# App fixtures
# =============================================================================

@pytest_asyncio.fixture
async def app(settings):
    app = create_app(settings)
    await create_tables(app.state.engine)
    async with app.state.session_factory() as db:
        db.add_all([
            AuthToken(token=OWNER_TOKEN, user_id=OWNER),
            AuthToken(token=OTHER_TOKEN, user_id=OTHER),
        ])
        await db.commit()
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def owner_headers():
    return {"X-Token": OWNER_TOKEN}


@pytest.fixture
def other_headers():
    return {"X-Token": OTHER_TOKEN}
