import tempfile

import pytest_asyncio

from matchstats.config import Config

# Keep test log files out of the working tree
Config.LOG_DIR = tempfile.mkdtemp(prefix='matchstats_logs_')

from matchstats.database.database import Database
from matchstats.services.document_store import DocumentStore


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test_matchstats.db'}")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def store(database):
    return DocumentStore(database.session_factory)
