"""
Test fixtures and configuration.
"""

import json
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from solders.keypair import Keypair
from sqlalchemy.ext.asyncio import AsyncSession

from helpers.fake_service import FakeHTTPService
from passerelle.infrastructure.monitoring.system_reporter import SystemReporter
from passerelle.infrastructure.persistence.database import Database


@pytest.fixture
def reporter() -> SystemReporter:
    """Quiet reporter (critical only)."""
    return SystemReporter(name="passerelle_test", verbose=0)


@pytest.fixture
def keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def keypair_path(tmp_path, keypair) -> str:
    """solana-keygen style keypair file."""
    path = tmp_path / "id.json"
    path.write_text(json.dumps(list(bytes(keypair))))
    return str(path)


@pytest_asyncio.fixture(scope="function")
async def test_db(tmp_path) -> AsyncGenerator[Database, None]:
    """
    Fresh SQLite ledger per test.

    Each test gets a clean database file.
    """
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    await db.connect()
    await db.create_tables()

    yield db

    await db.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with test_db.session() as session:
        yield session


@pytest_asyncio.fixture
async def fake_service() -> AsyncGenerator[FakeHTTPService, None]:
    """Running in-process HTTP service."""
    service = FakeHTTPService()
    await service.start()

    yield service

    await service.close()
