"""Service test fixtures - async DB, repository, service and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import device_api.infrastructure.database as db_module
import device_api.models  # noqa: F401
from device_api.core.domain_types import DeviceState
from device_api.db.base import Base
from device_api.infrastructure.database import (
    DatabaseSessionManager, get_db, register_sqlite_functions,
)
from device_api.infrastructure.device_repository import SQLAlchemyDeviceRepository
from device_api.main import app
from device_api.models.device import Device
from device_api.services.device_service import DeviceService


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    register_sqlite_functions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repository(test_db):
    return SQLAlchemyDeviceRepository(test_db)


@pytest.fixture
def service(repository):
    return DeviceService(repository)


@pytest.fixture
def make_device(test_db):
    """Insert a device directly, bypassing the service rules."""
    async def _make(
        name: str = "iPhone",
        brand: str = "Apple",
        state: DeviceState = DeviceState.AVAILABLE,
    ) -> Device:
        device = Device(name=name, brand=brand, state=state)
        test_db.add(device)
        await test_db.commit()
        await test_db.refresh(device)
        return device
    return _make


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
