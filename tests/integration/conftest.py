import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader

import src.domain.entities  # noqa: F401


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def app_config(tmp_path):
    class TestConfig(ApplicationConfig):
        DB_URI = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
        ENVIRONMENT = "test"
        BASE_URL = "http://test"
        UPLOAD_DIR = str(tmp_path / "uploads")
        EMAIL_ENABLED = False
        ENABLE_LOGGING_MIDDLEWARE = False
        ADMIN_API_KEY = TestDataLoader.get("admin_api_key")

    return TestConfig


@pytest_asyncio.fixture
async def engine(app_config):
    engine = create_async_engine(app_config.DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


def build_app(app_config, db_session):
    from src.api.app import create_app

    app = create_app(app_config)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest.fixture
def app(app_config, db_session):
    return build_app(app_config, db_session)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def upload_dir(app_config):
    from pathlib import Path

    return Path(app_config.UPLOAD_DIR) / "profile"


@pytest.fixture
def app_factory(db_session):
    """Build an app for a config variant, sharing the test database session"""

    def factory(config):
        return build_app(config, db_session)

    return factory
