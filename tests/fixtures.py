import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from spotmap.core import config
from spotmap.core.database.models import Base

TEST_DATABASE_NAME = "spotmap_test_db"


@pytest_asyncio.fixture
async def engine():
    check_db_name()
    from spotmap.core.database.engine import engine

    yield engine
    await engine.dispose()


@pytest.fixture(scope="session")
def app():
    from spotmap.main import app as main_app

    return main_app


@pytest_asyncio.fixture
async def create(engine):
    async with engine.begin() as conn:
        await conn.run_sync(reset_db)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(reset_db)


@pytest_asyncio.fixture
async def session(engine, create):
    async with AsyncSession(engine) as session:
        yield session


@pytest.fixture
def session_factory(engine, create):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def check_db_name():
    url = make_url(config.SQLALCHEMY_DATABASE_URL)
    db_name = url.database
    if db_name != TEST_DATABASE_NAME:
        pytest.skip(f"Database tests need DATABASE_URL to point at {TEST_DATABASE_NAME}")


def reset_db(connection: Connection):
    connection.execute(text("DROP SCHEMA public CASCADE"))
    connection.execute(text("CREATE SCHEMA public"))
