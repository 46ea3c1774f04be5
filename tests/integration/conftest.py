import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.database import Database
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.use_cases.plans import SeedPlansUseCase
from src.depends import get_unit_of_work
from tests.fixtures.fake_payment_gateway import FakePaymentGateway
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def database():
    database = Database("sqlite+aiosqlite:///./test.db")
    await database.create_all()
    yield database
    async with database.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest_asyncio.fixture
async def client(database, db_session, payment_gateway):
    app = create_app(ApplicationConfig, database=database, payment_gateway=payment_gateway)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    # ASGITransport does not run the lifespan, so seed here
    await SeedPlansUseCase(SqlAlchemyUnitOfWork(db_session)).execute()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
