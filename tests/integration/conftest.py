import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from shortlink.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from shortlink.depends import get_password_hasher, get_unit_of_work
from shortlink.domain.base import utcnow
from shortlink.domain.entities import Account, ProvenanceMetadata
from tests.integration.helpers import ADMIN_ID, ADMIN_PASSWORD, bearer, login, test_hasher


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
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


@pytest_asyncio.fixture
async def admin(db_session):
    """Bootstrap account every API test logs in with"""
    account = Account(
        id=ADMIN_ID, password_hash=test_hasher.hash(ADMIN_PASSWORD), disabled=False
    )
    account.set_provenance(ProvenanceMetadata.created("bootstrap", utcnow()))
    db_session.add(account)
    await db_session.commit()
    return ADMIN_ID


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from shortlink.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_password_hasher] = lambda: test_hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(client, admin):
    data = await login(client)
    return bearer(data["token"]["id"])
