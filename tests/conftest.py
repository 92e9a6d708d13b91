"""
PyTest configuration file containing test fixtures.
"""
import os

# Settings are read on import, so the test environment must be set first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ADMIN_IDENTITIES"] = '["root-admin"]'
os.environ.pop("LOG_FILE", None)

from typing import Any, AsyncGenerator, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lifematch.core.access import Role
from lifematch.core.logging import setup_logging
from lifematch.models import Base
from lifematch.repositories.user import RoleRepository
from lifematch.schemas.job import JobListingCreate
from lifematch.schemas.profile import JobProfile, MatrimonialProfile

ADMIN = "admin-1"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging() -> None:
    """Set up logging for tests."""
    setup_logging(log_level="DEBUG")


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with a fresh schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_roles(db_session: AsyncSession) -> Dict[str, Role]:
    """One admin and three users."""
    roles = {ADMIN: Role.ADMIN, ALICE: Role.USER, BOB: Role.USER, CAROL: Role.USER}
    repo = RoleRepository(db_session)
    for identity, role in roles.items():
        await repo.set_role(identity, role)
    await db_session.commit()
    return roles


@pytest.fixture
def job_profile() -> Callable[..., JobProfile]:
    """Build a job profile, overriding any field."""

    def _build(**overrides: Any) -> JobProfile:
        data = {
            "name": "Alice Example",
            "education": "BSc Computer Science",
            "location": "Remote",
            "profession": "Software Engineer",
            "experience": 4,
            "min_salary": 100000,
            "max_salary": 120000,
        }
        data.update(overrides)
        return JobProfile(**data)

    return _build


@pytest.fixture
def matrimonial_profile() -> Callable[..., MatrimonialProfile]:
    """Build a matrimonial profile, overriding any field."""

    def _build(**overrides: Any) -> MatrimonialProfile:
        data = {
            "name": "Sam Example",
            "age": 30,
            "religion": "Hindu",
            "occupation": "Software Engineer",
            "preferred_location": "Mumbai",
            "min_age": 25,
            "max_age": 35,
        }
        data.update(overrides)
        return MatrimonialProfile(**data)

    return _build


@pytest.fixture
def job_listing() -> Callable[..., JobListingCreate]:
    """Build a listing payload, overriding any field."""

    def _build(**overrides: Any) -> JobListingCreate:
        data = {
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Remote",
            "category": "Engineering",
            "job_type": "Full-time",
            "experience_level": "Mid-Level",
            "min_salary": 90000,
            "max_salary": 130000,
        }
        data.update(overrides)
        return JobListingCreate(**data)

    return _build


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the test database."""
    from lifematch.core.dependencies import get_db
    from lifematch.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()
