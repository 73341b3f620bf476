"""
Test infrastructure for the bulletin board API.

Strategy
--------
- SQLite in-memory via aiosqlite; no Postgres needed in CI.
- StaticPool makes every session share the one in-memory connection,
  since a new SQLite connection would see an empty database.
- ``PRAGMA foreign_keys=ON`` is installed on the test engine so the
  ON DELETE CASCADE behaviour matches Postgres.
- ``get_db`` and ``get_password_hasher`` are overridden: requests use the
  test session factory and a low-cost Argon2 configuration.
- Tables are created before and dropped after every test.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import bulletin.models  # noqa: F401
from bulletin.database import Base, get_db, install_sqlite_foreign_keys
from bulletin.dependencies import get_password_hasher
from bulletin.main import app
from bulletin.middleware import install_query_counter
from bulletin.repositories.board_repository import BoardRepository
from bulletin.repositories.comment_repository import CommentRepository
from bulletin.repositories.post_repository import PostRepository
from bulletin.repositories.user_repository import UserRepository
from bulletin.security import PasswordHasher
from bulletin.services.board_service import BoardService
from bulletin.services.comment_service import CommentService
from bulletin.services.post_service import PostService
from bulletin.services.user_service import UserService

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)
install_sqlite_foreign_keys(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Minimum-cost Argon2 keeps signups fast in tests.
test_hasher = PasswordHasher(
    PasswordHash((Argon2Hasher(time_cost=1, memory_cost=1024, parallelism=1),))
)


# ---------------------------------------------------------------------------
# Dependency overrides
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_password_hasher] = lambda: test_hasher


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """Yield a live AsyncSession for service-level tests."""
    async with async_session_test() as session:
        yield session


@pytest.fixture
def hasher() -> PasswordHasher:
    return test_hasher


@pytest.fixture
def board_service(db_session: AsyncSession) -> BoardService:
    return BoardService(BoardRepository(db_session))


@pytest.fixture
def user_service(db_session: AsyncSession, hasher: PasswordHasher) -> UserService:
    return UserService(UserRepository(db_session), PostRepository(db_session), hasher)


@pytest.fixture
def post_service(db_session: AsyncSession) -> PostService:
    return PostService(
        PostRepository(db_session), BoardRepository(db_session), UserRepository(db_session)
    )


@pytest.fixture
def comment_service(db_session: AsyncSession) -> CommentService:
    return CommentService(
        CommentRepository(db_session), PostRepository(db_session), UserRepository(db_session)
    )


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
