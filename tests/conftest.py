"""
Test infrastructure for the Todo API.

Strategy
--------
- SQLite in-memory via aiosqlite, built by the same ``build_engine`` as the
  app (StaticPool, so every session shares the one in-memory connection).
- The app's get_db dependency is overridden so every request uses the test
  session factory rather than the production one.
- All tables are created fresh before each test and dropped after.
- ``FakeTodoRepository`` and ``StubAuthContext`` are plain test doubles for
  the service / controller tests, passed in through constructors.
"""
import secrets
import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession

from app.database import Base, build_engine, get_db
from app.main import app
from app.models import AuthToken, Todo, User

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = build_engine(TEST_DATABASE_URL)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class FakeTodoRepository:
    """In-memory TodoRepository; keeps insertion order like the SQL implementation."""

    def __init__(self) -> None:
        self.todos: dict[uuid.UUID, Todo] = {}
        self.deleted_ids: list[uuid.UUID] = []

    async def save(self, todo: Todo) -> Todo:
        if todo.id is None:
            todo.id = uuid.uuid4()
        self.todos[todo.id] = todo
        return todo

    async def find_all(self) -> list[Todo]:
        return list(self.todos.values())

    async def find_all_by_user_id(self, user_id: uuid.UUID) -> list[Todo]:
        return [t for t in self.todos.values() if t.user_id == user_id]

    async def find_by_keyword(self, user_id: uuid.UUID, keyword: str) -> list[Todo]:
        needle = keyword.lower()
        return [
            t
            for t in self.todos.values()
            if t.user_id == user_id
            and (needle in t.title.lower() or needle in t.description.lower())
        ]

    async def find_by_user_id_and_id(self, user_id: uuid.UUID, todo_id: uuid.UUID) -> Todo | None:
        todo = self.todos.get(todo_id)
        if todo is None or todo.user_id != user_id:
            return None
        return todo

    async def delete_by_id(self, todo_id: uuid.UUID) -> None:
        self.deleted_ids.append(todo_id)
        self.todos.pop(todo_id, None)


class StubAuthContext:
    def __init__(self, user: User | None) -> None:
        self.user = user
        self.calls = 0

    def is_authenticated(self) -> bool:
        self.calls += 1
        return self.user is not None

    def get_auth_user(self) -> User | None:
        self.calls += 1
        return self.user


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
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def create_user_with_token(
    name: str = "Test User",
    email: str | None = None,
    expires_at=None,
) -> tuple[User, str]:
    """Persist a user and a bearer token for them; returns (user, token)."""
    token = secrets.token_urlsafe(16)
    async with async_session_test() as session:
        user = User(name=name, email=email or f"{uuid.uuid4().hex[:8]}@example.com")
        session.add(user)
        await session.flush()
        session.add(AuthToken(token=token, user_id=user.id, expires_at=expires_at))
        await session.commit()
    return user, token


@pytest_asyncio.fixture
async def auth_headers() -> dict:
    _, token = await create_user_with_token()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_repository() -> FakeTodoRepository:
    return FakeTodoRepository()


@pytest.fixture
def make_user():
    return create_user_with_token


@pytest.fixture
def make_auth_context():
    return StubAuthContext
