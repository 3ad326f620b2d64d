import os

# Settings are read at import time; point them at an in-memory database before importing the app.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from datetime import date, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import AsyncGenerator, Dict  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.core.models  # noqa: E402,F401
from app.auth.models import User  # noqa: E402
from app.auth.security import hash_password  # noqa: E402
from app.auth.services import issue_token  # noqa: E402
from app.core.models import Fee  # noqa: E402
from app.db.session import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture()
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database per test; StaticPool keeps every session on the same connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data and asserting on it directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    role: str = "student",
    password: str = "password123",
    **fields,
) -> User:
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        **fields,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_fee(db: AsyncSession, student: User, amount: str = "5000", **fields) -> Fee:
    values = {
        "fee_type": "tuition",
        "semester": 3,
        "due_date": date.today() + timedelta(days=30),
        "status": "pending",
    }
    values.update(fields)
    fee = Fee(student_id=student.id, amount=Decimal(amount), **values)
    db.add(fee)
    await db.commit()
    await db.refresh(fee)
    return fee


def bearer(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user)}"}


@pytest.fixture()
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, name="Admin User", email="admin@college.edu", role="admin")


@pytest.fixture()
async def student(db_session: AsyncSession) -> User:
    return await create_user(
        db_session,
        name="Student User",
        email="student@college.edu",
        registration_number="REG-2023-001",
        course="Computer Science",
        semester=3,
    )


@pytest.fixture()
async def other_student(db_session: AsyncSession) -> User:
    return await create_user(
        db_session,
        name="Other Student",
        email="other@college.edu",
        registration_number="REG-2023-002",
        course="Mechanical Engineering",
        semester=5,
    )


@pytest.fixture()
def admin_headers(admin: User) -> Dict[str, str]:
    return bearer(admin)


@pytest.fixture()
def student_headers(student: User) -> Dict[str, str]:
    return bearer(student)


@pytest.fixture()
def make_fee(db_session: AsyncSession):
    """Factory: `await make_fee(student, amount="5000", fee_type="hostel")`."""

    async def _make(owner: User, amount: str = "5000", **fields) -> Fee:
        return await create_fee(db_session, owner, amount, **fields)

    return _make


@pytest.fixture()
def make_user(db_session: AsyncSession):
    async def _make(**fields) -> User:
        return await create_user(db_session, **fields)

    return _make
