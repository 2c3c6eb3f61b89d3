import os

# Settings are read at import time
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_travelflow.db")

from decimal import Decimal
from typing import AsyncGenerator, Callable, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from travelflow.core.config import settings
from travelflow.core.database import get_async_session
from travelflow.core.security import create_access_token
from travelflow.db.seeds.initial_data import create_initial_data
from travelflow.main import app
from travelflow.models import Budget, Project, User
from travelflow.models.base import Base
from travelflow.models.shared.enums import UserRole


@pytest.fixture
async def engine(tmp_path):
    """A fresh sqlite database file per test"""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def users(session_maker) -> Dict[str, User]:
    """Seeded default users keyed by role value"""
    async with session_maker() as session:
        await create_initial_data(session)
        result = await session.execute(select(User))
        return {UserRole(u.role).value: u for u in result.scalars().all()}


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_PATH", str(path))
    return path


@pytest.fixture
async def client(session_maker, users, upload_dir) -> AsyncGenerator[AsyncClient, None]:
    """Create test client"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(users) -> Callable[[str], dict]:
    """Bearer headers for the seeded user holding `role`"""
    def _headers(role: str = "employee") -> dict:
        user = users[role]
        token = create_access_token(subject=user.id, claims={"role": user.role.value, "email": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def funded_project(session_maker) -> Dict[str, str]:
    """Active project with a 50000 budget for fiscal year 2024"""
    async with session_maker() as session:
        project = Project(name="Clean Water", description="Rural water access", active=True)
        session.add(project)
        await session.flush()
        budget = Budget(project_id=project.id, amount=Decimal("50000"), fiscal_year=2024, version=1)
        session.add(budget)
        await session.commit()
        return {"project_id": project.id, "budget_id": budget.id}


@pytest.fixture
def travel_payload() -> Callable[..., dict]:
    def _payload(**overrides) -> dict:
        payload = {
            "employeeName": "Default Employee",
            "department": "Programs",
            "designation": "Program Officer",
            "requestType": "normal",
            "project": "Clean Water",
            "purpose": "Field monitoring visit",
            "location": "Pokhara",
            "travelDateFrom": "2024-01-10",
            "travelDateTo": "2024-01-12",
            "transportMode": "bus",
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def valley_payload() -> Callable[..., dict]:
    def _payload(**overrides) -> dict:
        payload = {
            "employeeName": "Default Employee",
            "department": "Programs",
            "designation": "Program Officer",
            "project": "Clean Water",
            "purpose": "meeting",
            "meetingType": "partner",
            "expenseDate": "2024-02-05",
            "location": "Lalitpur",
            "description": "Partner coordination meeting",
            "paymentMethod": "cash",
        }
        payload.update(overrides)
        return payload

    return _payload
