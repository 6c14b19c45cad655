"""Shared fixtures: in-memory SQLite, a mocked AI client and signed test tokens."""

import json
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from renoplan.config import settings
from renoplan.db.base import Base
from renoplan.dependencies import get_ai_client, get_db
from renoplan.main import create_app
from renoplan.models import project_plan  # noqa: F401

USER_ID = "user_test_123"
OTHER_USER_ID = "user_test_456"

SAMPLE_PLAN = {
    "projectName": "Kitchen Cabinet Installation",
    "materials": [
        {"item": "Upper cabinets", "quantity": "6 units", "estimatedCost": 1200.0},
        {"item": "Cabinet screws", "quantity": "1 box", "estimatedCost": 15.5},
    ],
    "costAnalysis": {
        "totalMaterialsCost": 1215.5,
        "estimatedLaborCost": 800,
        "totalProjectCost": 2015.5,
    },
    "executionSteps": [
        "Remove the old cabinets and patch the wall.",
        "Locate studs and mark a level ledger line.",
        "Hang the upper cabinets, then the base cabinets.",
    ],
    "disposalInfo": {
        "regulationsSummary": "Construction debris must go to a permitted facility.",
        "landfillOptions": [
            {"name": "Northern Area Convenience Center", "address": "2700 Warbro Rd, Midlothian, VA"},
        ],
    },
}


def make_token(user_id: str = USER_ID) -> str:
    return jwt.encode({"sub": user_id}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(user_id: str = USER_ID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def completion(content: str | None) -> SimpleNamespace:
    """Shape of an OpenAI chat completion with one choice."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=100, completion_tokens=200),
    )


@pytest.fixture
def sample_plan() -> dict:
    return json.loads(json.dumps(SAMPLE_PLAN))


@pytest.fixture
def ai_client(sample_plan: dict) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion(json.dumps(sample_plan)))
    return client


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory, ai_client):
    application = create_app()

    async def _get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_ai_client] = lambda: ai_client
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
