import os
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock
from datetime import datetime

# === Настройка переменных окружения ===
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from userhub.db.base import Base
from userhub.db.database import get_db, enable_sqlite_foreign_keys
from userhub.main import app
from userhub.services import auth, users
from userhub.services.security import hash_password


# === Logger ===

@pytest.fixture
def fake_logger(monkeypatch):
    """
    Подмена логгера сервисов:
    - ничего не пишет «наружу»
    - можно проверять, какие сообщения залогировались.
    """
    class FakeLogger:
        def __init__(self):
            self.infos = []
            self.errors = []
            self.warnings = []

        def info(self, msg, *args, **kwargs):
            self.infos.append(msg)

        def error(self, msg, *args, **kwargs):
            self.errors.append(msg)

        def warning(self, msg, *args, **kwargs):
            self.warnings.append(msg)

    logger = FakeLogger()
    monkeypatch.setattr(auth, "logger", logger)
    monkeypatch.setattr(users, "logger", logger)
    return logger


# === Database & Models (моки) ===

@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def mock_user():
    user = MagicMock()
    user.id = 1
    user.name = "Ann"
    user.email = "ann@x.com"
    user.password = hash_password("secret1")
    user.created_at = datetime(2024, 1, 1, 12, 0, 0)
    return user


@pytest.fixture
def mock_token():
    token = MagicMock()
    token.id = 7
    token.user_id = 1
    token.name = "main"
    return token


# === Реальная БД в памяти для API-тестов ===

@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.pop(get_db, None)


# === Хелперы ===

@pytest.fixture
def signup_user(client):
    """Зарегистрировать пользователя через API и вернуть тело ответа"""
    async def _signup(name="Ann", email="ann@x.com", password="secret1"):
        response = await client.post(
            "/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _signup
