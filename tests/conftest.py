import httpx
import pytest
from httpx import ASGITransport

from bizdir.storage.memory import InMemoryStore


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("SUBMISSION_COOLDOWN_SECONDS", "30")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
async def app(mock_env):
    from bizdir.main import app, lifespan

    async with lifespan(app):
        yield app


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
