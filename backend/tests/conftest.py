"""
Pytest fixtures and configuration
"""
import os
import sys
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from notes_api.config import Settings
from notes_api.database import init_db
from notes_api.main import create_app, prepare_storage


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a per-test SQLite file and upload dir"""
    db_file = tmp_path / "test.db"
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_file.as_posix()}",
        upload_dir=str(tmp_path / "uploads"),
        jwt_secret="test-secret",
        max_upload_bytes=5 * 1024 * 1024,
    )


@pytest_asyncio.fixture(scope="function")
async def test_app(test_settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Create app with its own database (ASGITransport does not run lifespan)"""
    app = create_app(test_settings)
    prepare_storage(test_settings)
    await init_db(app.state.engine)

    yield app

    await app.state.engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client"""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(client: AsyncClient, username: str, email: str = None, password: str = "testpass123") -> str:
    """Register a user and return the bearer token"""
    response = await client.post("/api/auth/register", json={
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
    })
    assert response.status_code == 201, response.text
    return response.json()["token"]


@pytest_asyncio.fixture(scope="function")
async def auth_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, dict], None]:
    """Create authenticated test client"""
    token = await register_user(client, "testuser")
    
    # Set authorization header
    client.headers["Authorization"] = f"Bearer {token}"
    
    yield client, {"username": "testuser", "token": token}


@pytest.fixture
def test_user_data() -> dict:
    """Test user data"""
    return {
        "username": "testuser",
        "email": "testuser@example.com",
        "password": "testpass123"
    }
