"""
Error mapping tests: unexpected failures and registration races
"""
import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from notes_api.config import Settings
from notes_api.errors import Conflict
from notes_api.services.accounts import AccountService


class TestUnhandledErrors:
    """Unexpected exceptions become a generic 500"""
    
    @pytest.mark.asyncio
    async def test_database_failure_returns_server_error(self, test_app: FastAPI, caplog):
        def broken_session_factory():
            raise RuntimeError("database unavailable")
        
        test_app.state.session_factory = broken_session_factory
        
        # The catch-all handler responds, then Starlette re-raises for the server to log
        transport = ASGITransport(app=test_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with caplog.at_level("ERROR", logger="notes_api.errors"):
                response = await client.post("/api/auth/login", json={
                    "username": "testuser",
                    "password": "testpass123"
                })
        
        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}
        assert "Unhandled error on POST /api/auth/login" in caplog.text
        assert "database unavailable" in caplog.text


class TestRegistrationRace:
    """A unique-constraint violation at commit maps to Conflict"""
    
    @pytest.mark.asyncio
    async def test_integrity_error_becomes_conflict(self, test_app: FastAPI, test_settings: Settings, monkeypatch):
        async with test_app.state.session_factory() as session:
            accounts = AccountService(session, test_settings)
            await accounts.register("raceuser", "race@example.com", "testpass123")
            
            class NoMatch:
                def first(self):
                    return None
            
            async def execute_without_match(*args, **kwargs):
                return NoMatch()
            
            # The existence check misses the row, as if a concurrent request inserted it
            monkeypatch.setattr(session, "execute", execute_without_match)
            
            with pytest.raises(Conflict) as exc_info:
                await accounts.register("raceuser", "race@example.com", "testpass123")
        
        assert exc_info.value.message == "Username or email already exists"
