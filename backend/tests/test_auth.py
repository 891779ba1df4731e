"""
Authentication API tests
"""
import pytest
from httpx import AsyncClient

from notes_api.config import Settings
from notes_api.utils.auth import decode_access_token


class TestAuthAPI:
    """Test authentication endpoints"""
    
    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, test_user_data: dict, test_settings: Settings):
        """Test successful user registration"""
        response = await client.post("/api/auth/register", json=test_user_data)
        
        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"token"}
        
        payload = decode_access_token(data["token"], test_settings)
        assert payload["username"] == "testuser"
        assert payload["sub"]
    
    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, client: AsyncClient, test_user_data: dict):
        """Test registration with duplicate username but different email"""
        response = await client.post("/api/auth/register", json=test_user_data)
        assert response.status_code == 201
        
        response = await client.post("/api/auth/register", json={
            **test_user_data,
            "email": "other@example.com",
        })
        assert response.status_code == 409
        assert response.json() == {"error": "Username or email already exists"}
    
    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_user_data: dict):
        """Test registration with duplicate email but different username"""
        response = await client.post("/api/auth/register", json=test_user_data)
        assert response.status_code == 201
        
        response = await client.post("/api/auth/register", json={
            **test_user_data,
            "username": "otheruser",
        })
        assert response.status_code == 409
    
    @pytest.mark.asyncio
    async def test_register_username_is_case_sensitive(self, client: AsyncClient, test_user_data: dict):
        """Usernames are compared exactly as stored"""
        await client.post("/api/auth/register", json=test_user_data)
        
        response = await client.post("/api/auth/register", json={
            "username": "TestUser",
            "email": "upper@example.com",
            "password": "testpass123",
        })
        assert response.status_code == 201
    
    @pytest.mark.asyncio
    async def test_register_invalid_payload(self, client: AsyncClient):
        """All violated fields are reported in one message"""
        response = await client.post("/api/auth/register", json={
            "username": "ab",
            "email": "not-an-email",
            "password": "123",
        })
        
        assert response.status_code == 400
        error = response.json()["error"]
        assert "username" in error
        assert "email" in error
        assert "password" in error
    
    @pytest.mark.asyncio
    async def test_register_password_too_long(self, client: AsyncClient, test_user_data: dict):
        """Passwords longer than 72 characters are rejected"""
        response = await client.post("/api/auth/register", json={
            **test_user_data,
            "password": "x" * 73,
        })
        
        assert response.status_code == 400
        assert "password" in response.json()["error"]
    
    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user_data: dict):
        """Test successful login"""
        await client.post("/api/auth/register", json=test_user_data)
        
        response = await client.post("/api/auth/login", json={
            "username": "testuser",
            "password": "testpass123"
        })
        
        assert response.status_code == 200
        assert "token" in response.json()
    
    @pytest.mark.asyncio
    async def test_login_failures_are_indistinguishable(self, client: AsyncClient, test_user_data: dict):
        """Wrong password and unknown user produce the same response"""
        await client.post("/api/auth/register", json=test_user_data)
        
        wrong_password = await client.post("/api/auth/login", json={
            "username": "testuser",
            "password": "wrongpass"
        })
        unknown_user = await client.post("/api/auth/login", json={
            "username": "nonexistent",
            "password": "testpass123"
        })
        
        assert wrong_password.status_code == 401
        assert unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}
    
    @pytest.mark.asyncio
    async def test_login_invalid_payload(self, client: AsyncClient):
        """Login payload is validated before lookup"""
        response = await client.post("/api/auth/login", json={"username": "ab"})
        
        assert response.status_code == 400
        assert "password" in response.json()["error"]


class TestAuthGate:
    """Test bearer token handling on protected routes"""
    
    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/notes")
        
        assert response.status_code == 401
        assert response.json() == {"error": "Missing token"}
    
    @pytest.mark.asyncio
    async def test_non_bearer_header(self, client: AsyncClient):
        response = await client.get("/api/notes", headers={"Authorization": "Basic abc"})
        
        assert response.status_code == 401
        assert response.json() == {"error": "Missing token"}
    
    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/notes", headers={"Authorization": "Bearer not.a.token"})
        
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}
    
    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret(self, client: AsyncClient, test_user_data: dict):
        """Tokens signed with a different secret are rejected"""
        from notes_api.utils.auth import issue_token
        
        token = issue_token("some-id", "testuser", Settings(jwt_secret="other-secret"))
        response = await client.get("/api/notes", headers={"Authorization": f"Bearer {token}"})
        
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}


class TestRegisterEmailLimit:
    
    @pytest.mark.asyncio
    async def test_email_over_100_chars(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={
            "username": "longmail",
            "email": "a" * 95 + "@example.com",
            "password": "testpass123",
        })
        
        assert response.status_code == 400
        assert "email" in response.json()["error"]
