"""
Shared fixtures for the quickstart tests.

The Auth0 client's network calls (authorize_redirect, authorize_access_token)
are replaced with AsyncMocks; everything else runs through the real
application, session middleware included.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.responses import RedirectResponse
from fastapi.testclient import TestClient

from quickstart.auth.oidc import AUTH0_CLIENT_NAME
from quickstart.config import Settings
from quickstart.main import create_app


TEST_DOMAIN = "quickstart-test.us.auth0.com"
TEST_CLIENT_ID = "test-client-id"
AUTHORIZE_URL = f"https://{TEST_DOMAIN}/authorize?client_id={TEST_CLIENT_ID}"


@pytest.fixture
def mock_settings():
    """Settings for a test Auth0 tenant (no .env file read)"""
    return Settings(
        _env_file=None,
        AUTH0_DOMAIN=TEST_DOMAIN,
        AUTH0_CLIENT_ID=TEST_CLIENT_ID,
        AUTH0_CLIENT_SECRET="test-client-secret",
        SESSION_SECRET="test-session-secret-1234567890123456",
    )


@pytest.fixture
def user_claims():
    """Claims as returned in the parsed ID token"""
    return {
        "sub": "auth0|user-123",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "picture": "https://cdn.example.com/jane.png",
        "nonce": "nonce-abc",
    }


@pytest.fixture
def token_response(user_claims):
    """Token response from the Auth0 token endpoint"""
    return {
        "access_token": "access-123",
        "id_token": "id-123",
        "refresh_token": "refresh-123",
        "token_type": "Bearer",
        "expires_in": 86400,
        "userinfo": user_claims,
    }


@pytest.fixture
def app(mock_settings):
    """Create test FastAPI application"""
    return create_app(mock_settings)


@pytest.fixture
def auth0_client(app, token_response):
    """Registered Auth0 client with its network calls mocked"""
    client = app.state.oauth.create_client(AUTH0_CLIENT_NAME)
    client.authorize_redirect = AsyncMock(
        return_value=RedirectResponse(url=AUTHORIZE_URL, status_code=302)
    )
    client.authorize_access_token = AsyncMock(return_value=token_response)
    client.userinfo = AsyncMock(return_value={})
    return client


@pytest.fixture
def client(app, auth0_client):
    """Create test client (redirects are not followed)"""
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def sign_in(client):
    """Run the login + callback round trip for the mocked user"""

    def _sign_in(redirect_uri: str = "/"):
        response = client.get("/login", params={"redirectUri": redirect_uri})
        assert response.status_code == 302
        return client.get("/callback", params={"code": "auth-code", "state": "state"})

    return _sign_in
