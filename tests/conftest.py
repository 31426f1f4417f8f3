"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import APIConfig
from api.database import BookStore
from api.main import create_app
from api.tokens import TokenService

TEST_SECRET = "test-secret-0123456789abcdef-0123456789abcdef-0123456789abcdef-0123456789abcdef"


@pytest.fixture
def jwt_secret():
    return TEST_SECRET


@pytest.fixture
def api_config(jwt_secret):
    """Configuration isolated from the environment and any .env file."""
    return APIConfig(_env_file=None, jwt_secret=jwt_secret)


@pytest.fixture
def book_store():
    """Store holding the two sample books."""
    return BookStore.with_sample_data()


@pytest.fixture
def token_service(jwt_secret):
    return TokenService(secret=jwt_secret)


@pytest.fixture
def app(api_config, book_store, token_service):
    return create_app(config=api_config, book_store=book_store, token_service=token_service)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    """Authorization header for the admin account obtained through /login."""
    response = client.post("/login", json={"username": "admin", "password": "password123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
