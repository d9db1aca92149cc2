"""
Pytest Configuration and Shared Fixtures for the Chopo API Test Suite.

This module provides:
- Session manager assembly with a fast credential verifier
- In-memory data store replacing MySQL
- API client setup with dependency overrides
- Login helpers and factories
- Assertion helpers
"""

import logging
from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_image_repository, get_notification_repository, get_user_repository
from api.main import create_app
from auth.credentials import CredentialVerifier
from auth.rate_limiter import LoginRateLimiter
from auth.session_manager import SessionManager
from auth.session_store import SessionStore
from domain.user import User
from tests.data.factories import ImageFactory, NotificationFactory, UserFactory
from tests.fixtures.assertions import APIAssertions
from tests.fixtures.fakes import (
    FakeAccountStore,
    FakeImageRepository,
    FakeNotificationRepository,
    FakeUserRepository,
    InMemoryDataStore,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Smallest scrypt cost keeps hashing fast in tests
TEST_WORK_FACTOR = 2 ** 4
DEFAULT_PASSWORD = "pw1"


# ============================================================================
# CORE FIXTURES
# ============================================================================

@pytest.fixture(scope='function')
def test_config() -> Dict[str, Any]:
    """Configuration dict as main.py would load it from config.yaml."""
    return {
        'auth': {
            'scrypt_work_factor': TEST_WORK_FACTOR,
            'rate_limit': {'max_attempts': 5, 'window_minutes': 15},
        },
        'images': {
            'max_size_bytes': 1024,
            'upload_requires_admin': False,
        },
    }


@pytest.fixture(scope='function')
def verifier() -> CredentialVerifier:
    return CredentialVerifier(work_factor=TEST_WORK_FACTOR)


@pytest.fixture(scope='function')
def data_store() -> InMemoryDataStore:
    return InMemoryDataStore()


@pytest.fixture(scope='function')
def account_store(data_store) -> FakeAccountStore:
    return FakeAccountStore(data_store)


@pytest.fixture(scope='function')
def session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture(scope='function')
def session_manager(session_store, verifier, account_store) -> SessionManager:
    return SessionManager(session_store, verifier, account_store)


@pytest.fixture(scope='function')
def rate_limiter(test_config) -> LoginRateLimiter:
    rate_config = test_config['auth']['rate_limit']
    return LoginRateLimiter(
        max_attempts=rate_config['max_attempts'],
        window_minutes=rate_config['window_minutes'],
    )


# ============================================================================
# DATA FACTORIES
# ============================================================================

@pytest.fixture(scope='function')
def user_factory(data_store, verifier) -> Callable[..., User]:
    """Create users directly in the in-memory store with a hashed password."""
    def create(username: str = None, password: str = DEFAULT_PASSWORD, **kwargs) -> User:
        if username is not None:
            kwargs['username'] = username
        user = UserFactory(password_hash=verifier.hash(password), **kwargs)
        FakeUserRepository(data_store).insert(user)
        return user

    return create


@pytest.fixture(scope='function')
def image_factory(data_store):
    def create(**kwargs):
        image = ImageFactory(**kwargs)
        FakeImageRepository(data_store).insert(image)
        return image

    return create


@pytest.fixture(scope='function')
def notification_factory(data_store):
    def create(**kwargs):
        notification = NotificationFactory(**kwargs)
        with data_store.lock:
            data_store.notifications.append(notification)
        return notification

    return create


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture(scope='function')
def app(session_manager, rate_limiter, test_config, data_store):
    """FastAPI app wired to the in-memory data store instead of MySQL."""
    application = create_app(
        session_manager=session_manager,
        rate_limiter=rate_limiter,
        config=test_config,
    )
    application.dependency_overrides[get_user_repository] = lambda: FakeUserRepository(data_store)
    application.dependency_overrides[get_image_repository] = lambda: FakeImageRepository(data_store)
    application.dependency_overrides[get_notification_repository] = lambda: FakeNotificationRepository(data_store)
    return application


@pytest.fixture(scope='function')
def api_client(app) -> TestClient:
    with TestClient(app) as client:
        yield client


@pytest.fixture(scope='function')
def login(api_client) -> Callable[..., str]:
    """Log in through the API and return the session ID."""
    def do_login(username: str, password: str = DEFAULT_PASSWORD) -> str:
        response = api_client.post("/api/users", json={"username": username, "password": password})
        assert response.status_code == 200, f"Login failed for {username}: {response.text}"
        return response.json()["session_id"]

    return do_login


# ============================================================================
# ASSERTION HELPERS
# ============================================================================

@pytest.fixture(scope='session')
def assertions() -> APIAssertions:
    """Provide assertion helper functions."""
    return APIAssertions()
