"""Pytest configuration and shared fixtures.

Provides:
1. Paths to the Casbin model and policy files shipped in config/
2. A testing environment (SECRET_KEY, ENVIRONMENT) with fresh settings
3. Mock logger and token service fixtures
"""

from pathlib import Path
from unittest.mock import Mock

import pytest

from casbin_guard.core.config import get_settings
from casbin_guard.infrastructure.security.jwt_service import JWTService

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

MODEL_FILE = str(CONFIG_DIR / "model.conf")
SIMPLE_POLICY = str(CONFIG_DIR / "policy.csv")
READ_WRITE_POLICY = str(CONFIG_DIR / "policy_read_write.csv")
USER_ADMIN_POLICY = str(CONFIG_DIR / "policy_user_admin.csv")

TEST_SECRET_KEY = "test-secret-key-0123456789-abcdefghij"


@pytest.fixture(autouse=True)
def testing_environment(monkeypatch):
    """Run every test with testing settings and no cached Settings."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("SECRET_KEY", TEST_SECRET_KEY)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_logger():
    """Provide a mock logger implementing LoggerProtocol.

    Usage:
        def test_something(mock_logger):
            adapter = CasbinAdapter(enforcer, mock_logger)
            ...
            mock_logger.error.assert_called_once()
    """
    logger = Mock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def token_service():
    """JWTService signing with the test secret key."""
    return JWTService(secret_key=TEST_SECRET_KEY)


def subject_alice(request):
    return "alice"


def subject_nil(request):
    return ""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "api: HTTP-level tests through TestClient")
    config.addinivalue_line(
        "markers", "integration: Tests against a real Casbin enforcer"
    )
