"""Unit tests for container functions.

Tests cover:
- get_logger() adapter configuration from Settings (environment, log_level)
- get_logger() singleton behaviour
- get_token_service() built from Settings
"""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from casbin_guard.core.config import Settings
from casbin_guard.core.container import get_logger, get_token_service
from casbin_guard.infrastructure.security.jwt_service import JWTService
from tests.conftest import TEST_SECRET_KEY


@pytest.fixture(autouse=True)
def fresh_logger():
    get_logger.cache_clear()
    yield
    get_logger.cache_clear()


@pytest.mark.unit
class TestGetLogger:
    """Test get_logger() container function."""

    @pytest.mark.parametrize(
        ("environment", "use_json"),
        [
            ("development", False),
            ("testing", True),
            ("ci", True),
            ("production", True),
        ],
    )
    def test_output_format_follows_environment(self, monkeypatch, environment, use_json):
        monkeypatch.setenv("ENVIRONMENT", environment)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        with patch(
            "casbin_guard.infrastructure.logging.console_adapter.ConsoleAdapter"
        ) as mock_console:
            mock_console.return_value = MagicMock()

            get_logger()

            mock_console.assert_called_once_with(use_json=use_json, level="INFO")

    def test_level_comes_from_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        with patch(
            "casbin_guard.infrastructure.logging.console_adapter.ConsoleAdapter"
        ) as mock_console:
            get_logger()

            assert mock_console.call_args.kwargs["level"] == "DEBUG"

    def test_unknown_level_rejected_by_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with patch(
            "casbin_guard.infrastructure.logging.console_adapter.ConsoleAdapter"
        ) as mock_console:
            with pytest.raises(ValidationError, match="Unknown log level"):
                get_logger()

            mock_console.assert_not_called()

    def test_singleton(self):
        assert get_logger() is get_logger()


@pytest.mark.unit
class TestGetTokenService:
    """Test get_token_service() container function."""

    def test_uses_given_settings(self):
        settings = Settings(
            secret_key=TEST_SECRET_KEY,
            algorithm="HS512",
            access_token_expire_minutes=5,
        )

        service = get_token_service(settings)

        assert isinstance(service, JWTService)
        token = service.generate_access_token("alice")
        payload = service.validate_access_token(token).value
        assert payload["sub"] == "alice"
        assert payload["exp"] - payload["iat"] == 300

    def test_defaults_to_environment_settings(self):
        service = get_token_service()

        token = service.generate_access_token("alice")

        assert service.validate_access_token(token).value["sub"] == "alice"
